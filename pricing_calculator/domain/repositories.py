"""
Repository contracts consumed by the application handlers.

Concrete backends (Clever Cloud catalog, in-memory store) implement these so
that alternate catalogs or durable stores can be swapped in without touching
the calculation procedure or the handlers.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from pricing_calculator.domain.estimation_models import CostEstimation
from pricing_calculator.domain.pricing_models import Instance


class PricingRepository(ABC):
    """Source of instance catalogs and hourly prices."""

    @abstractmethod
    async def list_instances(self, zone_id: str) -> List[Instance]:
        """Return all instances offered in a zone, in catalog order."""

    @abstractmethod
    async def get_instance_by_type(self, instance_type: str) -> Instance:
        """
        Return the instance with the given type.

        Raises:
            PricingLookupError: If the catalog has no such instance type.
        """

    @abstractmethod
    async def get_flavor_price(self, instance_type: str, flavor_name: str) -> Decimal:
        """
        Return the hourly price of a flavor.

        Raises:
            PricingLookupError: If the instance type or flavor is unknown.
            UpstreamUnavailableError: If the catalog could not be reached.
        """


class EstimationRepository(ABC):
    """Keyed store of CostEstimation aggregates."""

    @abstractmethod
    async def save(self, estimation: CostEstimation) -> str:
        """Store a copy of the estimation under its own id and return that id."""

    @abstractmethod
    async def find_by_id(self, estimation_id: str) -> Optional[CostEstimation]:
        """Return a copy of the stored estimation, or None when absent."""

    @abstractmethod
    async def find_by_project_id(self, project_id: str) -> List[CostEstimation]:
        """Return copies of every estimation for a project, in no particular order."""

    @abstractmethod
    async def delete(self, estimation_id: str) -> None:
        """Remove an estimation; deleting an unknown id is a no-op."""

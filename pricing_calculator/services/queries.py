"""
Read-side handlers: listing the instance catalog and fetching saved estimations.
"""
from typing import List, Optional
from dataclasses import dataclass
import logging

from pricing_calculator.domain.errors import InvalidArgumentError, NotFoundError
from pricing_calculator.domain.estimation_models import CostEstimation
from pricing_calculator.domain.pricing_models import Instance
from pricing_calculator.domain.repositories import EstimationRepository, PricingRepository


logger = logging.getLogger(__name__)

DEFAULT_ZONE = "par"  # Paris


@dataclass(frozen=True)
class ListInstancesQuery:
    zone_id: str = ""


@dataclass(frozen=True)
class GetEstimationQuery:
    estimation_id: str


class ListInstancesHandler:
    """Lists the instances available in a zone."""

    def __init__(self, pricing_repository: PricingRepository, default_zone: Optional[str] = None):
        self.pricing_repository = pricing_repository
        self.default_zone = default_zone or DEFAULT_ZONE

    async def handle(self, query: ListInstancesQuery) -> List[Instance]:
        """
        Return the zone's instances in catalog order.

        An empty zone id falls back to the default zone. An empty catalog is
        a valid result.
        """
        zone_id = query.zone_id or self.default_zone
        return await self.pricing_repository.list_instances(zone_id)


class GetEstimationHandler:
    """Fetches a saved estimation by id."""

    def __init__(self, estimation_repository: EstimationRepository):
        self.estimation_repository = estimation_repository

    async def handle(self, query: GetEstimationQuery) -> CostEstimation:
        """
        Raises:
            InvalidArgumentError: If the estimation id is empty
            NotFoundError: If no estimation has that id
        """
        if not query.estimation_id:
            raise InvalidArgumentError("estimation ID is required")

        estimation = await self.estimation_repository.find_by_id(query.estimation_id)
        if estimation is None:
            raise NotFoundError(f"estimation {query.estimation_id} not found")
        return estimation

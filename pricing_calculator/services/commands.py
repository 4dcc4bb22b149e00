"""
Write-side handlers: calculating a cost estimation and saving it.
"""
from typing import List, Optional
from dataclasses import dataclass, field
import logging

from pricing_calculator.domain.errors import InvalidArgumentError
from pricing_calculator.domain.estimation_models import CostEstimation
from pricing_calculator.domain.repositories import EstimationRepository, PricingRepository
from pricing_calculator.services.cost_calculator import (
    AddonSpec,
    RuntimeSpec,
    calculate_cost_estimation,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculateCostCommand:
    project_id: str
    runtime_specs: List[RuntimeSpec] = field(default_factory=list)
    addon_specs: List[AddonSpec] = field(default_factory=list)


@dataclass(frozen=True)
class SaveEstimationCommand:
    estimation: Optional[CostEstimation]


class CalculateCostHandler:
    """
    Prices a set of runtimes and addons against the catalog.

    Every call produces a new estimation with a fresh id, even for identical
    input. Lookups are never retried.
    """

    def __init__(self, pricing_repository: PricingRepository):
        self.pricing_repository = pricing_repository

    async def handle(self, command: CalculateCostCommand) -> CostEstimation:
        estimation = await calculate_cost_estimation(
            command.project_id,
            command.runtime_specs,
            command.addon_specs,
            self.pricing_repository.get_flavor_price,
        )
        logger.info(
            "Calculated estimation %s for project %s: %d runtimes, %d addons",
            estimation.id,
            estimation.project_id,
            len(estimation.runtime_costs),
            len(estimation.addon_costs)
        )
        return estimation


class SaveEstimationHandler:
    """Persists an estimation and returns its id."""

    def __init__(self, estimation_repository: EstimationRepository):
        self.estimation_repository = estimation_repository

    async def handle(self, command: SaveEstimationCommand) -> str:
        if command.estimation is None:
            raise InvalidArgumentError("estimation is required")
        return await self.estimation_repository.save(command.estimation)

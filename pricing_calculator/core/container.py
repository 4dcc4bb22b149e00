"""
Dependency wiring for the application.

Builds the repositories and the four handlers once per application; the
FastAPI app keeps the container on ``app.state``.
"""
from typing import Optional
from dataclasses import dataclass

from pricing_calculator.core.config import Config, config as default_config
from pricing_calculator.domain.repositories import EstimationRepository, PricingRepository
from pricing_calculator.pricing.clever_cloud_client import CleverCloudPricingClient
from pricing_calculator.repository.memory_estimation_store import MemoryEstimationRepository
from pricing_calculator.services.commands import CalculateCostHandler, SaveEstimationHandler
from pricing_calculator.services.queries import GetEstimationHandler, ListInstancesHandler


@dataclass
class Container:
    """Holds the shared repositories and the handlers built on them."""
    pricing_repository: PricingRepository
    estimation_repository: EstimationRepository
    list_instances: ListInstancesHandler
    get_estimation: GetEstimationHandler
    calculate_cost: CalculateCostHandler
    save_estimation: SaveEstimationHandler


def build_container(
    app_config: Optional[Config] = None,
    pricing_repository: Optional[PricingRepository] = None,
    estimation_repository: Optional[EstimationRepository] = None
) -> Container:
    """
    Wire the handler graph.

    Args:
        app_config: Configuration (defaults to the environment-loaded config)
        pricing_repository: Catalog backend (defaults to the Clever Cloud client)
        estimation_repository: Store backend (defaults to a fresh in-memory store)
    """
    app_config = app_config or default_config

    if pricing_repository is None:
        pricing_repository = CleverCloudPricingClient(
            api_url=app_config.CLEVER_CLOUD_API_URL,
            default_zone=app_config.DEFAULT_ZONE,
            timeout=float(app_config.PRICING_TIMEOUT_SECONDS),
            cache_ttl_seconds=app_config.PRICING_CACHE_TTL_SECONDS,
        )
    if estimation_repository is None:
        estimation_repository = MemoryEstimationRepository()

    return Container(
        pricing_repository=pricing_repository,
        estimation_repository=estimation_repository,
        list_instances=ListInstancesHandler(pricing_repository, default_zone=app_config.DEFAULT_ZONE),
        get_estimation=GetEstimationHandler(estimation_repository),
        calculate_cost=CalculateCostHandler(pricing_repository),
        save_estimation=SaveEstimationHandler(estimation_repository),
    )

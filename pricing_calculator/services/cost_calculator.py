"""
Cost calculation procedure.
Turns runtime and addon specifications into a priced CostEstimation.
"""
from typing import Awaitable, Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
import logging

from pricing_calculator.domain.errors import (
    InternalError,
    InvalidArgumentError,
    PricingLookupError,
    UpstreamUnavailableError,
)
from pricing_calculator.domain.estimation_models import AddonCost, CostEstimation, RuntimeCost
from pricing_calculator.domain.pricing_models import HOURS_PER_MONTH


logger = logging.getLogger(__name__)

# (instance_type, flavor_name) -> hourly price
PriceLookup = Callable[[str, str], Awaitable[Decimal]]

# No pricing source exists for addons yet
ADDON_PLACEHOLDER_COST = Decimal("0")


@dataclass(frozen=True)
class RuntimeSpec:
    """A runtime to price: one flavor scaled between min and max instances."""
    instance_type: str
    flavor_name: str
    min_instances: int
    max_instances: int


@dataclass(frozen=True)
class AddonSpec:
    """An addon plan to price."""
    provider_id: str
    plan_id: str


async def calculate_runtime_cost(spec: RuntimeSpec, price_lookup: PriceLookup) -> RuntimeCost:
    """
    Price a single runtime.

    The monthly price is computed first and then scaled by the instance
    count. An inverted range (min > max) is priced as given.

    Raises:
        InvalidArgumentError: If an instance count is negative
        PricingLookupError: If the flavor price cannot be resolved
    """
    if spec.min_instances < 0 or spec.max_instances < 0:
        raise InvalidArgumentError(
            f"instance counts must be non-negative for {spec.instance_type} "
            f"(got min={spec.min_instances}, max={spec.max_instances})"
        )
    if spec.min_instances > spec.max_instances:
        logger.warning(
            "Runtime %s (%s) has min_instances=%d greater than max_instances=%d",
            spec.instance_type,
            spec.flavor_name,
            spec.min_instances,
            spec.max_instances
        )

    hourly_price = await price_lookup(spec.instance_type, spec.flavor_name)

    monthly_price = hourly_price * HOURS_PER_MONTH
    return RuntimeCost.for_flavor(
        spec.instance_type,
        spec.flavor_name,
        min_cost=monthly_price * spec.min_instances,
        max_cost=monthly_price * spec.max_instances,
    )


def calculate_addon_cost(spec: AddonSpec) -> AddonCost:
    return AddonCost.for_plan(spec.provider_id, spec.plan_id, cost=ADDON_PLACEHOLDER_COST)


async def calculate_cost_estimation(
    project_id: str,
    runtime_specs: Sequence[RuntimeSpec],
    addon_specs: Sequence[AddonSpec],
    price_lookup: PriceLookup
) -> CostEstimation:
    """
    Build a fully priced estimation for a project.

    Line items keep the order of the input specs. The first runtime whose
    price cannot be resolved fails the whole calculation; no partial
    estimation is returned.

    Args:
        project_id: Caller-supplied project identifier (not validated)
        runtime_specs: Runtimes to price, in display order
        addon_specs: Addons to price, in display order
        price_lookup: Coroutine resolving an hourly price

    Returns:
        A new CostEstimation with a freshly generated id

    Raises:
        PricingLookupError: Tagged with the offending instance type and flavor
    """
    estimation = CostEstimation(project_id=project_id)

    for index, spec in enumerate(runtime_specs):
        try:
            runtime_cost = await calculate_runtime_cost(spec, price_lookup)
        except PricingLookupError as error:
            raise PricingLookupError(
                f"failed to calculate runtime cost for {spec.instance_type} "
                f"(runtime spec #{index}): {error}",
                instance_type=spec.instance_type,
                flavor_name=spec.flavor_name,
            ) from error
        except (UpstreamUnavailableError, InternalError) as error:
            # Same kind, with the runtime that triggered it
            raise type(error)(
                f"failed to calculate runtime cost for {spec.instance_type} "
                f"(runtime spec #{index}): {error}"
            ) from error
        estimation.add_runtime_cost(runtime_cost)

    for spec in addon_specs:
        estimation.add_addon_cost(calculate_addon_cost(spec))

    return estimation

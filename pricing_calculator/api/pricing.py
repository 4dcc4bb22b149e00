"""
API routes for the pricing service.

Exposes the four pricing operations as JSON endpoints and translates domain
errors into HTTP status codes.
"""
from typing import Any, Dict, List, NoReturn, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from pricing_calculator.core.container import Container
from pricing_calculator.domain.errors import (
    InvalidArgumentError,
    NotFoundError,
    PricingCalculatorError,
    PricingLookupError,
    UpstreamUnavailableError,
)
from pricing_calculator.domain.estimation_models import CostEstimation
from pricing_calculator.services.commands import CalculateCostCommand, SaveEstimationCommand
from pricing_calculator.services.cost_calculator import AddonSpec, RuntimeSpec
from pricing_calculator.services.queries import GetEstimationQuery, ListInstancesQuery


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pricing", tags=["pricing"])


class ListInstancesRequest(BaseModel):
    """Request model for listing the instance catalog."""
    zone_id: str = Field(default="", description="Zone identifier (default zone when empty)")


class GetEstimationRequest(BaseModel):
    """Request model for fetching a saved estimation."""
    estimation_id: str = Field(default="", description="Estimation identifier")


class RuntimeSpecModel(BaseModel):
    """A runtime to price."""
    instance_type: str = Field(..., description="Instance type (e.g. 'node')")
    flavor_name: str = Field(..., description="Flavor name (e.g. 'XS')")
    min_instances: int = Field(default=0, description="Minimum number of instances")
    max_instances: int = Field(default=0, description="Maximum number of instances")


class AddonSpecModel(BaseModel):
    """An addon plan to price."""
    provider_id: str = Field(..., description="Addon provider (e.g. 'postgresql-addon')")
    plan_id: str = Field(..., description="Plan identifier")


class CalculateCostRequest(BaseModel):
    """Request model for cost calculation."""
    project_id: str = Field(default="", description="Project the estimation belongs to")
    runtime_specs: List[RuntimeSpecModel] = Field(default_factory=list)
    addon_specs: List[AddonSpecModel] = Field(default_factory=list)


class RuntimeCostModel(BaseModel):
    runtime_id: str
    display_name: str = ""
    min_cost: float = 0.0
    max_cost: float = 0.0


class AddonCostModel(BaseModel):
    addon_id: str
    display_name: str = ""
    cost: float = 0.0


class EstimationModel(BaseModel):
    """
    Serialized estimation.

    Monthly totals are accepted for symmetry with the response shape but are
    recomputed from the line items.
    """
    id: str = ""
    project_id: str = ""
    min_monthly_cost: Optional[float] = None
    max_monthly_cost: Optional[float] = None
    runtime_costs: List[RuntimeCostModel] = Field(default_factory=list)
    addon_costs: List[AddonCostModel] = Field(default_factory=list)


class SaveEstimationRequest(BaseModel):
    """Request model for saving an estimation."""
    estimation: Optional[EstimationModel] = Field(default=None, description="Estimation to save")


def get_container(request: Request) -> Container:
    """Return the handler container wired for this application."""
    return request.app.state.container


def raise_http_error(error: PricingCalculatorError) -> NoReturn:
    """
    Translate a domain error into an HTTPException.

    Not-found and lookup failures are client-visible and not worth
    retrying; upstream failures are reported as 502 so callers can retry.
    """
    if isinstance(error, InvalidArgumentError):
        status_code = 400
    elif isinstance(error, NotFoundError):
        status_code = 404
    elif isinstance(error, PricingLookupError):
        status_code = 422
    elif isinstance(error, UpstreamUnavailableError):
        status_code = 502
    else:
        status_code = 500

    if status_code >= 500:
        logger.error(f"Pricing request failed: {error}")
    raise HTTPException(status_code=status_code, detail=str(error)) from error


def _estimation_from_model(model: EstimationModel) -> CostEstimation:
    try:
        return CostEstimation.from_dict(model.model_dump())
    except (ValueError, ArithmeticError) as error:
        raise InvalidArgumentError(f"invalid estimation: {str(error)}") from error


@router.post("/instances")
async def list_instances(
    request: ListInstancesRequest,
    container: Container = Depends(get_container)
) -> Dict[str, Any]:
    """
    List the instance catalog for a zone.

    Returns:
        Dictionary with the instances in catalog order
    """
    try:
        instances = await container.list_instances.handle(ListInstancesQuery(zone_id=request.zone_id))
    except PricingCalculatorError as error:
        raise_http_error(error)

    return {"instances": [instance.to_dict() for instance in instances]}


@router.post("/estimations/get")
async def get_estimation(
    request: GetEstimationRequest,
    container: Container = Depends(get_container)
) -> Dict[str, Any]:
    """Fetch a saved estimation. Returns 404 if it does not exist."""
    try:
        estimation = await container.get_estimation.handle(
            GetEstimationQuery(estimation_id=request.estimation_id)
        )
    except PricingCalculatorError as error:
        raise_http_error(error)

    return {"estimation": estimation.to_dict()}


@router.post("/estimations/calculate")
async def calculate_cost(
    request: CalculateCostRequest,
    container: Container = Depends(get_container)
) -> Dict[str, Any]:
    """
    Calculate a min/max monthly estimation for runtimes and addons.

    The estimation is not saved; use /estimations/save for that.
    """
    command = CalculateCostCommand(
        project_id=request.project_id,
        runtime_specs=[
            RuntimeSpec(
                instance_type=spec.instance_type,
                flavor_name=spec.flavor_name,
                min_instances=spec.min_instances,
                max_instances=spec.max_instances,
            )
            for spec in request.runtime_specs
        ],
        addon_specs=[
            AddonSpec(provider_id=spec.provider_id, plan_id=spec.plan_id)
            for spec in request.addon_specs
        ],
    )

    try:
        estimation = await container.calculate_cost.handle(command)
    except PricingCalculatorError as error:
        raise_http_error(error)

    return {"estimation": estimation.to_dict()}


@router.post("/estimations/save")
async def save_estimation(
    request: SaveEstimationRequest,
    container: Container = Depends(get_container)
) -> Dict[str, Any]:
    """Save an estimation and return its id."""
    try:
        estimation = _estimation_from_model(request.estimation) if request.estimation is not None else None
        estimation_id = await container.save_estimation.handle(SaveEstimationCommand(estimation=estimation))
    except PricingCalculatorError as error:
        raise_http_error(error)

    return {"estimation_id": estimation_id}

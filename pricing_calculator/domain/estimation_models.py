"""
Domain models for cost estimations.
Defines the CostEstimation aggregate and its runtime/addon line items.
"""
from typing import List, Dict, Any, Iterable, Optional, Tuple
from dataclasses import dataclass
from decimal import Decimal
import uuid


def _to_decimal(value: Any) -> Decimal:
    """Convert a JSON number (or string) to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class RuntimeCost:
    """Monthly cost range for one runtime (instance type + flavor)."""
    runtime_id: str
    display_name: str
    min_cost: Decimal
    max_cost: Decimal

    def __post_init__(self):
        if not (self.min_cost.is_finite() and self.max_cost.is_finite()):
            raise ValueError(
                f"Runtime cost for {self.runtime_id} must be a finite amount "
                f"(got min={self.min_cost}, max={self.max_cost})"
            )
        if self.min_cost < 0 or self.max_cost < 0:
            raise ValueError(
                f"Runtime cost for {self.runtime_id} must be non-negative "
                f"(got min={self.min_cost}, max={self.max_cost})"
            )

    @classmethod
    def for_flavor(
        cls,
        instance_type: str,
        flavor_name: str,
        min_cost: Decimal,
        max_cost: Decimal
    ) -> "RuntimeCost":
        """Build a line item whose id and display name derive from type and flavor."""
        return cls(
            runtime_id=f"{instance_type}-{flavor_name}",
            display_name=f"{instance_type} ({flavor_name})",
            min_cost=min_cost,
            max_cost=max_cost,
        )

    def copy(self) -> "RuntimeCost":
        return RuntimeCost(
            runtime_id=self.runtime_id,
            display_name=self.display_name,
            min_cost=self.min_cost,
            max_cost=self.max_cost,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "runtime_id": self.runtime_id,
            "display_name": self.display_name,
            "min_cost": float(self.min_cost),
            "max_cost": float(self.max_cost),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuntimeCost":
        return cls(
            runtime_id=data["runtime_id"],
            display_name=data.get("display_name", ""),
            min_cost=_to_decimal(data.get("min_cost", 0)),
            max_cost=_to_decimal(data.get("max_cost", 0)),
        )


@dataclass(frozen=True)
class AddonCost:
    """Monthly cost for one addon plan."""
    addon_id: str
    display_name: str
    cost: Decimal

    def __post_init__(self):
        if not self.cost.is_finite():
            raise ValueError(f"Addon cost for {self.addon_id} must be a finite amount (got {self.cost})")
        if self.cost < 0:
            raise ValueError(f"Addon cost for {self.addon_id} must be non-negative (got {self.cost})")

    @classmethod
    def for_plan(cls, provider_id: str, plan_id: str, cost: Decimal = Decimal("0")) -> "AddonCost":
        return cls(
            addon_id=f"{provider_id}-{plan_id}",
            display_name=f"{provider_id} ({plan_id})",
            cost=cost,
        )

    def copy(self) -> "AddonCost":
        return AddonCost(addon_id=self.addon_id, display_name=self.display_name, cost=self.cost)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "addon_id": self.addon_id,
            "display_name": self.display_name,
            "cost": float(self.cost),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AddonCost":
        return cls(
            addon_id=data["addon_id"],
            display_name=data.get("display_name", ""),
            cost=_to_decimal(data.get("cost", 0)),
        )


class CostEstimation:
    """
    Aggregate root for a project's monthly cost estimation.

    Totals are derived from the line items and recalculated on every
    append; they cannot be assigned directly. Line items are append-only
    and the id never changes once assigned.
    """

    def __init__(
        self,
        project_id: str,
        estimation_id: Optional[str] = None,
        runtime_costs: Iterable[RuntimeCost] = (),
        addon_costs: Iterable[AddonCost] = ()
    ):
        self._id = estimation_id or str(uuid.uuid4())
        self._project_id = project_id
        self._runtime_costs: List[RuntimeCost] = list(runtime_costs)
        self._addon_costs: List[AddonCost] = list(addon_costs)
        self._min_monthly_cost = Decimal("0")
        self._max_monthly_cost = Decimal("0")
        self._recalculate_totals()

    @property
    def id(self) -> str:
        return self._id

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def min_monthly_cost(self) -> Decimal:
        return self._min_monthly_cost

    @property
    def max_monthly_cost(self) -> Decimal:
        return self._max_monthly_cost

    @property
    def runtime_costs(self) -> Tuple[RuntimeCost, ...]:
        return tuple(self._runtime_costs)

    @property
    def addon_costs(self) -> Tuple[AddonCost, ...]:
        return tuple(self._addon_costs)

    def add_runtime_cost(self, cost: RuntimeCost) -> None:
        self._runtime_costs.append(cost)
        self._recalculate_totals()

    def add_addon_cost(self, cost: AddonCost) -> None:
        self._addon_costs.append(cost)
        self._recalculate_totals()

    @property
    def total_runtime_min_cost(self) -> Decimal:
        return sum((rc.min_cost for rc in self._runtime_costs), Decimal("0"))

    @property
    def total_runtime_max_cost(self) -> Decimal:
        return sum((rc.max_cost for rc in self._runtime_costs), Decimal("0"))

    @property
    def total_addon_cost(self) -> Decimal:
        return sum((ac.cost for ac in self._addon_costs), Decimal("0"))

    def _recalculate_totals(self) -> None:
        addon_total = self.total_addon_cost
        self._min_monthly_cost = self.total_runtime_min_cost + addon_total
        self._max_monthly_cost = self.total_runtime_max_cost + addon_total

    def copy(self) -> "CostEstimation":
        """Return a fully independent copy, line items included."""
        return CostEstimation(
            project_id=self._project_id,
            estimation_id=self._id,
            runtime_costs=[rc.copy() for rc in self._runtime_costs],
            addon_costs=[ac.copy() for ac in self._addon_costs],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self._id,
            "project_id": self._project_id,
            "min_monthly_cost": float(self._min_monthly_cost),
            "max_monthly_cost": float(self._max_monthly_cost),
            "runtime_costs": [rc.to_dict() for rc in self._runtime_costs],
            "addon_costs": [ac.to_dict() for ac in self._addon_costs],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CostEstimation":
        """
        Rebuild an aggregate from a serialized payload.

        Any totals present in the payload are ignored; they are re-derived
        from the line items.
        """
        return cls(
            project_id=data.get("project_id", ""),
            estimation_id=data.get("id") or None,
            runtime_costs=[RuntimeCost.from_dict(item) for item in data.get("runtime_costs", [])],
            addon_costs=[AddonCost.from_dict(item) for item in data.get("addon_costs", [])],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CostEstimation):
            return NotImplemented
        return (
            self._id == other._id
            and self._project_id == other._project_id
            and self._min_monthly_cost == other._min_monthly_cost
            and self._max_monthly_cost == other._max_monthly_cost
            and self._runtime_costs == other._runtime_costs
            and self._addon_costs == other._addon_costs
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"CostEstimation(id={self._id!r}, project_id={self._project_id!r}, "
            f"min_monthly_cost={self._min_monthly_cost}, max_monthly_cost={self._max_monthly_cost}, "
            f"runtime_costs={len(self._runtime_costs)}, addon_costs={len(self._addon_costs)})"
        )

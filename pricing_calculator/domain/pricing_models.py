"""
Domain models for the instance catalog.
Defines instance types and their sized flavors.
"""
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
from decimal import Decimal


HOURS_PER_MONTH = 730  # Standard assumption: 24/7 operation
HIGH_MEMORY_THRESHOLD_MB = 4096


@dataclass(frozen=True)
class Flavor:
    """A sized configuration (memory/CPU) of an instance type."""
    name: str
    memory_mb: int
    cpu_count: int
    price_per_hour: Decimal
    available: bool = True

    def __post_init__(self):
        if self.memory_mb < 0 or self.cpu_count < 0:
            raise ValueError(
                f"Flavor {self.name} must have non-negative resources "
                f"(got memory_mb={self.memory_mb}, cpu_count={self.cpu_count})"
            )
        if not self.price_per_hour.is_finite() or self.price_per_hour < 0:
            raise ValueError(f"Flavor {self.name} must have a non-negative price (got {self.price_per_hour})")

    @property
    def monthly_price(self) -> Decimal:
        """Monthly price assuming 730 hours of operation."""
        return self.price_per_hour * HOURS_PER_MONTH

    @property
    def is_high_memory(self) -> bool:
        return self.memory_mb > HIGH_MEMORY_THRESHOLD_MB

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "memory_mb": self.memory_mb,
            "cpu_count": self.cpu_count,
            "price_per_hour": float(self.price_per_hour),
            "monthly_price": float(self.monthly_price),
            "available": self.available,
            "is_high_memory": self.is_high_memory,
        }


@dataclass
class Instance:
    """
    A compute offering from the catalog.

    Flavors keep the order in which the catalog listed them.
    """
    type: str
    name: str
    version: str
    flavors: List[Flavor] = field(default_factory=list)

    def add_flavor(self, flavor: Flavor) -> None:
        self.flavors.append(flavor)

    def copy(self) -> "Instance":
        """Return an instance with its own flavor list; flavors are immutable."""
        return Instance(type=self.type, name=self.name, version=self.version, flavors=list(self.flavors))

    @property
    def available_flavors(self) -> List[Flavor]:
        return [flavor for flavor in self.flavors if flavor.available]

    def find_flavor_by_name(self, name: str) -> Optional[Flavor]:
        """Return the first flavor with the given name, or None."""
        for flavor in self.flavors:
            if flavor.name == name:
                return flavor
        return None

    @property
    def min_monthly_price(self) -> Decimal:
        """
        Cheapest monthly price among available flavors.

        Defined as 0 when no flavor is available.
        """
        prices = [flavor.monthly_price for flavor in self.available_flavors]
        if not prices:
            return Decimal("0")
        return min(prices)

    @property
    def max_monthly_price(self) -> Decimal:
        """Most expensive monthly price among available flavors (0 if none)."""
        prices = [flavor.monthly_price for flavor in self.available_flavors]
        if not prices:
            return Decimal("0")
        return max(prices)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type,
            "name": self.name,
            "version": self.version,
            "flavors": [flavor.to_dict() for flavor in self.flavors],
            "min_monthly_price": float(self.min_monthly_price),
            "max_monthly_price": float(self.max_monthly_price),
        }

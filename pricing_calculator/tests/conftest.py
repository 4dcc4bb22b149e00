"""
Shared pytest fixtures for pricing calculator tests.
"""

import sys
from decimal import Decimal
from pathlib import Path
from typing import Dict, List

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from pricing_calculator.core.config import Config
from pricing_calculator.core.container import build_container
from pricing_calculator.domain.errors import PricingLookupError
from pricing_calculator.domain.pricing_models import Flavor, Instance
from pricing_calculator.domain.repositories import PricingRepository
from pricing_calculator.main import create_app
from pricing_calculator.repository.memory_estimation_store import MemoryEstimationRepository


class FakePricingRepository(PricingRepository):
    """In-memory catalog keyed by zone; records the zones it was asked for."""

    def __init__(self, catalogs: Dict[str, List[Instance]], default_zone: str = "par"):
        self.catalogs = catalogs
        self.default_zone = default_zone
        self.requested_zones: List[str] = []

    async def list_instances(self, zone_id: str) -> List[Instance]:
        self.requested_zones.append(zone_id)
        return list(self.catalogs.get(zone_id, []))

    async def get_instance_by_type(self, instance_type: str) -> Instance:
        for instance in await self.list_instances(self.default_zone):
            if instance.type == instance_type:
                return instance
        raise PricingLookupError(f"instance type {instance_type} not found", instance_type=instance_type)

    async def get_flavor_price(self, instance_type: str, flavor_name: str) -> Decimal:
        instance = await self.get_instance_by_type(instance_type)
        flavor = instance.find_flavor_by_name(flavor_name)
        if flavor is None:
            raise PricingLookupError(
                f"flavor {flavor_name} not found for instance type {instance_type}",
                instance_type=instance_type,
                flavor_name=flavor_name,
            )
        return flavor.price_per_hour


@pytest.fixture
def sample_instances():
    """Small catalog with two instance types."""
    node = Instance(type="node", name="Node.js", version="20")
    node.add_flavor(Flavor("pico", 256, 1, Decimal("0.0029"), True))
    node.add_flavor(Flavor("XS", 1024, 1, Decimal("0.0233"), True))
    node.add_flavor(Flavor("XL", 16384, 8, Decimal("0.3722"), False))

    xs = Instance(type="XS", name="Extra small", version="1")
    xs.add_flavor(Flavor("pico", 256, 1, Decimal("0.02"), True))
    return [node, xs]


@pytest.fixture
def pricing_repository(sample_instances):
    """Fake catalog serving sample_instances for the default zone."""
    return FakePricingRepository({"par": sample_instances})


@pytest.fixture
def estimation_repository():
    """Fresh in-memory estimation store."""
    return MemoryEstimationRepository()


@pytest.fixture
def test_config(tmp_path):
    """Configuration pointing at a temporary static directory."""
    class TestConfig(Config):
        APP_ENV = "development"
        STATIC_DIR = str(tmp_path / "web")
    return TestConfig()


@pytest.fixture
def container(test_config, pricing_repository, estimation_repository):
    return build_container(test_config, pricing_repository, estimation_repository)


@pytest.fixture
def client(test_config, container):
    """FastAPI test client wired with the fake catalog."""
    return TestClient(create_app(test_config, container))

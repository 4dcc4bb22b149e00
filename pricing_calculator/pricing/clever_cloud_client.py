"""
Clever Cloud product catalog client.
Uses the public REST API (no authentication required for the instance list).
"""
from typing import Any, Dict, List, Optional, Tuple
from decimal import Decimal
import asyncio
import logging
import threading
import time

import httpx

from pricing_calculator.core.config import config
from pricing_calculator.domain.errors import (
    InternalError,
    PricingLookupError,
    UpstreamUnavailableError,
)
from pricing_calculator.domain.pricing_models import Flavor, Instance
from pricing_calculator.domain.repositories import PricingRepository
from pricing_calculator.resilience.circuit_breaker import CircuitBreaker


logger = logging.getLogger(__name__)


class CleverCloudPricingClient(PricingRepository):
    """Client for the Clever Cloud instance catalog."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        default_zone: Optional[str] = None,
        timeout: Optional[float] = None,
        cache_ttl_seconds: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        circuit_breaker: Optional[CircuitBreaker] = None
    ):
        """
        Initialize the catalog client.

        Args:
            api_url: Catalog API base URL (defaults to CLEVER_CLOUD_API_URL)
            default_zone: Zone used for price lookups (defaults to DEFAULT_ZONE)
            timeout: Per-request timeout in seconds (defaults to PRICING_TIMEOUT_SECONDS)
            cache_ttl_seconds: Catalog cache lifetime; 0 disables caching
            transport: Optional httpx transport, used by tests
            circuit_breaker: Optional breaker; one is created per client otherwise
        """
        self.api_url = (api_url or config.CLEVER_CLOUD_API_URL).rstrip("/")
        self.default_zone = default_zone or config.DEFAULT_ZONE
        self.timeout = timeout if timeout is not None else float(config.PRICING_TIMEOUT_SECONDS)
        self.cache_ttl_seconds = (
            cache_ttl_seconds if cache_ttl_seconds is not None else config.PRICING_CACHE_TTL_SECONDS
        )
        self._transport = transport
        self.circuit_breaker = circuit_breaker or CircuitBreaker("clever_cloud_pricing")

        # zone_id -> (instances, fetched_at)
        self._cache: Dict[str, Tuple[List[Instance], float]] = {}
        self._cache_lock = threading.Lock()

    def _get_cached_instances(self, zone_id: str) -> Optional[List[Instance]]:
        """Get cached catalog if caching is enabled and the entry is still valid."""
        if self.cache_ttl_seconds <= 0:
            return None
        with self._cache_lock:
            entry = self._cache.get(zone_id)
            if entry is None:
                return None
            instances, fetched_at = entry
            if time.monotonic() - fetched_at < self.cache_ttl_seconds:
                return [instance.copy() for instance in instances]
            del self._cache[zone_id]
        return None

    def _cache_instances(self, zone_id: str, instances: List[Instance]) -> None:
        if self.cache_ttl_seconds <= 0:
            return
        with self._cache_lock:
            self._cache[zone_id] = ([instance.copy() for instance in instances], time.monotonic())

    def _parse_instances(self, payload: Any) -> List[Instance]:
        """
        Convert the catalog payload into domain instances.

        The catalog only lists orderable flavors, so every flavor is available.
        """
        if not isinstance(payload, list):
            raise ValueError("expected a JSON array of products")

        instances = []
        for product in payload:
            instance = Instance(
                type=product["type"],
                name=product.get("name", ""),
                version=product.get("version", ""),
            )
            for raw_flavor in product.get("flavors") or []:
                instance.add_flavor(Flavor(
                    name=raw_flavor["name"],
                    memory_mb=int(raw_flavor.get("mem", 0)),
                    cpu_count=int(raw_flavor.get("cpus", 0)),
                    price_per_hour=Decimal(str(raw_flavor.get("price", 0))),
                    available=True,
                ))
            instances.append(instance)
        return instances

    async def list_instances(self, zone_id: str) -> List[Instance]:
        """
        Fetch every instance offered in a zone.

        Args:
            zone_id: Zone identifier (e.g. 'par')

        Returns:
            Instances in catalog order (possibly empty)

        Raises:
            UpstreamUnavailableError: If the catalog is unreachable or returns non-200
            InternalError: If the response cannot be decoded
        """
        cached = self._get_cached_instances(zone_id)
        if cached is not None:
            return cached

        if not self.circuit_breaker.allow_request():
            raise UpstreamUnavailableError(
                "Pricing catalog temporarily unavailable (circuit breaker open)"
            )

        url = f"{self.api_url}/products/instances"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params={"zone_id": zone_id})
                response.raise_for_status()
                # Decimal keeps catalog prices exact
                payload = response.json(parse_float=Decimal)
        except asyncio.CancelledError:
            self.circuit_breaker.release()
            raise
        except httpx.HTTPStatusError as error:
            self.circuit_breaker.record_failure()
            logger.error(f"Pricing catalog HTTP error: {error}")
            raise UpstreamUnavailableError(
                f"Failed to fetch instances: unexpected status code {error.response.status_code}"
            ) from error
        except httpx.RequestError as error:
            self.circuit_breaker.record_failure()
            logger.error(f"Pricing catalog request error: {error}")
            raise UpstreamUnavailableError(f"Failed to fetch instances: {str(error)}") from error
        except ValueError as error:
            # The upstream answered; the payload is the problem
            self.circuit_breaker.record_success()
            logger.error(f"Error decoding pricing catalog response: {error}")
            raise InternalError(f"Failed to decode catalog response: {str(error)}") from error

        try:
            instances = self._parse_instances(payload)
        except (KeyError, TypeError, ValueError, ArithmeticError) as error:
            self.circuit_breaker.record_success()
            logger.error(f"Error parsing pricing catalog response: {error}")
            raise InternalError(f"Failed to decode catalog response: {str(error)}") from error

        self.circuit_breaker.record_success()
        logger.info("Fetched %d instances for zone %s", len(instances), zone_id)
        self._cache_instances(zone_id, instances)
        return instances

    async def get_instance_by_type(self, instance_type: str) -> Instance:
        instances = await self.list_instances(self.default_zone)
        for instance in instances:
            if instance.type == instance_type:
                return instance

        raise PricingLookupError(
            f"instance type {instance_type} not found",
            instance_type=instance_type,
        )

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

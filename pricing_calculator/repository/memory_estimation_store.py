"""
In-memory estimation store.

Keeps CostEstimation aggregates for the lifetime of the process. Every value
crossing the store boundary is copied, so callers never share state with the
store.
"""
import logging
import threading
from typing import Dict, List, Optional

from pricing_calculator.domain.errors import InvalidArgumentError
from pricing_calculator.domain.estimation_models import CostEstimation
from pricing_calculator.domain.repositories import EstimationRepository


logger = logging.getLogger(__name__)


class MemoryEstimationRepository(EstimationRepository):
    """
    Thread-safe in-memory EstimationRepository.

    No TTL: entries live until deleted or the process exits.
    """

    def __init__(self):
        self._estimations: Dict[str, CostEstimation] = {}
        self._lock = threading.RLock()

    async def save(self, estimation: CostEstimation) -> str:
        """
        Store a copy of the estimation keyed by its id.

        Re-saving an existing id overwrites the previous entry.

        Raises:
            InvalidArgumentError: If estimation is None.
        """
        if estimation is None:
            raise InvalidArgumentError("estimation is required")

        # Copy outside the lock; the caller's object is not shared with us
        stored = estimation.copy()
        with self._lock:
            self._estimations[stored.id] = stored

        logger.debug("Saved estimation %s for project %s", stored.id, stored.project_id)
        return stored.id

    async def find_by_id(self, estimation_id: str) -> Optional[CostEstimation]:
        with self._lock:
            estimation = self._estimations.get(estimation_id)
            if estimation is None:
                return None
            return estimation.copy()

    async def find_by_project_id(self, project_id: str) -> List[CostEstimation]:
        with self._lock:
            return [
                estimation.copy()
                for estimation in self._estimations.values()
                if estimation.project_id == project_id
            ]

    async def delete(self, estimation_id: str) -> None:
        with self._lock:
            removed = self._estimations.pop(estimation_id, None)
        if removed is not None:
            logger.debug("Deleted estimation %s", estimation_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._estimations)

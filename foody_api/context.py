"""
Shared state for the ordered Foody test sequence
Carries the last created food id between cases and times every API call
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, List, Optional

from foody_api.data_factory import DataFactory
from foody_api.rest_client import ApiResult, FoodyRestClient

logger = logging.getLogger(__name__)


@dataclass
class OperationRecord:
    """Outcome of one timed API call"""
    operation: str
    status_code: int
    duration: float


@dataclass
class FoodyTestContext:
    """Explicit context threaded through the ordered cases"""
    client: FoodyRestClient
    data_factory: DataFactory
    last_created_food_id: Optional[str] = None
    records: List[OperationRecord] = field(default_factory=list)

    async def time_operation(self, operation_name: str, coro: Awaitable[ApiResult]) -> ApiResult:
        """Await an API call and record its status and duration"""
        start_time = time.time()
        result = await coro
        duration = time.time() - start_time
        self.records.append(OperationRecord(operation_name, result.status_code, duration))
        return result

    def remember_created_food(self, food_id: str):
        self.last_created_food_id = food_id
        self.data_factory.track_food_id(food_id)

    def forget_created_food(self, food_id: str):
        """Mark a created food as deleted so cleanup skips it"""
        self.data_factory.untrack_food_id(food_id)

    async def cleanup_created_foods(self) -> List[str]:
        """Delete foods this run created that are still on the server"""
        removed = []
        for food_id in list(self.data_factory.created_ids):
            result = await self.client.delete_food(food_id)
            if result.status_code == 200:
                self.data_factory.untrack_food_id(food_id)
                removed.append(food_id)
            else:
                logger.warning(f"Could not remove leftover food {food_id}: {result.status_code} {result.text}")
        return removed

    def require_created_food_id(self) -> str:
        if not self.last_created_food_id:
            raise AssertionError("No food id was captured by the create step")
        return self.last_created_food_id

    def summary_lines(self) -> List[str]:
        lines = []
        for record in self.records:
            lines.append(f"{record.operation}: {record.status_code} ({record.duration:.2f}s)")
        if self.records:
            total = sum(record.duration for record in self.records)
            lines.append(f"{len(self.records)} calls, {total:.2f}s total")
        return lines

"""
Shared behaviour for the developer-mode (in-memory) clients.

Mock clients never touch the network. They fabricate responses after an
artificial delay scaled by ``config.mock_delay_scale`` and keep any mutable
state in per-instance stores that reset on restart.
"""

import asyncio
import copy
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Optional, TypeVar

from ayusetu.config import AyuSetuConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MOCK_DELAY = 1.0


class MockClientBase:
    label = "MOCK"

    def __init__(self, config: Optional[AyuSetuConfig] = None) -> None:
        self.config = config or AyuSetuConfig()
        logger.info("[%s] Client initialised (delay_scale=%s)", self.label, self.config.mock_delay_scale)

    async def _delay(self, seconds: float = DEFAULT_MOCK_DELAY) -> None:
        scaled = seconds * self.config.mock_delay_scale
        if scaled > 0:
            await asyncio.sleep(scaled)

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)

    @staticmethod
    def _new_id(prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"

    @staticmethod
    def _iso_now() -> str:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    @staticmethod
    def _copy(value: T) -> T:
        # Callers must not be able to mutate the in-memory stores
        return copy.deepcopy(value)

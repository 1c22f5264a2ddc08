from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence

from confluence.core.models import Candle


class CandleSource(ABC):
    @abstractmethod
    async def fetch_session(self) -> Sequence[Candle]:
        """Return the session's candles in chronological order."""
        raise NotImplementedError


class TimeProvider(ABC):
    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError

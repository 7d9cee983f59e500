"""Production calendar providers.

A provider answers whether days are working days according to the official
Russian production calendar. The default implementation talks to the
isdayoff.ru service:

    GET /api/getdata?year=2026&month=5   -> "1110000110000011000001100000110"
    GET /20260509                        -> "1"

Each digit is one day: "0" is a working day, anything else is a day off.
Providers raise ProviderError on any failure; WorkingDayCache turns that
into the weekend-only fallback.
"""

import calendar
import logging
from datetime import date
from typing import List, Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://isdayoff.ru"
DEFAULT_TIMEOUT = 10.0


class ProviderError(Exception):
    """Raised when the calendar service cannot answer."""
    pass


class CalendarProvider(Protocol):
    """Source of day-type data for the working-day cache."""

    async def fetch_month(self, year: int, month: int) -> List[bool]:
        """One flag per day of month, True for working days."""
        ...

    async def fetch_day(self, day: date) -> bool:
        """True if the day is a working day."""
        ...


def _decode_day_flags(payload: str) -> List[bool]:
    """Decode an isdayoff digit string into working-day flags."""
    text = payload.strip()
    if not text or not text.isdigit():
        raise ProviderError(f"Unexpected calendar payload: {text[:40]!r}")
    return [ch == "0" for ch in text]


class IsDayOffProvider:
    """Async client for the isdayoff.ru production calendar API.

    Pass ``client`` to share a connection pool (or a mock transport in
    tests); otherwise a client is created per request.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _get(self, path: str, params: Optional[dict] = None) -> str:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} {params or ''}")
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderError(f"Timeout requesting {url}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Request to {url} failed: {e}") from e
        return response.text

    async def fetch_month(self, year: int, month: int) -> List[bool]:
        payload = await self._get("/api/getdata", params={"year": year, "month": month})
        flags = _decode_day_flags(payload)
        days_in_month = calendar.monthrange(year, month)[1]
        if len(flags) < days_in_month:
            raise ProviderError(
                f"Calendar for {year}-{month:02d} has {len(flags)} days, expected {days_in_month}"
            )
        return flags[:days_in_month]

    async def fetch_day(self, day: date) -> bool:
        payload = await self._get(f"/{day.strftime('%Y%m%d')}")
        flags = _decode_day_flags(payload)
        # Single-day answers are one digit; longer strings are service error codes (100, 101, 199).
        if len(flags) != 1:
            raise ProviderError(f"Calendar service error code {payload.strip()} for {day.isoformat()}")
        return flags[0]


class WeekendOnlyProvider:
    """Offline provider: Monday to Friday are working days, no holidays."""

    async def fetch_month(self, year: int, month: int) -> List[bool]:
        days_in_month = calendar.monthrange(year, month)[1]
        return [date(year, month, d).weekday() < 5 for d in range(1, days_in_month + 1)]

    async def fetch_day(self, day: date) -> bool:
        return day.weekday() < 5

"""workdays - Production calendar access.

Scope:
- Providers that fetch day types from the calendar service (provider.py)
- Process-wide working-day cache with weekend fallback (cache.py)
"""

from .provider import (
    CalendarProvider,
    IsDayOffProvider,
    WeekendOnlyProvider,
    ProviderError,
)

from .cache import (
    WorkingDayCache,
    normalize_date,
    weekend_heuristic,
    iter_months,
)

__all__ = [
    # Providers
    "CalendarProvider",
    "IsDayOffProvider",
    "WeekendOnlyProvider",
    "ProviderError",
    # Cache
    "WorkingDayCache",
    "normalize_date",
    "weekend_heuristic",
    "iter_months",
]

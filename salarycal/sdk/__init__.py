"""Salary Calendar SDK - Core functionality for salary schedules."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_effective_settings,
    get_profile_path,
    load_profile,
    save_profile,
    get_effective_profile,
    ConfigNotFoundError,
    ProfileNotFoundError,
)

from .schemas import (
    SettingsSchema,
    ProfileSchema,
)

from .workdays import (
    CalendarProvider,
    IsDayOffProvider,
    WeekendOnlyProvider,
    ProviderError,
    WorkingDayCache,
)

from .vacations import (
    VacationRange,
    is_vacation_day,
    normalize_vacations,
    count_working_days,
)

from .vacation_parser import (
    parse_date,
    parse_line,
    parse_text,
    parse_file,
    read_vacation_file,
    validate_upload,
    ParseError,
    VacationValidationError,
    UploadRejectedError,
    MIN_YEAR,
)

from .payment_dates import (
    PaymentDateResolver,
    payment_days_for_month,
    DEFAULT_PAYMENT_DAYS,
)

from .periods import (
    Period,
    PeriodCalculator,
    PeriodRule,
    daily_rate,
)

from .schedule import (
    SalaryEvent,
    HourlyRate,
    SalaryScheduleGenerator,
    MAX_SALARY_AMOUNT,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_effective_settings",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_effective_profile",
    "ConfigNotFoundError",
    "ProfileNotFoundError",
    "SettingsSchema",
    "ProfileSchema",
    # Production calendar
    "CalendarProvider",
    "IsDayOffProvider",
    "WeekendOnlyProvider",
    "ProviderError",
    "WorkingDayCache",
    # Vacations
    "VacationRange",
    "is_vacation_day",
    "normalize_vacations",
    "count_working_days",
    "parse_date",
    "parse_line",
    "parse_text",
    "parse_file",
    "read_vacation_file",
    "validate_upload",
    "ParseError",
    "VacationValidationError",
    "UploadRejectedError",
    "MIN_YEAR",
    # Schedule
    "PaymentDateResolver",
    "payment_days_for_month",
    "DEFAULT_PAYMENT_DAYS",
    "Period",
    "PeriodCalculator",
    "PeriodRule",
    "daily_rate",
    "SalaryEvent",
    "HourlyRate",
    "SalaryScheduleGenerator",
    "MAX_SALARY_AMOUNT",
]

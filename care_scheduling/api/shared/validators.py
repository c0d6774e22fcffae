"""
Availability Validators

Boundary checks and the typed input construction pass for the timeslot API.
Storage rows (snake_case column names) become the frozen models the engine
consumes; a malformed row is skipped and logged instead of aborting the
whole request.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from care_scheduling.care_scheduling.scheduling.exceptions import (
    DateRangeTooLong,
    InvalidDateRange,
    InvalidDuration,
    InvalidWindow,
    ValidationError,
)
from care_scheduling.care_scheduling.scheduling.models import (
    DateOverride,
    ExistingBooking,
    OutOfOfficePeriod,
    OverrideWindow,
    WeeklyWindow,
)
from care_scheduling.care_scheduling.scheduling.scheduler import count_days
from care_scheduling.care_scheduling.scheduling.timezone import is_valid_timezone, to_date

logger = logging.getLogger(__name__)


def validate_date_string(date_str: Any, field_name: str = "date") -> date:
    """
    Validate a date string (YYYY-MM-DD) and return it as a date.

    Args:
        date_str: Date string to validate
        field_name: Name of field for error messages

    Returns:
        date: Parsed date

    Raises:
        ValidationError: If the value is missing or not a valid date
    """
    if not date_str:
        raise ValidationError(f"{field_name} is required")

    if isinstance(date_str, str):
        date_str = date_str.strip()

    try:
        return to_date(date_str)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field_name} format. Use YYYY-MM-DD") from exc


def validate_duration(value: Any, default: int) -> int:
    """
    Validate a session duration in minutes.

    Missing values fall back to ``default``; numeric strings and integral
    floats ("45", "45.0", 45.0) are accepted.

    Raises:
        InvalidDuration: If the value is not a positive integer
    """
    if value is None or value == "":
        return default

    if isinstance(value, bool):
        raise InvalidDuration(f"Invalid duration: {value!r}")

    try:
        number = float(str(value).strip())
    except ValueError as exc:
        raise InvalidDuration(f"Invalid duration: {value!r}") from exc

    if not number.is_integer():
        raise InvalidDuration(f"Duration must be a whole number of minutes, got {value!r}")

    minutes = int(number)

    if minutes <= 0:
        raise InvalidDuration(f"Duration must be positive, got {minutes}")

    return minutes


def validate_date_range(start_date: date, end_date: date, max_days: int) -> int:
    """
    Check that the range is ordered and within the configured limit.

    Returns:
        int: Number of calendar dates in the range

    Raises:
        InvalidDateRange: If start_date is after end_date
        DateRangeTooLong: If the range spans more than max_days dates
    """
    if start_date > end_date:
        raise InvalidDateRange("start_date must be before or equal to end_date")

    days = count_days(start_date, end_date)
    if days > max_days:
        raise DateRangeTooLong(days, max_days)

    return days


def resolve_timezone(tz_name: Optional[str], default: str) -> str:
    """
    Caller fallback policy: an invalid or missing zone becomes ``default``.

    The engine itself raises InvalidTimezone; substituting a zone is a
    decision of this calling layer.
    """
    if tz_name and is_valid_timezone(tz_name):
        return tz_name.strip()

    logger.warning("Invalid timezone %r, falling back to %s", tz_name, default)
    return default


def build_weekly_schedule(rows: Iterable[Dict[str, Any]]) -> List[WeeklyWindow]:
    """
    Build weekly windows from schedule slot rows.

    Disabled rows are kept; the precedence resolver filters on ``enabled``.
    """
    windows = []

    for idx, row in enumerate(rows, 1):
        try:
            windows.append(WeeklyWindow.create(
                row.get("start_time"),
                row.get("end_time"),
                day_of_week=row.get("day_of_week"),
                enabled=bool(row.get("enabled", True)),
            ))
        except InvalidWindow as exc:
            logger.warning("Skipping inverted weekly slot row %s: %s", idx, exc)
        except (PydanticValidationError, ValueError) as exc:
            logger.warning("Skipping weekly slot row %s: %s", idx, exc)

    return windows


def build_date_overrides(rows: Iterable[Dict[str, Any]]) -> List[DateOverride]:
    """
    Build date overrides. Malformed custom windows are dropped one by one;
    an override whose windows were all dropped falls back to the weekly schedule.
    """
    overrides = []

    for idx, row in enumerate(rows, 1):
        is_unavailable = bool(row.get("is_unavailable", False))
        window_rows = [] if is_unavailable else (row.get("slots") or [])

        windows = []
        for window_idx, window_row in enumerate(window_rows, 1):
            try:
                windows.append(OverrideWindow.create(
                    window_row.get("start_time"),
                    window_row.get("end_time"),
                ))
            except InvalidWindow as exc:
                logger.warning("Skipping inverted window %s of override row %s: %s", window_idx, idx, exc)
            except (PydanticValidationError, ValueError) as exc:
                logger.warning("Skipping window %s of override row %s: %s", window_idx, idx, exc)

        try:
            overrides.append(DateOverride(
                override_date=row.get("override_date"),
                is_unavailable=is_unavailable,
                windows=windows,
            ))
        except (PydanticValidationError, ValueError) as exc:
            logger.warning("Skipping override row %s: %s", idx, exc)

    return overrides


def build_out_of_office_periods(rows: Iterable[Dict[str, Any]]) -> List[OutOfOfficePeriod]:
    periods = []

    for idx, row in enumerate(rows, 1):
        try:
            periods.append(OutOfOfficePeriod(
                start_date=row.get("start_date"),
                end_date=row.get("end_date"),
            ))
        except (PydanticValidationError, ValueError) as exc:
            logger.warning("Skipping out-of-office row %s: %s", idx, exc)

    return periods


def build_bookings(rows: Iterable[Dict[str, Any]], statuses: Iterable[str]) -> List[ExistingBooking]:
    """
    Build the bookings that block the calendar.

    Only rows whose status is in ``statuses`` are kept (case-insensitive);
    the engine does not look at status itself.
    """
    blocking = {status.upper() for status in statuses}
    bookings = []

    for idx, row in enumerate(rows, 1):
        status = str(row.get("status") or "").strip().upper()
        if status not in blocking:
            continue

        try:
            bookings.append(ExistingBooking(
                start_time=row.get("start_time"),
                end_time=row.get("end_time"),
                status=status,
            ))
        except (PydanticValidationError, ValueError) as exc:
            logger.warning("Skipping booking row %s: %s", idx, exc)

    return bookings

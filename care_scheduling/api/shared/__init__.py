"""
Shared utilities for the Care Scheduling API.

Boundary validators and the typed input construction pass used by the
timeslot endpoint.
"""

from .validators import (
    build_bookings,
    build_date_overrides,
    build_out_of_office_periods,
    build_weekly_schedule,
    resolve_timezone,
    validate_date_range,
    validate_date_string,
    validate_duration,
)

__all__ = [
    # Parameter checks
    "validate_date_string",
    "validate_duration",
    "validate_date_range",
    "resolve_timezone",
    # Row -> model construction
    "build_weekly_schedule",
    "build_date_overrides",
    "build_out_of_office_periods",
    "build_bookings",
]

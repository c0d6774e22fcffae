"""
Scheduling Services Module

This module provides the availability and timeslot engine:
- Timezone resolution (timezone.py)
- Overlap detection (overlap.py)
- Day slot generation (slots.py)
- Schedule precedence (availability.py)
- Range scheduling (scheduler.py)

Everything here is pure computation over in-memory inputs.
"""

from .exceptions import (
	DateRangeTooLong,
	EventTypeMismatch,
	InvalidDateRange,
	InvalidDuration,
	InvalidTimezone,
	InvalidWindow,
	SchedulingError,
	ValidationError,
)
from .models import (
	DateOverride,
	ExistingBooking,
	OutOfOfficePeriod,
	OverrideWindow,
	TimeSlot,
	WeeklyWindow,
)
from .scheduler import compute_slots

__all__ = [
	"compute_slots",
	"DateOverride",
	"ExistingBooking",
	"OutOfOfficePeriod",
	"OverrideWindow",
	"TimeSlot",
	"WeeklyWindow",
	"SchedulingError",
	"InvalidTimezone",
	"InvalidWindow",
	"InvalidDuration",
	"InvalidDateRange",
	"DateRangeTooLong",
	"ValidationError",
	"EventTypeMismatch",
]

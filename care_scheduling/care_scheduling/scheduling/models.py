"""
Scheduling Models

Immutable value types consumed and produced by the availability engine:
- WeeklyWindow: recurring weekly working window
- OverrideWindow: custom window of a DateOverride
- DateOverride: exception for one calendar date
- OutOfOfficePeriod: blackout date range
- ExistingBooking: already committed appointment
- TimeSlot: bookable candidate window (output)

All models are frozen; callers build them once per request.
"""

from datetime import date, datetime, time, timedelta
from typing import Tuple

import pytz
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import InvalidWindow
from .timezone import parse_time_string


class TimeWindow(BaseModel):
	"""Wall-clock window without a date. start_time < end_time."""

	model_config = ConfigDict(frozen=True)

	start_time: time
	end_time: time

	@field_validator("start_time", "end_time", mode="before")
	@classmethod
	def _parse_time(cls, value):
		# Las columnas time de la base de datos llegan como "HH:MM:SS"
		if isinstance(value, str):
			return parse_time_string(value)
		return value

	@model_validator(mode="after")
	def _check_order(self) -> "TimeWindow":
		if self.start_time >= self.end_time:
			raise ValueError(_order_message(self.start_time, self.end_time))
		return self

	@classmethod
	def create(cls, start_time, end_time, **fields):
		"""
		Construye la ventana desde valores de almacenamiento.

		Pydantic envuelve los errores de sus validadores en su propio
		ValidationError; aquí el orden se comprueba antes para que el
		llamador reciba InvalidWindow.

		Raises:
			InvalidWindow: si start_time >= end_time
			ValueError: hora mal formada (pydantic ValidationError para el resto)
		"""
		start = parse_time_string(start_time) if isinstance(start_time, str) else start_time
		end = parse_time_string(end_time) if isinstance(end_time, str) else end_time

		if isinstance(start, time) and isinstance(end, time) and start >= end:
			raise InvalidWindow(_order_message(start, end))

		return cls(start_time=start, end_time=end, **fields)


def _order_message(start: time, end: time) -> str:
	return (
		f"start_time ({start.strftime('%H:%M')}) must be before "
		f"end_time ({end.strftime('%H:%M')})"
	)


class WeeklyWindow(TimeWindow):
	"""Recurring window; day_of_week 0 = Sunday .. 6 = Saturday."""

	day_of_week: int = Field(ge=0, le=6)
	enabled: bool = True


class OverrideWindow(TimeWindow):
	"""Custom window that replaces the weekly schedule for one date."""
	pass


class DateOverride(BaseModel):
	model_config = ConfigDict(frozen=True)

	override_date: date
	is_unavailable: bool = False
	windows: Tuple[OverrideWindow, ...] = ()


class OutOfOfficePeriod(BaseModel):
	"""Blackout range, both ends inclusive."""

	model_config = ConfigDict(frozen=True)

	start_date: date
	end_date: date

	@model_validator(mode="after")
	def _check_order(self) -> "OutOfOfficePeriod":
		if self.start_date > self.end_date:
			raise ValueError(
				f"start_date ({self.start_date.isoformat()}) must not be after "
				f"end_date ({self.end_date.isoformat()})"
			)
		return self

	def contains(self, target_date: date) -> bool:
		return self.start_date <= target_date <= self.end_date


class ExistingBooking(BaseModel):
	"""
	Committed appointment. Naive instants are taken as UTC.

	The engine does not look at status; callers pass only blocking bookings.
	"""

	model_config = ConfigDict(frozen=True)

	start_time: datetime
	end_time: datetime
	status: str = "CONFIRMED"

	@field_validator("start_time", "end_time")
	@classmethod
	def _ensure_aware(cls, value: datetime) -> datetime:
		if value.tzinfo is None:
			return pytz.UTC.localize(value)
		return value

	@model_validator(mode="after")
	def _check_order(self) -> "ExistingBooking":
		if self.end_time <= self.start_time:
			raise ValueError("end_time must be after start_time")
		return self


class TimeSlot(BaseModel):
	model_config = ConfigDict(frozen=True)

	start: datetime
	end: datetime
	available: bool = True

	@property
	def duration(self) -> timedelta:
		return self.end - self.start

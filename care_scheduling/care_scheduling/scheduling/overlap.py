"""
Overlap Detection Service

Detects conflicts between a candidate slot and existing bookings using
half-open intervals [start, end):
- Two intervals overlap when start_a < end_b AND end_a > start_b
- Back-to-back intervals that only touch (end == start) do not conflict
"""

from datetime import datetime
from typing import Iterable, List

from .models import ExistingBooking


def intervals_overlap(
	start_a: datetime,
	end_a: datetime,
	start_b: datetime,
	end_b: datetime
) -> bool:
	return start_a < end_b and end_a > start_b


def find_overlapping_bookings(
	start_datetime: datetime,
	end_datetime: datetime,
	bookings: Iterable[ExistingBooking]
) -> List[ExistingBooking]:
	"""
	Retorna las citas que se solapan con [start_datetime, end_datetime).

	No filtra por status: el llamador pasa sólo citas que bloquean agenda.
	"""
	return [
		booking for booking in bookings
		if intervals_overlap(start_datetime, end_datetime, booking.start_time, booking.end_time)
	]


def has_conflict(
	start_datetime: datetime,
	end_datetime: datetime,
	bookings: Iterable[ExistingBooking]
) -> bool:
	return any(
		intervals_overlap(start_datetime, end_datetime, booking.start_time, booking.end_time)
		for booking in bookings
	)

"""
In-Memory Availability Source

Dictionary-backed AvailabilitySource, keyed by provider id. Applies the same
range filters a database query would.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

import pytz

from .base import AvailabilitySource
from ..scheduling.timezone import to_date


class InMemoryAvailabilitySource(AvailabilitySource):

	def __init__(
		self,
		schedules: Optional[Dict[str, List[Dict[str, Any]]]] = None,
		bookings: Optional[Dict[str, List[Dict[str, Any]]]] = None,
		out_of_office: Optional[Dict[str, List[Dict[str, Any]]]] = None,
		overrides: Optional[Dict[str, List[Dict[str, Any]]]] = None,
		event_types: Optional[Dict[str, Dict[str, Any]]] = None
	):
		self.schedules = schedules or {}
		self.bookings = bookings or {}
		self.out_of_office = out_of_office or {}
		self.overrides = overrides or {}
		self.event_types = event_types or {}

	def get_schedule(self, provider_id: str, schedule_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
		for schedule in self.schedules.get(provider_id, []):
			if not schedule.get("active", True):
				continue
			if schedule_id is None:
				if schedule.get("is_default", False):
					return schedule
			elif schedule.get("id") == schedule_id:
				return schedule
		return None

	def get_event_type(self, event_type_id: str) -> Optional[Dict[str, Any]]:
		return self.event_types.get(event_type_id)

	def get_bookings(self, provider_id: str, start_date: date, end_date: date) -> List[Dict[str, Any]]:
		# Un día de margen: el rango es local y las citas se guardan en UTC
		padded_start = start_date - timedelta(days=1)
		padded_end = end_date + timedelta(days=1)

		rows = []
		for row in self.bookings.get(provider_id, []):
			start_day = _row_date(row.get("start_time"))
			end_day = _row_date(row.get("end_time"))

			# Filas ilegibles pasan; el constructor de citas las descarta y lo registra
			if start_day is None or end_day is None:
				rows.append(row)
			elif end_day >= padded_start and start_day <= padded_end:
				rows.append(row)

		return rows

	def get_out_of_office_periods(self, provider_id: str, start_date: date, end_date: date) -> List[Dict[str, Any]]:
		return [
			row for row in self.out_of_office.get(provider_id, [])
			if to_date(row["start_date"]) <= end_date and to_date(row["end_date"]) >= start_date
		]

	def get_date_overrides(self, provider_id: str, start_date: date, end_date: date) -> List[Dict[str, Any]]:
		return [
			row for row in self.overrides.get(provider_id, [])
			if start_date <= to_date(row["override_date"]) <= end_date
		]


def _row_date(value: Any) -> Optional[date]:
	"""Fecha UTC de un instante almacenado (datetime o ISO-8601); None si no se puede leer."""
	if isinstance(value, str):
		try:
			value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
		except ValueError:
			return None
	if not isinstance(value, datetime):
		return None
	if value.tzinfo is None:
		value = pytz.UTC.localize(value)
	return value.astimezone(pytz.UTC).date()

"""
Range Scheduler

Computes the ordered list of bookable slots for a date range:
- Iterates calendar dates (not instants) so DST never skips or repeats a day
- Resolves precedence per date and generates that day's slots
- Sorts the accumulated slots globally by start instant
"""

from datetime import date, timedelta
from typing import List, Optional, Sequence, Union

from .availability import resolve_day_availability
from .exceptions import DateRangeTooLong
from .models import DateOverride, ExistingBooking, OutOfOfficePeriod, TimeSlot, WeeklyWindow
from .slots import generate_day_slots, validate_duration_minutes
from .timezone import Clock, TimezoneLike, get_timezone, now_in_timezone, to_date


def count_days(start_date: date, end_date: date) -> int:
	"""Número de fechas calendario en [start_date, end_date]; 0 si está invertido."""
	return max(0, (end_date - start_date).days + 1)


def compute_slots(
	start_date: Union[date, str],
	end_date: Union[date, str],
	weekly_schedule: Sequence[WeeklyWindow],
	bookings: Sequence[ExistingBooking],
	duration_minutes: int,
	timezone: TimezoneLike,
	ooo_periods: Sequence[OutOfOfficePeriod] = (),
	date_overrides: Sequence[DateOverride] = (),
	clock: Optional[Clock] = None,
	max_range_days: Optional[int] = None
) -> List[TimeSlot]:
	"""
	Calcula los slots reservables de un rango de fechas (ambos inclusive).

	Args:
		start_date: fecha inicial (date o YYYY-MM-DD)
		end_date: fecha final (date o YYYY-MM-DD)
		weekly_schedule: franjas semanales recurrentes
		bookings: citas que bloquean agenda (ya filtradas por status)
		duration_minutes: duración de la sesión
		timezone: zona horaria IANA del horario
		ooo_periods: periodos fuera de oficina
		date_overrides: excepciones por fecha
		clock: reloj inyectado; "now" se toma una sola vez por llamada
		max_range_days: límite opcional de fechas en el rango

	Returns:
		list[TimeSlot]: ordenados por inicio; lista vacía si no hay huecos

	Raises:
		InvalidTimezone: zona desconocida
		InvalidDuration: duración no positiva
		DateRangeTooLong: el rango supera max_range_days
	"""
	tz = get_timezone(timezone)
	start_date = to_date(start_date)
	end_date = to_date(end_date)
	validate_duration_minutes(duration_minutes)

	days = count_days(start_date, end_date)
	if max_range_days is not None and days > max_range_days:
		raise DateRangeTooLong(days, max_range_days)

	now = now_in_timezone(tz, clock)
	bookings = tuple(bookings)

	slots = []
	current_date = start_date

	while current_date <= end_date:
		day = resolve_day_availability(current_date, weekly_schedule, date_overrides, ooo_periods, tz)

		if day.windows:
			slots.extend(generate_day_slots(
				current_date,
				day.windows,
				bookings,
				duration_minutes,
				tz,
				now=now
			))

		current_date += timedelta(days=1)

	return _sort_unique(slots)


def _sort_unique(slots: List[TimeSlot]) -> List[TimeSlot]:
	"""Orden global por inicio; franjas semanales solapadas pueden repetir un slot."""
	slots.sort(key=lambda slot: (slot.start, slot.end))

	unique = []
	for slot in slots:
		if unique and unique[-1].start == slot.start and unique[-1].end == slot.end:
			continue
		unique.append(slot)

	return unique

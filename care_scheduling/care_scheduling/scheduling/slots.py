"""
Slot Generation Service

Generates fixed-length bookable slots for one calendar day, considering:
- The wall-clock windows that govern the day
- Existing bookings (half-open overlap)
- The current instant in the schedule's timezone
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Union

import pytz

from .exceptions import InvalidDuration
from .models import ExistingBooking, TimeSlot, TimeWindow
from .overlap import has_conflict
from .timezone import Clock, TimezoneLike, get_timezone, localize_time, now_in_timezone, to_date


def validate_duration_minutes(duration_minutes: int) -> timedelta:
	"""
	Valida la duración y la convierte a timedelta.

	Raises:
		InvalidDuration: si no es un entero positivo
	"""
	if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
		raise InvalidDuration(f"duration_minutes must be an integer, got {duration_minutes!r}")
	if duration_minutes <= 0:
		raise InvalidDuration(f"duration_minutes must be positive, got {duration_minutes}")
	return timedelta(minutes=duration_minutes)


def generate_day_slots(
	target_date: Union[date, str],
	windows: Sequence[TimeWindow],
	bookings: Iterable[ExistingBooking],
	duration_minutes: int,
	timezone: TimezoneLike,
	now: Optional[datetime] = None,
	clock: Optional[Clock] = None
) -> List[TimeSlot]:
	"""
	Genera slots discretos disponibles para un día.

	Args:
		target_date: fecha calendario local
		windows: franjas de reloj que gobiernan el día (ya resueltas por precedencia)
		bookings: citas existentes; se chequean todas, no sólo las del día
		duration_minutes: duración exacta de cada slot
		timezone: zona horaria del horario
		now: instante de referencia; si falta se toma de clock
		clock: reloj inyectado (por defecto UTC actual)

	Returns:
		list[TimeSlot]: ordenados por inicio

	Algoritmo:
		1. Localizar inicio/fin de cada franja en la zona
		2. Ignorar franjas con inicio >= fin
		3. Avanzar desde el inicio en pasos de duration (aritmética en UTC)
		4. Descartar el slot final parcial
		5. Descartar slots que empiezan antes de now o que chocan con una cita
	"""
	tz = get_timezone(timezone)
	target_date = to_date(target_date)
	duration = validate_duration_minutes(duration_minutes)
	bookings = tuple(bookings)

	if now is None:
		now = now_in_timezone(tz, clock)
	elif now.tzinfo is None:
		now = pytz.UTC.localize(now)

	slots = []

	for window in windows:
		window_start = localize_time(target_date, window.start_time, tz)
		window_end = localize_time(target_date, window.end_time, tz)

		# Franja mal formada, o colapsada por un salto DST
		if window_start >= window_end:
			continue

		# Pasos en UTC para que cada slot dure exactamente duration
		current_slot_start = window_start.astimezone(pytz.UTC)
		interval_end = window_end.astimezone(pytz.UTC)

		while current_slot_start + duration <= interval_end:
			current_slot_end = current_slot_start + duration

			if current_slot_start >= now and not has_conflict(
				current_slot_start, current_slot_end, bookings
			):
				slots.append(TimeSlot(
					start=current_slot_start.astimezone(tz),
					end=current_slot_end.astimezone(tz),
					available=True
				))

			current_slot_start = current_slot_end

	slots.sort(key=lambda slot: slot.start)
	return slots

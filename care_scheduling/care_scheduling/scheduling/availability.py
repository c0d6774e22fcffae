"""
Availability Service

Decides which source of working hours governs a calendar date, in strict
priority order:
1. Out-of-office period (blackout)
2. Date override marked unavailable
3. Date override with custom windows
4. Recurring weekly schedule

Sources are never merged: a custom override fully replaces the weekly hours
for its date.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from .models import DateOverride, OutOfOfficePeriod, TimeWindow, WeeklyWindow
from .timezone import TimezoneLike, get_day_of_week, get_timezone, localize_time, to_date


class DaySource(str, Enum):
	BLACKED_OUT = "blacked_out"
	OVERRIDE_UNAVAILABLE = "override_unavailable"
	OVERRIDE_CUSTOM = "override_custom"
	WEEKLY = "weekly"


class DayAvailability(NamedTuple):
	source: DaySource
	windows: Tuple[TimeWindow, ...]


def is_out_of_office(target_date: Union[date, str], ooo_periods: Iterable[OutOfOfficePeriod]) -> bool:
	"""True si la fecha cae dentro de algún periodo (ambos extremos inclusive)."""
	target_date = to_date(target_date)
	return any(period.contains(target_date) for period in ooo_periods)


def get_date_override(
	target_date: Union[date, str],
	date_overrides: Iterable[DateOverride]
) -> Optional[DateOverride]:
	"""
	Retorna el override de la fecha exacta, o None.

	Si hay varios para la misma fecha gana el primero en orden de entrada.
	"""
	target_date = to_date(target_date)

	for override in date_overrides:
		if override.override_date == target_date:
			return override

	return None


def get_weekly_windows(
	target_date: Union[date, str],
	weekly_schedule: Iterable[WeeklyWindow],
	timezone: TimezoneLike
) -> Tuple[WeeklyWindow, ...]:
	"""Franjas semanales habilitadas para el día de la semana de la fecha."""
	day_of_week = get_day_of_week(target_date, timezone)

	return tuple(
		window for window in weekly_schedule
		if window.enabled and window.day_of_week == day_of_week
	)


def resolve_day_availability(
	target_date: Union[date, str],
	weekly_schedule: Sequence[WeeklyWindow],
	date_overrides: Sequence[DateOverride],
	ooo_periods: Sequence[OutOfOfficePeriod],
	timezone: TimezoneLike
) -> DayAvailability:
	"""
	Resuelve qué fuente de horario gobierna una fecha.

	Args:
		target_date: fecha calendario local
		weekly_schedule: franjas semanales recurrentes
		date_overrides: excepciones por fecha
		ooo_periods: periodos fuera de oficina
		timezone: zona horaria del horario

	Returns:
		DayAvailability(source, windows); windows vacío para fechas bloqueadas
	"""
	target_date = to_date(target_date)

	# 1. Blackout: gana sobre cualquier override
	if is_out_of_office(target_date, ooo_periods):
		return DayAvailability(DaySource.BLACKED_OUT, ())

	override = get_date_override(target_date, date_overrides)

	if override is not None:
		# 2. Override no disponible: no se consultan franjas
		if override.is_unavailable:
			return DayAvailability(DaySource.OVERRIDE_UNAVAILABLE, ())

		# 3. Override con franjas propias: reemplaza el horario semanal
		if override.windows:
			return DayAvailability(DaySource.OVERRIDE_CUSTOM, tuple(override.windows))

	# 4. Horario semanal por defecto
	return DayAvailability(
		DaySource.WEEKLY,
		get_weekly_windows(target_date, weekly_schedule, timezone)
	)


def get_effective_availability(
	start_date: Union[date, str],
	end_date: Union[date, str],
	weekly_schedule: Sequence[WeeklyWindow],
	timezone: TimezoneLike,
	ooo_periods: Sequence[OutOfOfficePeriod] = (),
	date_overrides: Sequence[DateOverride] = ()
) -> Dict[str, List[Dict[str, datetime]]]:
	"""
	Obtiene los intervalos de trabajo efectivos para un rango de fechas.

	No considera citas ni la hora actual: es la vista de horario, no de slots.

	Returns:
		dict: {
			"2026-01-05": [{"start": datetime, "end": datetime}, ...],
			...
		}
		Las fechas sin intervalos se omiten.
	"""
	tz = get_timezone(timezone)
	start_date = to_date(start_date)
	end_date = to_date(end_date)

	result = {}
	current_date = start_date

	while current_date <= end_date:
		day = resolve_day_availability(current_date, weekly_schedule, date_overrides, ooo_periods, tz)

		intervals = []
		for window in day.windows:
			interval_start = localize_time(current_date, window.start_time, tz)
			interval_end = localize_time(current_date, window.end_time, tz)
			if interval_start < interval_end:
				intervals.append({"start": interval_start, "end": interval_end})

		if intervals:
			intervals.sort(key=lambda x: x["start"])
			result[current_date.isoformat()] = intervals

		current_date += timedelta(days=1)

	return result

"""
Timezone Resolver

Converts calendar dates and wall-clock times into absolute instants for a
named IANA timezone, using pytz:
- Day of week of a local calendar date
- "Now" as observed in the zone (through an injected clock)
- Localization of a wall-clock time on a given date

The calendar date is always treated as a local date in the target zone;
nothing here derives a day or a midnight from a UTC-shifted instant.
"""

import re
from datetime import date, datetime, time
from typing import Callable, Optional, Union

import pytz
from pytz.tzinfo import BaseTzInfo

from .exceptions import InvalidTimezone

# Reloj inyectable: callable sin argumentos que retorna un datetime aware
Clock = Callable[[], datetime]
TimezoneLike = Union[str, BaseTzInfo]

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$")


def utc_now() -> datetime:
	"""Reloj por defecto: instante actual en UTC."""
	return datetime.now(pytz.UTC)


def get_timezone(timezone: TimezoneLike) -> BaseTzInfo:
	"""
	Resuelve un nombre IANA a un objeto pytz.

	Args:
		timezone: nombre IANA ("Africa/Lagos") o un tzinfo de pytz ya resuelto

	Returns:
		pytz tzinfo

	Raises:
		InvalidTimezone: si el nombre está vacío o pytz no lo conoce
	"""
	if not isinstance(timezone, str):
		if hasattr(timezone, "localize") and hasattr(timezone, "normalize"):
			return timezone
		raise InvalidTimezone(str(timezone))

	tz_name = timezone.strip()
	if not tz_name:
		raise InvalidTimezone(timezone)

	try:
		return pytz.timezone(tz_name)
	except pytz.UnknownTimeZoneError as exc:
		raise InvalidTimezone(tz_name) from exc


def is_valid_timezone(timezone: Optional[str]) -> bool:
	if not timezone:
		return False
	try:
		get_timezone(timezone)
	except InvalidTimezone:
		return False
	return True


def to_date(value: Union[date, datetime, str]) -> date:
	"""
	Convierte date, datetime o string YYYY-MM-DD a date.

	Raises:
		ValueError: si el string no es una fecha válida
	"""
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value
	if isinstance(value, str):
		date_str = value.strip()
		if not _DATE_PATTERN.match(date_str):
			raise ValueError(f"Invalid date {value!r}. Use YYYY-MM-DD")
		return date.fromisoformat(date_str)
	raise ValueError(f"Cannot convert {type(value)} to date")


def parse_time_string(value: str) -> time:
	"""
	Parsea "HH:MM" o "HH:MM:SS" a datetime.time.

	Los segundos se descartan: las franjas se definen a nivel de minuto.
	"""
	match = _TIME_PATTERN.match(value.strip())
	if not match:
		raise ValueError(f"Invalid time {value!r}. Use HH:MM or HH:MM:SS")

	hour, minute = int(match.group(1)), int(match.group(2))
	if hour > 23 or minute > 59:
		raise ValueError(f"Invalid time {value!r}")

	return time(hour, minute)


def get_day_of_week(target_date: Union[date, str], timezone: TimezoneLike) -> int:
	"""
	Día de la semana de una fecha local en la zona dada.

	Returns:
		int: 0 = Sunday, 1 = Monday, ..., 6 = Saturday
	"""
	# Se valida la zona aunque el día dependa sólo de la fecha calendario
	get_timezone(timezone)
	return to_date(target_date).isoweekday() % 7


def get_day_name(target_date: Union[date, str], timezone: TimezoneLike) -> str:
	return DAY_NAMES[get_day_of_week(target_date, timezone)]


def now_in_timezone(timezone: TimezoneLike, clock: Optional[Clock] = None) -> datetime:
	"""
	Instante actual observado en la zona.

	Args:
		timezone: nombre IANA o tzinfo
		clock: reloj inyectado; un datetime naive se interpreta como UTC

	Returns:
		datetime aware en la zona
	"""
	tz = get_timezone(timezone)
	current = (clock or utc_now)()

	if current.tzinfo is None:
		current = pytz.UTC.localize(current)

	return current.astimezone(tz)


def localize_time(
	target_date: Union[date, str],
	time_value: Union[time, str],
	timezone: TimezoneLike
) -> datetime:
	"""
	Instante absoluto de una hora de reloj en una fecha y zona.

	La hora de reloj manda: a ambos lados de un cambio DST el offset resultante
	es el que dicten las reglas de la zona (pytz localize + normalize).

	Args:
		target_date: fecha calendario local
		time_value: hora de reloj (time o "HH:MM[:SS]")
		timezone: nombre IANA o tzinfo

	Returns:
		datetime aware en la zona
	"""
	tz = get_timezone(timezone)

	if isinstance(time_value, str):
		time_value = parse_time_string(time_value)

	naive = datetime.combine(to_date(target_date), time_value.replace(tzinfo=None))
	return tz.normalize(tz.localize(naive))

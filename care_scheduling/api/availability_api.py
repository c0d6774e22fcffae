"""
Availability API

Request handling around the availability engine:
- Parameter validation and the configured range limit
- Fetching rows from an AvailabilitySource
- Typed input construction (malformed rows skipped)
- Timezone fallback to the configured default
- ISO-8601 serialization of the resulting slots
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import pytz

from care_scheduling.config import Settings, settings as default_settings
from care_scheduling.care_scheduling.scheduling.exceptions import (
	EventTypeMismatch,
	SchedulingError,
	ValidationError,
)
from care_scheduling.care_scheduling.scheduling.models import TimeSlot
from care_scheduling.care_scheduling.scheduling.scheduler import compute_slots
from care_scheduling.care_scheduling.scheduling.timezone import Clock, TimezoneLike, get_timezone
from care_scheduling.care_scheduling.sources.base import AvailabilitySource

from .shared.validators import (
	build_bookings,
	build_date_overrides,
	build_out_of_office_periods,
	build_weekly_schedule,
	resolve_timezone,
	validate_date_range,
	validate_date_string,
	validate_duration,
)

logger = logging.getLogger(__name__)

# Formato fijo: el orden lexicográfico coincide con el cronológico
ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def serialize_slot(slot: TimeSlot) -> Dict[str, Any]:
	return {
		"start": slot.start.astimezone(pytz.UTC).strftime(ISO_FORMAT),
		"end": slot.end.astimezone(pytz.UTC).strftime(ISO_FORMAT),
		"available": slot.available
	}


def group_slots_by_date(slots: Iterable[TimeSlot], timezone: TimezoneLike) -> Dict[str, List[str]]:
	"""
	Agrupa slots por fecha local para un selector de horas.

	Returns:
		dict: {"2026-01-05": ["09:00", "10:00"], ...} en la zona del provider
	"""
	tz = get_timezone(timezone)
	grouped: Dict[str, List[str]] = {}

	for slot in slots:
		local_start = slot.start.astimezone(tz)
		grouped.setdefault(local_start.date().isoformat(), []).append(local_start.strftime("%H:%M"))

	return grouped


def select_schedule(
	source: AvailabilitySource,
	provider_id: str,
	event_type_id: Optional[str] = None
) -> Optional[Dict[str, Any]]:
	"""
	Elige el horario a usar para un request.

	Algoritmo:
	1. Si el tipo de evento existe, debe pertenecer al provider
	2. Si tiene availability_schedule_id, se usa ese horario (si está activo)
	3. Si no, o si ese horario no existe, el horario por defecto

	Un event_type_id desconocido se ignora y se usa el horario por defecto.

	Raises:
		EventTypeMismatch: el tipo de evento es de otro provider
	"""
	schedule_id = None

	if event_type_id:
		event_type = source.get_event_type(event_type_id)
		if event_type:
			if event_type.get("user_id") != provider_id:
				raise EventTypeMismatch(event_type_id, provider_id)
			schedule_id = event_type.get("availability_schedule_id")
		else:
			logger.info("Event type %s not found, using default schedule", event_type_id)

	if schedule_id:
		schedule = source.get_schedule(provider_id, schedule_id)
		if schedule:
			return schedule
		logger.warning("Schedule %s not found, falling back to default", schedule_id)

	return source.get_schedule(provider_id)


def get_available_timeslots(
	source: AvailabilitySource,
	provider_id: str,
	start_date: str,
	end_date: str,
	duration_minutes: Optional[Any] = None,
	event_type_id: Optional[str] = None,
	clock: Optional[Clock] = None,
	config: Optional[Settings] = None
) -> Dict[str, Any]:
	"""
	Obtiene los timeslots reservables de un provider para un rango de fechas.

	Args:
		source: colaborador de almacenamiento
		provider_id: id del provider (dietitian/therapist)
		start_date: fecha inicial (YYYY-MM-DD)
		end_date: fecha final (YYYY-MM-DD)
		duration_minutes: duración de la sesión; por defecto DEFAULT_DURATION_MINUTES
		event_type_id: tipo de evento; si tiene horario propio se usa ése
		clock: reloj inyectado (tests)
		config: settings a usar en lugar de los globales

	Returns:
		dict: {
			"slots": [
				{"start": "2026-01-05T08:00:00Z", "end": "2026-01-05T09:00:00Z", "available": True},
				...
			],
			"timezone": "Africa/Lagos",
			"schedule_id": "sched-1"
		}

	Raises:
		ValidationError: provider_id o fechas mal formados
		InvalidDateRange: start_date posterior a end_date
		DateRangeTooLong: rango mayor que MAX_RANGE_DAYS
		InvalidDuration: duración no positiva
		EventTypeMismatch: el tipo de evento es de otro provider
	"""
	config = config or default_settings

	# 1. Validar parámetros
	if not provider_id or not str(provider_id).strip():
		raise ValidationError("provider_id is required")

	start = validate_date_string(start_date, "start_date")
	end = validate_date_string(end_date, "end_date")
	validate_date_range(start, end, config.MAX_RANGE_DAYS)
	duration = validate_duration(duration_minutes, config.DEFAULT_DURATION_MINUTES)

	# 2. Horario del provider; sin horario activo no hay slots
	schedule = select_schedule(source, provider_id, event_type_id)
	if not schedule:
		logger.info("No active schedule for provider %s", provider_id)
		return {"slots": [], "timezone": config.DEFAULT_TIMEZONE, "schedule_id": None}

	tz_name = resolve_timezone(schedule.get("timezone"), config.DEFAULT_TIMEZONE)

	try:
		# 3. Construir entradas tipadas
		weekly_schedule = build_weekly_schedule(schedule.get("slots") or [])
		bookings = build_bookings(
			source.get_bookings(provider_id, start, end),
			config.BLOCKING_BOOKING_STATUSES
		)
		ooo_periods = build_out_of_office_periods(
			source.get_out_of_office_periods(provider_id, start, end)
		)
		date_overrides = build_date_overrides(
			source.get_date_overrides(provider_id, start, end)
		)

		# 4. Calcular slots
		slots = compute_slots(
			start,
			end,
			weekly_schedule,
			bookings,
			duration,
			tz_name,
			ooo_periods=ooo_periods,
			date_overrides=date_overrides,
			clock=clock,
			max_range_days=config.MAX_RANGE_DAYS
		)

	except SchedulingError:
		raise
	except Exception:
		logger.exception("Error computing timeslots for provider %s", provider_id)
		raise

	logger.info(
		"Computed %d timeslots for provider %s (%s to %s, %s min, %s)",
		len(slots), provider_id, start, end, duration, tz_name
	)

	return {
		"slots": [serialize_slot(slot) for slot in slots],
		"timezone": tz_name,
		"schedule_id": schedule.get("id")
	}

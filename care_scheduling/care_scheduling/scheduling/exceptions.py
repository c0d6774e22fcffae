"""
Scheduling Errors

Error taxonomy for the availability engine:
- InvalidTimezone: zona horaria IANA desconocida
- InvalidWindow: ventana con start >= end
- InvalidDuration: duración de sesión no positiva
- InvalidDateRange / DateRangeTooLong: rango de fechas inválido o demasiado largo
- ValidationError: parámetro de entrada mal formado en la frontera
- EventTypeMismatch: tipo de evento de otro provider
"""

from typing import Optional


class SchedulingError(Exception):
	"""Excepción base para errores del motor de disponibilidad."""
	pass


class InvalidTimezone(SchedulingError):
	"""Zona horaria que pytz no puede resolver."""

	def __init__(self, timezone: Optional[str]):
		self.timezone = timezone
		super().__init__(f"Invalid timezone: {timezone!r}")


class InvalidWindow(SchedulingError, ValueError):
	"""Ventana de trabajo con start_time >= end_time."""
	pass


class InvalidDuration(SchedulingError, ValueError):
	"""Duración de sesión que no es un entero positivo de minutos."""
	pass


class InvalidDateRange(SchedulingError, ValueError):
	"""Rango de fechas invertido o mal formado."""
	pass


class DateRangeTooLong(InvalidDateRange):
	"""Rango de fechas que supera el máximo configurado."""

	def __init__(self, days: int, max_days: int):
		self.days = days
		self.max_days = max_days
		super().__init__(f"Date range of {days} days exceeds the maximum of {max_days} days")


class ValidationError(SchedulingError, ValueError):
	"""Parámetro de request mal formado (fecha, provider, etc.)."""
	pass


class EventTypeMismatch(SchedulingError):
	"""Tipo de evento que pertenece a otro provider."""

	def __init__(self, event_type_id: str, provider_id: str):
		self.event_type_id = event_type_id
		self.provider_id = provider_id
		super().__init__(f"Event type {event_type_id} does not belong to provider {provider_id}")

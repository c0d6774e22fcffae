"""
Base Availability Source

Defines the interface that storage adapters must implement to feed the
availability engine with plain rows.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional


class AvailabilitySource(ABC):
	"""
	Interfaz base para fuentes de datos de disponibilidad.

	Las filas usan los nombres de columna de almacenamiento (snake_case);
	la conversión a modelos tipados la hace api.shared.validators.
	"""

	@abstractmethod
	def get_schedule(self, provider_id: str, schedule_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
		"""
		Obtiene un horario activo del provider.

		Args:
			provider_id: id del provider
			schedule_id: horario concreto; None = horario por defecto (is_default)

		Returns:
			dict: {
				"id": str,
				"timezone": str,
				"slots": [
					{"day_of_week": int, "start_time": "09:00:00",
					 "end_time": "12:00:00", "enabled": bool},
					...
				]
			}
			o None si no hay un horario activo que cumpla el criterio
		"""
		pass

	@abstractmethod
	def get_event_type(self, event_type_id: str) -> Optional[Dict[str, Any]]:
		"""
		Obtiene un tipo de evento.

		Returns:
			dict: {"id": str, "user_id": str, "availability_schedule_id": str | None}
			o None si no existe
		"""
		pass

	@abstractmethod
	def get_bookings(self, provider_id: str, start_date: date, end_date: date) -> List[Dict[str, Any]]:
		"""
		Citas del provider en el rango.

		Returns:
			list[dict]: [{"start_time": str|datetime, "end_time": str|datetime, "status": str}, ...]
		"""
		pass

	@abstractmethod
	def get_out_of_office_periods(self, provider_id: str, start_date: date, end_date: date) -> List[Dict[str, Any]]:
		"""Periodos que se cruzan con el rango: [{"start_date", "end_date"}, ...]."""
		pass

	@abstractmethod
	def get_date_overrides(self, provider_id: str, start_date: date, end_date: date) -> List[Dict[str, Any]]:
		"""
		Overrides con fecha dentro del rango.

		Returns:
			list[dict]: [
				{"override_date": "2026-01-05", "is_unavailable": bool,
				 "slots": [{"start_time", "end_time"}, ...]},
				...
			]
		"""
		pass

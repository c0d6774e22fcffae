from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CARE_SCHEDULING_", env_file=".env", extra="ignore")

    # Zona usada cuando el horario del provider no trae una válida
    DEFAULT_TIMEZONE: str = "Africa/Lagos"

    # Duración de sesión si el request no la especifica
    DEFAULT_DURATION_MINUTES: int = 30

    # Tope de fechas por consulta de timeslots
    MAX_RANGE_DAYS: int = 62

    # Status de citas que ocupan agenda (JSON en env: '["PENDING","CONFIRMED"]')
    BLOCKING_BOOKING_STATUSES: List[str] = ["PENDING", "CONFIRMED"]


settings = Settings()

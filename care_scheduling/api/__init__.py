"""
Care Scheduling API

Calling layer around the availability engine.

Structure:
    api/
    ├── __init__.py              # This file
    ├── availability_api.py      # Timeslot request handling and serialization
    └── shared/                  # Shared utilities
        ├── __init__.py          # Re-exports from validators
        └── validators.py        # Parameter checks and row -> model construction

Usage:
    from care_scheduling.api.availability_api import get_available_timeslots

    result = get_available_timeslots(source, "dietitian-1", "2026-01-05", "2026-01-11", 60)
    result = get_available_timeslots(source, "dietitian-1", "2026-01-05", "2026-01-11", event_type_id="evt-1")
"""

from . import shared

__all__ = [
    "shared",
]

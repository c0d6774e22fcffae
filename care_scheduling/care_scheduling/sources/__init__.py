"""
Availability Sources Module

Interface for the storage collaborator that feeds the engine:
- Base source interface (base.py)
- In-memory implementation (memory.py)
"""

from .base import AvailabilitySource
from .memory import InMemoryAvailabilitySource

__all__ = ["AvailabilitySource", "InMemoryAvailabilitySource"]

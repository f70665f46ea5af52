"""Airbike Timer: interval workouts with randomized accelerations."""

__version__ = "0.1.0"

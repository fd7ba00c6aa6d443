"""Pomotrack - Pomodoro focus sessions and task time analytics."""

__version__ = "0.1.0"

"""Utility helpers for Pomotrack."""

"""CLI command groups for Pomotrack."""

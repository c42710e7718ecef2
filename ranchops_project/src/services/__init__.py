"""Settings and REST services."""

"""Data models: coordinates, the boundary draft and zone records."""

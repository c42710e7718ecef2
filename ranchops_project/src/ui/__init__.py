"""Qt layer: boundary editor state machine, map glue and the zone page."""

"""Chat persistence."""

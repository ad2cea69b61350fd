"""Recognition services."""

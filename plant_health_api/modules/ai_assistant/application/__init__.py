"""Chat use cases."""

"""Weather use cases."""

"""User management infrastructure: SQLAlchemy persistence."""

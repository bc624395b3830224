"""Chat domain: message model, repository interface and chat rules."""

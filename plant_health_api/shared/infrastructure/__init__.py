"""
Infrastructure layer package.
Provides database connections, sessions and external API clients.
"""

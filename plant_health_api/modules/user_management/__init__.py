# 📄 File: plant_health_api/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes everything the service knows about a user: their running detection numbers
# and their app settings.
# 🧪 Purpose (Technical Summary):
# Package initialization for the user management module (domain-driven layout with CQRS
# handlers). Owns the users table and its atomic UserStats updates.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, pydantic, plant_health_api.shared
# 🔄 Connected Modules / Calls From:
# api.v1.router, plant_detection (running aggregate updater, analytics)

"""
User Management Module

- Domain: User, UserStats (running detection aggregates), UserPreferences
- Application: registration on first use, stats and preference queries/commands
- Infrastructure: SQLAlchemy users table with atomic counter updates
- Presentation: /users/me/stats and /users/me/preferences endpoints
"""

__version__ = "1.0.0"
__module_name__ = "user_management"

__all__ = ["__version__", "__module_name__"]

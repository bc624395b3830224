# 📄 File: plant_health_api/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the service how to reach its database, cache and
# partner APIs, and how it should behave in each environment.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization exporting the settings accessor.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - plant_health_api.main (application startup)
# - All modules requiring configuration

"""
Configuration Management Package

Handles all application configuration including:
- Environment-based settings
- Database engine configuration
- Redis caching configuration
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]

# 📄 File: plant_health_api/modules/weather/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the weather screen: today's conditions and the coming days, with farming advice.
# 🧪 Purpose (Technical Summary):
# Package initialization for the weather module (current conditions, daily forecast,
# agricultural insights).
# 🔗 Dependencies:
# OpenWeatherMap client, CacheManager, pydantic
# 🔄 Connected Modules / Calls From:
# api.v1.router

__version__ = "1.0.0"
__module_name__ = "weather"

__all__ = ["__version__", "__module_name__"]

# 📄 File: plant_health_api/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as the front door of the service: versioned endpoints plus the
# helpers that wrap every request.
# 🧪 Purpose (Technical Summary):
# Package initialization for the API layer (middleware and the v1 router).
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# plant_health_api.main

"""
Plant Health API Package

Structure:
    api/
    ├── middleware/          # logging, rate limiting, error handling
    └── v1/
        ├── router.py        # Aggregates the module routers under /api/v1
        └── health.py        # Liveness and readiness probes
"""

__version__ = "1.0.0"
__description__ = "Plant disease detection REST API"

# 📄 File: plant_health_api/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this folder holds the plant disease detection service and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version and package metadata.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - pyproject.toml (package discovery)

"""
Plant Health API - plant disease detection backend

Detection history, running per-user statistics, personal and community
analytics, a plant assistant chat and weather insights for the mobile app.
"""

__version__ = "1.0.0"
__title__ = "Plant Health API"
__description__ = "Plant disease detection, history and analytics backend"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]

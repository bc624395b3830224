# 📄 File: plant_health_api/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as the toolbox every feature uses: settings, database access,
# partner service clients, security checks and logging.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package initialization for configuration, infrastructure and cross-cutting
# concerns used by every module.
#
# 🔄 Connected Modules / Calls From:
# - All application modules

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management (settings, database base, Redis cache)
- Database sessions and external API clients
- Security, per-user locks and exceptions
- Validators, helpers and logging
"""

__all__ = []

# 📄 File: plant_health_api/modules/user_management/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The "what can be asked of user management" layer: register on first use, read stats,
# read and change settings.
# 🧪 Purpose (Technical Summary):
# CQRS application layer (commands, queries, handlers) for user management.
# 🔗 Dependencies:
# user_management domain and infrastructure
# 🔄 Connected Modules / Calls From:
# user_management.presentation

"""
User Management Application Layer

Commands:
- EnsureUserCommand: get-or-create on first authenticated use
- UpdatePreferencesCommand: partial settings update

Queries:
- GetUserStatsQuery: stored running detection aggregates
- GetPreferencesQuery: stored settings
"""

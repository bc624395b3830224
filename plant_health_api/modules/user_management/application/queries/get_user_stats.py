# 📄 File: plant_health_api/modules/user_management/application/queries/get_user_stats.py
# 🧭 Purpose (Layman Explanation):
# The "show me my numbers" and "show me my settings" requests.
# 🧪 Purpose (Technical Summary):
# CQRS queries for the stored UserStats and UserPreferences of one user.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.handlers.query_handlers, presentation.api.v1.users

from pydantic import BaseModel, Field


class GetUserStatsQuery(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=128)


class GetPreferencesQuery(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=128)

# 📄 File: plant_health_api/modules/plant_detection/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes everything about plant scans: analyzing a photo, keeping each user's scan
# history, and the statistics and charts built from it.
# 🧪 Purpose (Technical Summary):
# Package initialization for the plant detection module: Detection Record Store, Running
# Aggregate Updater, History Query Engine and Analytics Aggregator.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, pydantic, user_management, plant_health_api.shared
# 🔄 Connected Modules / Calls From:
# api.v1.router, ai_assistant (recent detections as chat context)

"""
Plant Detection Module

- Domain: DetectionEvent and analytics views, the running aggregate updater,
  history request normalisation and pure analytics functions
- Application: analyze/record/update/remove commands, history and analytics queries
- Infrastructure: detections table, disease info enrichment via the text model
- Presentation: /detections, /users/{user_id}/history and /analytics endpoints
"""

__version__ = "1.0.0"
__module_name__ = "plant_detection"

__all__ = ["__version__", "__module_name__"]

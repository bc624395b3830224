"""
Feature modules, each layered as domain / application / infrastructure / presentation.

- user_management: users, running statistics, preferences
- plant_detection: detections, history and analytics
- ai_assistant: plant assistant chat
- weather: conditions, forecast and agricultural insights
"""

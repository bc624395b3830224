"""
User Management Domain Layer

Domain Models:
- User: identity plus nested stats and preferences
- UserStats: running counters and confidence sum, average derived on read
- UserPreferences: language, units and app switches

Repository Interfaces:
- UserRepository: user access and atomic stats updates
"""

"""
Kernel Layer

Framework-independent core of the trip planner:
- Identity Core (password hashing, stateless session credentials)
- Ordered List Engine (fractional positions for the task board)
- Data models and the services built on them

Every owned row is read and written through the authenticated user's id.
"""

"""
Task subsystem.

Components:
- task_models.py: Task value type, errors, JSON encode/decode
- task_store.py: ordered in-memory list with observers and write-through persistence
"""

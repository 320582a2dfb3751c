"""
Task domain model.

Components:
- task_models.py: Task, TaskStatus, Priority and chunk <-> hour conversions
"""

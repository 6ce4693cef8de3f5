"""
Task subsystem.

Components:
- task_models.py: data structures (Space, Task, AnnotatedTask, TaskQuery)
- task_search.py: scope -> fan-out -> subtask expansion -> filters
"""

"""
Task subsystem.

Components:
- task_models.py: data structures (Task snapshot, TaskDraft, internal record)
- task_view.py: scoped read-only borrow returned by TaskStore.get
- task_store.py: owning in-memory store + lifecycle/resource tracking
- task_errors.py: exception hierarchy
"""

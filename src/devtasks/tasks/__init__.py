"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskInput, TaskStatus, TaskPriority)
- task_filter.py: status/priority/search filtering
- task_grouper.py: stable partition into board columns
- task_view.py: labelled board projection with per-column counts
- task_editor.py: create/edit form state machine
- task_board.py: owner of the in-memory collection (reload + merge)
- task_store.py / http_store.py: SQLite and HTTP task stores
"""

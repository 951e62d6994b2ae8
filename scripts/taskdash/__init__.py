"""
Taskdash - Terminal dashboard for Taskwarrior.

Architecture:
- providers.py: Data types and the engine gateway protocol
- task_gateway.py: Subprocess implementation of the gateway
- formatting.py: Durations, timestamps, argument splitting, row rendering
- controller.py: Visible row list and the mutations behind each key
- modes.py: Normal / create / confirm-delete interaction modes
- views/: Textual screens (dashboard, modal dialogs)
- app.py: Main application entry point
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

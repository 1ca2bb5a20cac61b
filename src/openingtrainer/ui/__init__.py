"""Qt adapters: timer scheduling and a signal bridge for presentation widgets."""

from openingtrainer.ui.bootstrap import configure_logging, create_session
from openingtrainer.ui.qt_scheduler import QtScheduler, QtTask
from openingtrainer.ui.session_bridge import SessionBridge, describe_result

__all__ = [
    "QtScheduler",
    "QtTask",
    "SessionBridge",
    "configure_logging",
    "create_session",
    "describe_result",
]

"""Training layer — session orchestrator, scoring, undo and scheduling.

Quick start::

    from openingtrainer.training import ManualScheduler, TrainingSession

    scheduler = ManualScheduler()
    session = TrainingSession(scheduler=scheduler)
    session.start_training("scotchGame")
    session.attempt_move((6, 4), (4, 4))  # e2-e4
    scheduler.run_all()                   # opponent replies e7-e5
"""

from openingtrainer.training.interfaces import (
    IScheduler,
    MoveOutcome,
    ScheduledTask,
    TrainingPhase,
)
from openingtrainer.training.scheduler import ManualScheduler, ManualTask
from openingtrainer.training.session import TrainingEvents, TrainingSession
from openingtrainer.training.state import Hint, MoveResult, Score, SessionSnapshot

__all__ = [
    # Interfaces
    "IScheduler",
    "MoveOutcome",
    "ScheduledTask",
    "TrainingPhase",
    # Concrete
    "Hint",
    "ManualScheduler",
    "ManualTask",
    "MoveResult",
    "Score",
    "SessionSnapshot",
    "TrainingEvents",
    "TrainingSession",
]

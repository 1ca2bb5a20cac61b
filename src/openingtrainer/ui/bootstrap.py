"""Helpers for wiring a training session into a Qt application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from openingtrainer.i18n import set_language
from openingtrainer.openings.book import OpeningBook
from openingtrainer.settings import TrainerSettings
from openingtrainer.training.session import TrainingSession
from openingtrainer.ui.qt_scheduler import QtScheduler
from openingtrainer.ui.session_bridge import SessionBridge, describe_result

if TYPE_CHECKING:
    from PyQt6.QtCore import QObject

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Install a basic stderr handler for the ``openingtrainer`` loggers."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("openingtrainer").setLevel(level)


def create_session(
    settings: TrainerSettings | None = None,
    *,
    book: OpeningBook | None = None,
    parent: QObject | None = None,
) -> SessionBridge:
    """Build a Qt-scheduled session and return its signal bridge.

    The bridge's ``session`` property gives access to the session itself.
    """
    settings = settings or TrainerSettings()
    # Language must come first so the first feedback text is localised.
    set_language(settings.language)

    session = TrainingSession(
        book,
        scheduler=QtScheduler(parent),
        settings=settings,
    )
    bridge = SessionBridge(session, parent)
    bridge.result_ready.connect(
        lambda result: _LOGGER.debug("Move result: %s", describe_result(result))
    )
    return bridge

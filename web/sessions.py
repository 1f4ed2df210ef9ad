"""
In-memory intake sessions.

One controller per browser session, keyed by a random cookie value. Sessions
live for the lifetime of the process only. The registry holds at most
``max_sessions`` controllers; when full, the least recently used session is
dropped to make room.
"""

from __future__ import annotations

import logging
import secrets
from collections import OrderedDict
from typing import Callable, Optional

from core.intake import IntakeFormController


logger = logging.getLogger(__name__)

SESSION_COOKIE = "keylight_session"
SESSION_ID_BYTES = 24
DEFAULT_MAX_SESSIONS = 1000


class IntakeSessionRegistry:
    """Maps session IDs to their form controllers."""

    def __init__(
        self,
        controller_factory: Callable[[], IntakeFormController],
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._controller_factory = controller_factory
        self._max_sessions = max_sessions
        self._controllers: OrderedDict[str, IntakeFormController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._controllers

    def get(self, session_id: Optional[str]) -> Optional[IntakeFormController]:
        if not session_id:
            return None
        controller = self._controllers.get(session_id)
        if controller is not None:
            self._controllers.move_to_end(session_id)
        return controller

    def create(self) -> tuple[str, IntakeFormController]:
        while len(self._controllers) >= self._max_sessions:
            if not self._evict_oldest():
                break
        session_id = secrets.token_urlsafe(SESSION_ID_BYTES)
        controller = self._controller_factory()
        self._controllers[session_id] = controller
        logger.info("Started intake session (%d active)", len(self._controllers))
        return session_id, controller

    def get_or_create(self, session_id: Optional[str]) -> tuple[str, IntakeFormController]:
        """Return the session's controller, starting a new session if unknown."""
        controller = self.get(session_id)
        if controller is not None:
            return session_id, controller
        return self.create()

    def discard(self, session_id: str) -> None:
        if self._controllers.pop(session_id, None) is not None:
            logger.info("Ended intake session (%d active)", len(self._controllers))

    def _evict_oldest(self) -> bool:
        # A session awaiting the backend keeps its slot.
        for session_id, controller in self._controllers.items():
            if not controller.is_submitting:
                del self._controllers[session_id]
                logger.warning("Evicted idle intake session; registry full")
                return True
        return False

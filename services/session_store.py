# -*- coding: utf-8 -*-
"""
Application-wide session state.

Holds what onboarding produced (the account's subject, created guest
subjects) and where the shell should go next. Drafts never live here.
"""

from typing import Any, Dict, List, Optional

from utils.logger import get_logger

logger = get_logger(__name__)


class SessionStore:
    """Singleton session state for the running application."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self.reset()

    def reset(self):
        self.user_data: Optional[Dict[str, Any]] = None
        self.user_id: Optional[str] = None
        self.firebase_uid: Optional[str] = None
        self.is_authenticated: bool = False
        self.guest_subject_ids: List[str] = []
        self.navigation_target: Optional[str] = None
        self.navigation_params: Dict[str, Any] = {}

    def set_user_data(self, user_data: Dict[str, Any]):
        self.user_data = dict(user_data)
        self.user_id = user_data.get("id")
        self.is_authenticated = bool(self.user_id)
        logger.info(f"Session user set: {self.user_id}")

    def add_guest_subject(self, subject_id: str):
        if subject_id not in self.guest_subject_ids:
            self.guest_subject_ids.append(subject_id)

    def navigate_to(self, target: str, params: Optional[Dict[str, Any]] = None):
        logger.info(f"Navigation target: {target}")
        self.navigation_target = target
        self.navigation_params = dict(params or {})


def get_session_store() -> SessionStore:
    return SessionStore()

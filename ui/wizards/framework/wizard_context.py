# -*- coding: utf-8 -*-
"""
Wizard Context - Base class for wizard session state.

Tracks the step position and which steps have been passed. Field values
live in the subclass; nothing here is persisted.
"""

from typing import Dict, Any, Optional
from datetime import datetime
import uuid


class WizardContext:
    """
    Base class for wizard context.

    Subclasses add their own draft and extend `to_dict()`.
    """

    def __init__(self):
        """Initialize base context properties."""
        self.wizard_id: str = str(uuid.uuid4())
        self.status: str = "draft"  # draft, submitting, completed
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = datetime.now()
        self.current_step_index: int = 0
        self.user_id: Optional[str] = None

        # Step completion tracking
        self.completed_steps: set = set()

    def touch(self):
        self.updated_at = datetime.now()

    def mark_step_completed(self, step_index: int):
        """Mark a step as completed."""
        self.completed_steps.add(step_index)
        self.touch()

    def set_status(self, status: str):
        self.status = status
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize context to dictionary (for logging).

        Subclasses should call super().to_dict() and add their own fields.
        """
        return {
            "wizard_id": self.wizard_id,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step_index": self.current_step_index,
            "user_id": self.user_id,
            "completed_steps": sorted(self.completed_steps),
        }

# -*- coding: utf-8 -*-
"""
Step Navigator - Wizard flow control over a list of step descriptors.

Handles:
- Next (gated on the current step's validity; completes on the last step)
- Back
- Edit jumps from a review step
- Disabling forward navigation while a submission is in flight
"""

from typing import Callable, List, Optional
from PyQt5.QtCore import QObject, pyqtSignal

from .step_descriptor import StepDescriptor, StepValidationResult
from .wizard_context import WizardContext
from utils.logger import get_logger

logger = get_logger(__name__)


class WizardFlowController(QObject):
    """
    State machine over the current step index.

    Validity is never stored; it is recomputed from the context's draft
    whenever it is asked for. Completion is a callback, not a state, so
    a failed submission can be retried from the same step.
    """

    # Signals
    step_changed = pyqtSignal(int, int)  # old_index, new_index
    can_go_next_changed = pyqtSignal(bool)
    can_go_previous_changed = pyqtSignal(bool)
    validation_failed = pyqtSignal(object)  # StepValidationResult
    complete_requested = pyqtSignal()

    def __init__(self, context: WizardContext, steps: List[StepDescriptor],
                 on_complete: Optional[Callable[[], None]] = None):
        """
        Args:
            context: Wizard context exposing `draft`
            steps: Ordered step descriptors
            on_complete: Called when Next is pressed on a valid last step
        """
        super().__init__()
        if not steps:
            raise ValueError("A wizard needs at least one step")
        self.context = context
        self.steps = steps
        self.on_complete = on_complete
        self.current_index = 0
        self._busy = False

    # ==================== State ====================

    def get_current_step(self) -> StepDescriptor:
        return self.steps[self.current_index]

    def get_step_count(self) -> int:
        return len(self.steps)

    def is_last_step(self) -> bool:
        return self.current_index == len(self.steps) - 1

    def validate_step(self, index: int) -> StepValidationResult:
        return self.steps[index].validate(index, self.context.draft)

    def is_step_valid(self, index: int) -> bool:
        return self.validate_step(index).is_valid

    @property
    def is_busy(self) -> bool:
        return self._busy

    def set_busy(self, busy: bool):
        """Disable Next/Complete while a submission is in flight."""
        self._busy = busy
        self.refresh()

    def can_go_next(self) -> bool:
        """Forward control state: current step valid and nothing in flight."""
        return not self._busy and self.is_step_valid(self.current_index)

    def can_go_previous(self) -> bool:
        return self.current_index > 0

    def refresh(self):
        """Re-announce control states after the draft changed."""
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())

    # ==================== Transitions ====================

    def next_step(self) -> bool:
        """
        Advance, or complete on the last step.

        Returns:
            True if the step advanced or completion was triggered
        """
        if self._busy:
            logger.debug("Next ignored: submission in flight")
            return False

        result = self.validate_step(self.current_index)
        if not result.is_valid:
            logger.warning(f"Step {self.current_index} validation failed: {result.errors}")
            self.validation_failed.emit(result)
            return False

        self.context.mark_step_completed(self.current_index)

        if self.is_last_step():
            logger.info("Last step confirmed, completing wizard")
            self.complete_requested.emit()
            if self.on_complete:
                self.on_complete()
            return True

        return self._navigate_to(self.current_index + 1)

    def previous_step(self) -> bool:
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous: already at first step ({self.current_index})")
            return False
        return self._navigate_to(self.current_index - 1)

    def edit_jump(self, index: int) -> bool:
        """
        Jump straight to `index`, typically from a review line.

        Field values are left exactly as they are.
        """
        if self._busy:
            return False
        if index < 0 or index >= len(self.steps):
            logger.error(f"Invalid edit target: {index} (valid range: 0-{len(self.steps) - 1})")
            return False
        if index == self.current_index:
            return True
        return self._navigate_to(index)

    def _navigate_to(self, new_index: int) -> bool:
        old_index = self.current_index
        self.current_index = new_index
        self.context.current_step_index = new_index
        self.context.touch()

        self.step_changed.emit(old_index, new_index)
        self.refresh()

        logger.info(f"Navigation: Step {old_index} → {new_index}")
        return True

    def reset(self):
        """Return to the first step."""
        if self.current_index != 0:
            self._navigate_to(0)

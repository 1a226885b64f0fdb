# -*- coding: utf-8 -*-
"""
Base Controller
===============
Base class for controllers sitting between the wizard and the services.

Provides the operation started/completed/error signals and the loading
flag the wizard uses to disable navigation while work is in flight.
"""

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)


class BaseController(QObject):
    """
    Base controller class.

    Provides:
    - Operation started/completed/error signals
    - Loading state
    """

    # Common signals
    operation_started = pyqtSignal(str)  # operation name
    operation_completed = pyqtSignal(str, bool)  # operation name, success
    operation_error = pyqtSignal(str, str)  # operation name, error message
    loading_changed = pyqtSignal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._is_loading = False

    @property
    def is_loading(self) -> bool:
        """Check if controller is performing an operation."""
        return self._is_loading

    def _set_loading(self, loading: bool):
        self._is_loading = loading
        self.loading_changed.emit(loading)

    def _log_operation(self, operation: str, **kwargs):
        logger.info(f"{self.__class__.__name__}.{operation}: {kwargs}")

    def _emit_started(self, operation: str):
        self.operation_started.emit(operation)
        self._set_loading(True)

    def _emit_completed(self, operation: str, success: bool):
        self.operation_completed.emit(operation, success)
        self._set_loading(False)

    def _emit_error(self, operation: str, error: str):
        if error:
            logger.error(f"{self.__class__.__name__}: {error}")
        self.operation_error.emit(operation, error)
        self._set_loading(False)

# -*- coding: utf-8 -*-
"""
Stellium Controllers
====================
Controllers sit between the onboarding wizard and the services.

Usage:
    from controllers import build_submission_orchestrator

    orchestrator = build_submission_orchestrator()
    result = orchestrator.submit(draft)
    if result.success:
        print(f"Created: {result.subject_id}")
    else:
        print(f"Error: {result.error_message}")
"""

from controllers.base_controller import BaseController

from controllers.submission_orchestrator import (
    SubmissionOrchestrator,
    build_submission_orchestrator,
)

# All public exports
__all__ = [
    "BaseController",
    "SubmissionOrchestrator",
    "build_submission_orchestrator",
]

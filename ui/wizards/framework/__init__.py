# -*- coding: utf-8 -*-
"""
Wizard Framework - step descriptors, context and flow control.

Provides the pieces for multi-step wizards whose steps are declared
as data and resolved by index.
"""

from .step_descriptor import ReviewLine, StepDescriptor, StepValidationResult
from .wizard_context import WizardContext
from .step_navigator import WizardFlowController

__all__ = [
    'ReviewLine',
    'StepDescriptor',
    'StepValidationResult',
    'WizardContext',
    'WizardFlowController'
]

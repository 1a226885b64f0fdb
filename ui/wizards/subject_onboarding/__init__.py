# -*- coding: utf-8 -*-
"""Subject onboarding wizard."""

from .onboarding_context import OnboardingContext
from .onboarding_wizard import SubjectOnboardingWizard
from .steps import build_onboarding_steps

__all__ = [
    'OnboardingContext',
    'SubjectOnboardingWizard',
    'build_onboarding_steps',
]

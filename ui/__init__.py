# -*- coding: utf-8 -*-
"""Wizard layer of the onboarding flow."""

# -*- coding: utf-8 -*-
"""Wizard step validation services."""

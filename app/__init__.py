# -*- coding: utf-8 -*-
"""
Stellium Application Core Module
"""

from .config import Config, Screens, Vocabularies

__all__ = ["Config", "Screens", "Vocabularies"]

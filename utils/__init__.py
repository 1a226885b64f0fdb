# -*- coding: utf-8 -*-
"""
Stellium Utility Module
"""

from .logger import get_logger, setup_logger
from .datetime_utils import days_in_month, is_real_date, to_24_hour

__all__ = [
    "get_logger",
    "setup_logger",
    "days_in_month",
    "is_real_date",
    "to_24_hour",
]

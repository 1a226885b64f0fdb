# -*- coding: utf-8 -*-
"""
Timezone Resolution Service - UTC offset of the birth place at birth time.
"""

from typing import Optional

import requests

from app.config import Config
from models.subject import DraftSubjectProfile
from services.exceptions import TimezoneResolutionError
from utils.datetime_utils import birth_epoch_seconds
from utils.logger import get_logger

logger = get_logger(__name__)


class TimezoneResolutionService:
    """Google Time Zone API lookup returning the total offset in hours."""

    TIMEZONE_PATH = "/timezone/json"

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[int] = None):
        self.api_key = Config.GOOGLE_API_KEY if api_key is None else api_key
        self.base_url = (base_url or Config.GOOGLE_MAPS_BASE_URL).rstrip('/')
        self.timeout = timeout or Config.API_TIMEOUT

    def resolve(self, lat: float, lon: float, epoch_seconds: int) -> float:
        """
        Offset from UTC in hours, DST included.

        Half-hour and quarter-hour zones yield fractional values.

        Raises:
            TimezoneResolutionError: on request failure or a non-OK status
        """
        logger.info(f"[API REQ] GET {self.TIMEZONE_PATH} location={lat},{lon} timestamp={epoch_seconds}")
        try:
            response = requests.get(
                f"{self.base_url}{self.TIMEZONE_PATH}",
                params={
                    "location": f"{lat},{lon}",
                    "timestamp": epoch_seconds,
                    "key": self.api_key,
                },
                timeout=self.timeout
            )
            logger.info(f"[API RES] {response.status_code} {self.TIMEZONE_PATH}")
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Timezone lookup failed: {e}")
            raise TimezoneResolutionError(f"Timezone lookup failed: {e}", e)

        if data.get("status") != "OK":
            logger.error(f"Timezone API status: {data.get('status')}")
            raise TimezoneResolutionError(f"Error from TimeZone API: {data.get('status')}")

        try:
            offset_hours = (float(data["rawOffset"]) + float(data["dstOffset"])) / 3600
        except (KeyError, TypeError, ValueError) as e:
            raise TimezoneResolutionError("Timezone response is missing offsets", e)

        logger.info(f"Total offset in hours: {offset_hours}")
        return offset_hours

    def resolve_for_draft(self, draft: DraftSubjectProfile) -> float:
        """
        Offset for the draft's resolved birth place and birth moment.

        An unknown birth time uses the 12:00 sentinel, whatever hour and
        minute are still held in the draft.
        """
        if not draft.location.is_resolved:
            raise TimezoneResolutionError("Birth place has not been resolved")

        wall_time = draft.timezone_wall_time(Config.UNKNOWN_TIME_SENTINEL)
        epoch = birth_epoch_seconds(
            draft.birth_year, draft.birth_month, draft.birth_day, wall_time
        )
        return self.resolve(draft.location.latitude, draft.location.longitude, epoch)

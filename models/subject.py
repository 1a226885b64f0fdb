# -*- coding: utf-8 -*-
"""
Draft subject profile model.

The draft is built across the onboarding wizard steps and is never
persisted; only the result of submitting it is kept.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional
import copy

from utils.datetime_utils import (
    format_wire_date, format_wire_time, to_24_hour, is_real_date
)


class Gender(str, Enum):
    """Gender/sex values accepted by the backend."""
    MALE = "male"
    FEMALE = "female"
    NONBINARY = "nonbinary"

    @classmethod
    def values(cls):
        return [g.value for g in cls]


class Meridiem(str, Enum):
    AM = "AM"
    PM = "PM"


class SubjectMode(str, Enum):
    """Whose profile is being created."""
    SELF = "self"    # account holder
    GUEST = "guest"  # third party owned by the account holder


@dataclass
class BirthTime:
    """
    Birth time on a 12-hour clock, or the unknown sentinel.

    Hour/minute are kept when `unknown` is switched on so toggling back
    restores them; every consumer must check `unknown` first.
    """
    hour12: Optional[int] = None
    minute: Optional[int] = None
    meridiem: str = Meridiem.PM.value
    unknown: bool = False

    @property
    def is_complete(self) -> bool:
        """Known time with both hour and minute in range."""
        if self.hour12 is None or self.minute is None:
            return False
        return (1 <= self.hour12 <= 12 and 0 <= self.minute <= 59
                and self.meridiem in (Meridiem.AM.value, Meridiem.PM.value))

    @property
    def hour24(self) -> Optional[int]:
        if self.hour12 is None:
            return None
        return to_24_hour(self.hour12, self.meridiem)

    def wire_time(self) -> Optional[str]:
        """HH:MM (24h) for a known time, None when unknown or incomplete."""
        if self.unknown or not self.is_complete:
            return None
        return format_wire_time(self.hour24, self.minute)


@dataclass(frozen=True)
class BirthLocation:
    """
    Birth place: the typed query plus the resolved coordinates.

    Latitude, longitude and formatted address are set together or not at
    all; construct resolved instances through `resolve()`.
    """
    query_text: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    formatted_address: Optional[str] = None

    def __post_init__(self):
        resolved = (self.latitude, self.longitude, self.formatted_address)
        present = [value is not None for value in resolved]
        if any(present) and not all(present):
            raise ValueError("Resolved location fields must be set together")

    @property
    def is_resolved(self) -> bool:
        return self.latitude is not None

    def with_query(self, text: str) -> "BirthLocation":
        """Typing a new query invalidates any previous resolution."""
        return BirthLocation(query_text=text)

    def resolve(self, latitude: float, longitude: float,
                formatted_address: str, description: str) -> "BirthLocation":
        """Resolved copy; the suggestion description replaces the typed query."""
        return BirthLocation(
            query_text=description,
            latitude=float(latitude),
            longitude=float(longitude),
            formatted_address=formatted_address,
        )

    def unresolved(self) -> "BirthLocation":
        return replace(self, latitude=None, longitude=None, formatted_address=None)


@dataclass(frozen=True)
class LocalImageRef:
    """Pointer to an image file on this machine."""
    uri: str
    mime_type: str

    @property
    def path(self) -> str:
        """Filesystem path with any file:// scheme removed."""
        if self.uri.startswith("file://"):
            return self.uri[len("file://"):]
        return self.uri


# Draft fields that may be written through DraftSubjectProfile.update()
EDITABLE_FIELDS = (
    "first_name", "last_name", "gender",
    "birth_year", "birth_month", "birth_day",
    "birth_hour", "birth_minute", "meridiem", "unknown_time",
    "local_image",
)


@dataclass
class DraftSubjectProfile:
    """
    In-progress subject profile collected by the onboarding wizard.

    All writes go through `update()`, `set_location_query()`,
    `apply_resolved_location()` and `clear_resolved_location()`.
    """

    first_name: str = ""
    last_name: str = ""
    gender: Optional[str] = None

    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None
    birth_time: BirthTime = field(default_factory=BirthTime)

    location: BirthLocation = field(default_factory=BirthLocation)
    local_image: Optional[LocalImageRef] = None

    # ==================== Setter surface ====================

    def update(self, **fields) -> None:
        """
        Set one or more editable fields.

        Raises:
            KeyError: for unknown fields and for the resolved location fields,
                which only LocationResolutionService may populate.
        """
        unknown = [name for name in fields if name not in EDITABLE_FIELDS]
        if unknown:
            raise KeyError(f"Not editable draft fields: {', '.join(unknown)}")

        for name, value in fields.items():
            if name == "birth_hour":
                self.birth_time.hour12 = value
            elif name == "birth_minute":
                self.birth_time.minute = value
            elif name == "meridiem":
                self.birth_time.meridiem = value
            elif name == "unknown_time":
                self.birth_time.unknown = bool(value)
            else:
                setattr(self, name, value)

    def set_location_query(self, text: str) -> None:
        self.location = self.location.with_query(text)

    def apply_resolved_location(self, latitude: float, longitude: float,
                                formatted_address: str, description: str) -> None:
        self.location = self.location.resolve(
            latitude, longitude, formatted_address, description
        )

    def clear_resolved_location(self) -> None:
        self.location = self.location.unresolved()

    # ==================== Derived values ====================

    @property
    def has_real_birth_date(self) -> bool:
        return is_real_date(self.birth_year, self.birth_month, self.birth_day)

    @property
    def unknown_time(self) -> bool:
        return self.birth_time.unknown

    def wire_date(self) -> str:
        return format_wire_date(self.birth_year, self.birth_month, self.birth_day)

    def timezone_wall_time(self, sentinel: str = "12:00") -> str:
        """Wall-clock time used for the timezone lookup."""
        if self.birth_time.unknown:
            return sentinel
        return self.birth_time.wire_time()

    @property
    def full_name(self) -> str:
        parts = [self.first_name.strip(), self.last_name.strip()]
        return " ".join(p for p in parts if p)

    def snapshot(self) -> "DraftSubjectProfile":
        """Independent copy owned by one submission attempt."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging and review."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "gender": self.gender,
            "birth_year": self.birth_year,
            "birth_month": self.birth_month,
            "birth_day": self.birth_day,
            "birth_hour": self.birth_time.hour12,
            "birth_minute": self.birth_time.minute,
            "meridiem": self.birth_time.meridiem,
            "unknown_time": self.birth_time.unknown,
            "place_query": self.location.query_text,
            "lat": self.location.latitude,
            "lon": self.location.longitude,
            "place_of_birth": self.location.formatted_address,
            "has_photo": self.local_image is not None,
        }

"""
Core data models for shot tracking sessions
"""

import uuid
from dataclasses import dataclass, field, replace, FrozenInstanceError
from datetime import datetime
from typing import List, Dict, Optional, Tuple, Any
from enum import Enum
import numpy as np

from .constants import (
    MIN_RIM_RADIUS, MIN_BACKBOARD_WIDTH, MIN_BACKBOARD_HEIGHT,
    DEFAULT_RIM_CENTER, DEFAULT_RIM_RADIUS,
    DEFAULT_BACKBOARD_ORIGIN, DEFAULT_BACKBOARD_SIZE,
    DEFAULT_REFERENCE_LINE
)

Point2D = Tuple[float, float]
Size2D = Tuple[float, float]


def _point(value) -> Point2D:
    return (float(value[0]), float(value[1]))


class ShotResult(Enum):
    """Outcome of a shot attempt"""
    MAKE = "make"
    MISS = "miss"


class DistanceClass(Enum):
    """Distance classification of a shot"""
    UNKNOWN = "unknown"
    TWO_POINT = "twoPoint"
    THREE_POINT = "threePoint"
    FREE_THROW = "freeThrow"

    @property
    def display_name(self) -> str:
        return {
            DistanceClass.UNKNOWN: "Unknown",
            DistanceClass.TWO_POINT: "2PT",
            DistanceClass.THREE_POINT: "3PT",
            DistanceClass.FREE_THROW: "FT",
        }[self]


@dataclass
class CalibrationCircle:
    """Rim overlay"""
    center: Point2D
    radius: float  # relative to min(width, height)

    def to_dict(self) -> Dict[str, Any]:
        return {'center': list(self.center), 'radius': self.radius}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalibrationCircle':
        return cls(center=_point(data['center']), radius=float(data['radius']))


@dataclass
class CalibrationRectangle:
    """Backboard overlay"""
    origin: Point2D
    size: Size2D  # (width, height)

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def height(self) -> float:
        return self.size[1]

    def to_dict(self) -> Dict[str, Any]:
        return {'origin': list(self.origin), 'size': list(self.size)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalibrationRectangle':
        return cls(origin=_point(data['origin']), size=_point(data['size']))


@dataclass
class CalibrationLine:
    """Reference line overlay (free throw or three point line)"""
    start: Point2D
    end: Point2D

    @property
    def length(self) -> float:
        """Euclidean length in normalized units"""
        return float(np.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1]))

    def to_dict(self) -> Dict[str, Any]:
        return {'start': list(self.start), 'end': list(self.end)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalibrationLine':
        return cls(start=_point(data['start']), end=_point(data['end']))


@dataclass
class CourtCalibration:
    """Calibrated court geometry in normalized screen coordinates"""
    rim: CalibrationCircle = field(
        default_factory=lambda: CalibrationCircle(DEFAULT_RIM_CENTER, DEFAULT_RIM_RADIUS)
    )
    backboard: CalibrationRectangle = field(
        default_factory=lambda: CalibrationRectangle(DEFAULT_BACKBOARD_ORIGIN, DEFAULT_BACKBOARD_SIZE)
    )
    reference_line: Optional[CalibrationLine] = field(
        default_factory=lambda: CalibrationLine(*DEFAULT_REFERENCE_LINE)
    )

    def is_valid(self) -> bool:
        """Check that the overlays are large enough to start a session"""
        return (
            self.rim.radius > MIN_RIM_RADIUS
            and self.backboard.width > MIN_BACKBOARD_WIDTH
            and self.backboard.height > MIN_BACKBOARD_HEIGHT
        )

    def copy(self) -> 'CourtCalibration':
        """Value copy, used when a session captures the calibration"""
        return CourtCalibration.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rim': self.rim.to_dict(),
            'backboard': self.backboard.to_dict(),
            'reference_line': self.reference_line.to_dict() if self.reference_line else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CourtCalibration':
        line = data.get('reference_line')
        return cls(
            rim=CalibrationCircle.from_dict(data['rim']),
            backboard=CalibrationRectangle.from_dict(data['backboard']),
            reference_line=CalibrationLine.from_dict(line) if line else None
        )


@dataclass(frozen=True)
class ShotEvent:
    """Single recorded shot attempt"""
    result: ShotResult
    distance_class: DistanceClass = DistanceClass.UNKNOWN
    timestamp: datetime = field(default_factory=datetime.now)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def is_make(self) -> bool:
        return self.result is ShotResult.MAKE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'timestamp': self.timestamp.isoformat(),
            'result': self.result.value,
            'distance_class': self.distance_class.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShotEvent':
        return cls(
            id=uuid.UUID(data['id']),
            timestamp=datetime.fromisoformat(data['timestamp']),
            result=ShotResult(data['result']),
            distance_class=DistanceClass(data.get('distance_class', DistanceClass.UNKNOWN.value))
        )


@dataclass
class SessionStats:
    """Running shooting counters for one session"""
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    total_attempts: int = 0
    total_makes: int = 0
    three_point_attempts: int = 0
    three_point_makes: int = 0
    free_throw_attempts: int = 0
    free_throw_makes: int = 0
    _read_only: bool = field(default=False, init=False, repr=False, compare=False)

    def __setattr__(self, name, value):
        if self._read_only:
            raise FrozenInstanceError(f"cannot assign to field {name!r} of archived stats")
        super().__setattr__(name, value)

    @property
    def field_goal_percentage(self) -> float:
        """Makes over attempts as a fraction, 0 when nothing was attempted"""
        if self.total_attempts == 0:
            return 0.0
        return self.total_makes / self.total_attempts

    def record(self, event: ShotEvent) -> 'SessionStats':
        """Fold one shot into the counters (in place)"""
        made = event.is_make

        self.total_attempts += 1
        if made:
            self.total_makes += 1

        if event.distance_class is DistanceClass.THREE_POINT:
            self.three_point_attempts += 1
            if made:
                self.three_point_makes += 1
        elif event.distance_class is DistanceClass.FREE_THROW:
            self.free_throw_attempts += 1
            if made:
                self.free_throw_makes += 1
        # two point and unknown shots only count toward the totals

        return self

    def snapshot(self) -> 'SessionStats':
        """Writable copy of the counters"""
        return replace(self)

    def freeze(self) -> 'SessionStats':
        """Make these counters read-only; snapshots stay writable"""
        object.__setattr__(self, '_read_only', True)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'total_attempts': self.total_attempts,
            'total_makes': self.total_makes,
            'three_point_attempts': self.three_point_attempts,
            'three_point_makes': self.three_point_makes,
            'free_throw_attempts': self.free_throw_attempts,
            'free_throw_makes': self.free_throw_makes,
            'field_goal_percentage': self.field_goal_percentage
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionStats':
        return cls(
            id=uuid.UUID(data['id']),
            total_attempts=int(data.get('total_attempts', 0)),
            total_makes=int(data.get('total_makes', 0)),
            three_point_attempts=int(data.get('three_point_attempts', 0)),
            three_point_makes=int(data.get('three_point_makes', 0)),
            free_throw_attempts=int(data.get('free_throw_attempts', 0)),
            free_throw_makes=int(data.get('free_throw_makes', 0))
        )


@dataclass(frozen=True)
class SessionRecord:
    """
    Archived snapshot of a completed session

    Holds its own read-only copy of the stats, so neither the live session
    nor readers of the history can change it.
    """
    stats: SessionStats
    events: Tuple[ShotEvent, ...]
    date: datetime = field(default_factory=datetime.now)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        object.__setattr__(self, 'stats', self.stats.snapshot().freeze())
        object.__setattr__(self, 'events', tuple(self.events))

    @classmethod
    def create(cls, stats: SessionStats, events: List[ShotEvent]) -> 'SessionRecord':
        """Build a record from live session state, copying both"""
        return cls(stats=stats, events=events)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'date': self.date.isoformat(),
            'stats': self.stats.to_dict(),
            'events': [e.to_dict() for e in self.events]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionRecord':
        return cls(
            id=uuid.UUID(data['id']),
            date=datetime.fromisoformat(data['date']),
            stats=SessionStats.from_dict(data['stats']),
            events=tuple(ShotEvent.from_dict(e) for e in data.get('events', []))
        )

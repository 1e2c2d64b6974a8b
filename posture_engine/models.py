from enum import Enum
from typing import Any, Dict, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field


class Landmark(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0
    visibility: float = 0.0


# Fixed-index frame; entries may be missing (None) or raw mappings from JSON
LandmarkSet = Sequence[Union[Landmark, Dict[str, Any], None]]


class IgnoreReason(str, Enum):
    NO_USER = "NoUser"
    ADJUST_CAMERA = "AdjustCamera"
    HAND_NEAR_FACE = "HandNearFace"
    LOOKING_AWAY = "LookingAway"


class ResultReason(str, Enum):
    NONE = "None"
    IGNORE = "Ignore"
    BAD_POSTURE = "BadPosture"


class PostureMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    neck: int = Field(100, ge=0, le=100)
    shoulders: int = Field(100, ge=0, le=100)
    spine: int = Field(100, ge=0, le=100)


class ValidationOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    proceed: bool
    reason: Optional[IgnoreReason] = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(proceed=True)

    @classmethod
    def ignore(cls, reason: IgnoreReason) -> "ValidationOutcome":
        return cls(proceed=False, reason=reason)


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    is_good: bool
    message: str
    reason: ResultReason


class PostureResult(BaseModel):
    """Per-frame verdict. Immutable, carries no identity across frames."""
    model_config = ConfigDict(frozen=True)

    is_good: bool
    score: int = Field(ge=0, le=100)
    metrics: PostureMetrics
    message: str
    reason: ResultReason
    ignore_reason: Optional[IgnoreReason] = None

    @property
    def is_ignored(self) -> bool:
        return self.reason == ResultReason.IGNORE


class SmootherState(BaseModel):
    """
    Long-lived per-session state. Caller-owned, mutated only by the smoother.

    The accumulators (evaluated_frames, good_frames, *_total) feed the
    session summary and only change on evaluated (non-ignored) frames.
    """

    display_score: float = 100.0
    momentum: float = 0.0
    slouch_seconds: float = 0.0

    display_neck: float = 100.0
    display_shoulders: float = 100.0
    display_spine: float = 100.0

    evaluated_frames: int = 0
    good_frames: int = 0
    score_total: float = 0.0
    neck_total: float = 0.0
    shoulders_total: float = 0.0
    spine_total: float = 0.0


class DisplaySnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_score: float
    metrics: PostureMetrics
    momentum: float
    slouch_seconds: float


class SessionSummary(BaseModel):
    """Final session snapshot handed to an external persistence layer"""
    id: str
    start_time: str  # ISO 8601
    end_time: str    # ISO 8601
    duration_sec: int
    avg_score: int
    good_time_sec: int
    bad_time_sec: int
    evaluated_frames: int
    breakdown: Dict[str, int]

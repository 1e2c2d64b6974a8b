# Core scoring logic - geometric sub-scores from validated landmarks
import math
from typing import Dict, Optional

from posture_engine import config
from posture_engine import logger
from posture_engine.landmarks import get_layout, get_point, midpoint
from posture_engine.models import LandmarkSet, PostureMetrics

EPSILON = 1e-9


def clamp_score(raw: float) -> int:
    """Clamp a raw sub-score into [SCORE_FLOOR, SCORE_CEILING] and round it"""
    return int(round(min(max(raw, config.SCORE_FLOOR), config.SCORE_CEILING)))


def vertical_deviation(dx: float, dy: float, aspect_ratio: Optional[float] = None) -> Optional[float]:
    """
    Angle of a downward vector measured against true vertical

    x is scaled by the aspect ratio first, since normalized x and y
    do not cover the same physical distance on a non-square frame.

    Args:
        dx: Horizontal component (normalized units)
        dy: Vertical component (normalized units, y grows downward)
        aspect_ratio: Frame width / height, defaults to config.ASPECT_RATIO

    Returns:
        Absolute deviation from 90 degrees, or None for a degenerate vector
    """
    if aspect_ratio is None:
        aspect_ratio = config.ASPECT_RATIO
    sx = dx * aspect_ratio
    if not (math.isfinite(sx) and math.isfinite(dy)):
        return None
    if math.hypot(sx, dy) < EPSILON:
        return None

    angle = math.degrees(math.atan2(dy, sx))
    return abs(angle - config.VERTICAL_REFERENCE_DEG)


def neck_score(ear_mid: tuple, shoulder_mid: tuple) -> Optional[float]:
    deviation = vertical_deviation(shoulder_mid[0] - ear_mid[0], shoulder_mid[1] - ear_mid[1])
    if deviation is None:
        return None
    return 100 - deviation * config.NECK_PENALTY


def shoulder_score(left_y: float, right_y: float) -> Optional[float]:
    diff = abs(left_y - right_y) * config.SHOULDER_SCALE
    if not math.isfinite(diff):
        return None
    return 100 - diff * config.SHOULDER_PENALTY


def spine_score(shoulder_mid: tuple, hip_mid: tuple) -> Optional[float]:
    deviation = vertical_deviation(hip_mid[0] - shoulder_mid[0], hip_mid[1] - shoulder_mid[1])
    if deviation is None:
        return None
    return 100 - deviation * config.SPINE_PENALTY


def score(frame: LandmarkSet, layout: Optional[Dict[str, int]] = None) -> Optional[PostureMetrics]:
    """
    Convert a validated frame into neck / shoulders / spine sub-scores

    Spine falls back to the shoulder score when the hips are off-screen
    or unreliable (typical webcam close-up).

    Args:
        frame: Landmark frame that passed validation
        layout: Name -> index mapping, defaults to the configured layout

    Returns:
        PostureMetrics, or None when the geometry is degenerate
    """
    layout = layout or get_layout()

    left_ear = get_point(frame, "left_ear", layout)
    right_ear = get_point(frame, "right_ear", layout)
    left_shoulder = get_point(frame, "left_shoulder", layout)
    right_shoulder = get_point(frame, "right_shoulder", layout)
    if None in (left_ear, right_ear, left_shoulder, right_shoulder):
        return None

    ear_mid = midpoint(left_ear, right_ear)
    shoulder_mid = midpoint(left_shoulder, right_shoulder)

    raw_neck = neck_score(ear_mid, shoulder_mid)
    raw_shoulders = shoulder_score(left_shoulder.y, right_shoulder.y)
    if raw_neck is None or raw_shoulders is None:
        return None

    raw_spine = None
    left_hip = get_point(frame, "left_hip", layout)
    right_hip = get_point(frame, "right_hip", layout)
    if _hip_usable(left_hip) and _hip_usable(right_hip):
        raw_spine = spine_score(shoulder_mid, midpoint(left_hip, right_hip))
    if raw_spine is None:
        raw_spine = raw_shoulders

    metrics = PostureMetrics(
        neck=clamp_score(raw_neck),
        shoulders=clamp_score(raw_shoulders),
        spine=clamp_score(raw_spine)
    )
    logger.log_frame("SCORER", "Metrics Computed", metrics.model_dump())
    return metrics


def _hip_usable(hip) -> bool:
    return hip is not None and hip.visibility >= config.MIN_HIP_VISIBILITY

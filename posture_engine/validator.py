# Landmark Validator - cheap rejections before any trigonometry
from collections.abc import Sequence
from typing import Dict, Optional

from posture_engine import config
from posture_engine import logger
from posture_engine.errors import PreconditionViolation
from posture_engine.landmarks import REQUIRED_POINTS, get_layout, get_point
from posture_engine.models import IgnoreReason, LandmarkSet, ValidationOutcome


def check_frame_type(frame) -> None:
    """Fail fast on values that cannot be a landmark frame at all"""
    if frame is None:
        return
    if isinstance(frame, (str, bytes)) or not isinstance(frame, Sequence):
        raise PreconditionViolation(
            f"Landmark frame must be a sequence, got {type(frame).__name__}"
        )


def validate(frame: Optional[LandmarkSet], layout: Optional[Dict[str, int]] = None) -> ValidationOutcome:
    """
    Decide whether a frame is usable for scoring

    Checks run in order, first match wins:
      1. Completeness: nose, ears and shoulders present      -> NO_USER
      2. Confidence:   both shoulders visibility >= 0.2      -> ADJUST_CAMERA
      3. Occlusion:    a visible wrist above the nose        -> HAND_NEAR_FACE
      4. Head turn:    nose outside the span of the ears     -> LOOKING_AWAY

    Args:
        frame: Fixed-index landmark sequence (None means no pose detected)
        layout: Name -> index mapping, defaults to the configured layout

    Returns:
        ValidationOutcome (proceed, or ignore with a reason)
    """
    check_frame_type(frame)
    layout = layout or get_layout()

    if not frame:
        return _ignore(IgnoreReason.NO_USER)

    points = {name: get_point(frame, name, layout) for name in REQUIRED_POINTS}
    missing = [name for name, point in points.items() if point is None]
    if missing:
        return _ignore(IgnoreReason.NO_USER, {"missing": ", ".join(missing)})

    nose = points["nose"]
    left_ear, right_ear = points["left_ear"], points["right_ear"]
    left_shoulder, right_shoulder = points["left_shoulder"], points["right_shoulder"]

    threshold = config.MIN_SHOULDER_VISIBILITY
    if left_shoulder.visibility < threshold or right_shoulder.visibility < threshold:
        return _ignore(IgnoreReason.ADJUST_CAMERA, {
            "left_shoulder": f"{left_shoulder.visibility:.2f}",
            "right_shoulder": f"{right_shoulder.visibility:.2f}",
            "threshold": threshold
        })

    # y grows downward, so "above the nose" is a smaller y
    for wrist_name in ("left_wrist", "right_wrist"):
        wrist = get_point(frame, wrist_name, layout)
        if wrist is None:
            continue
        if wrist.visibility > config.MIN_WRIST_VISIBILITY and wrist.y < nose.y:
            return _ignore(IgnoreReason.HAND_NEAR_FACE, {"wrist": wrist_name})

    ear_low = min(left_ear.x, right_ear.x)
    ear_high = max(left_ear.x, right_ear.x)
    if not ear_low <= nose.x <= ear_high:
        return _ignore(IgnoreReason.LOOKING_AWAY, {
            "nose_x": f"{nose.x:.3f}",
            "ear_span": f"{ear_low:.3f}..{ear_high:.3f}"
        })

    return ValidationOutcome.ok()


def _ignore(reason: IgnoreReason, data: Optional[dict] = None) -> ValidationOutcome:
    logger.log_frame("VALIDATOR", f"Frame Ignored: {reason.value}", data)
    return ValidationOutcome.ignore(reason)

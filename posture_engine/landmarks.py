# Landmark layouts and frame access helpers
import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from posture_engine import config
from posture_engine.errors import PreconditionViolation
from posture_engine.models import Landmark, LandmarkSet

# Anatomical name -> index, per pose model output convention
LAYOUTS = {
    # MediaPipe / BlazePose (33 landmarks)
    "blazepose": {
        "nose": 0,
        "left_ear": 7,
        "right_ear": 8,
        "left_shoulder": 11,
        "right_shoulder": 12,
        "left_wrist": 15,
        "right_wrist": 16,
        "left_hip": 23,
        "right_hip": 24
    },
    # COCO / MoveNet (17 keypoints)
    "movenet": {
        "nose": 0,
        "left_ear": 3,
        "right_ear": 4,
        "left_shoulder": 5,
        "right_shoulder": 6,
        "left_wrist": 9,
        "right_wrist": 10,
        "left_hip": 11,
        "right_hip": 12
    }
}

LAYOUT_SIZES = {
    "blazepose": 33,
    "movenet": 17
}

REQUIRED_POINTS = ["nose", "left_ear", "right_ear", "left_shoulder", "right_shoulder"]


def get_layout(name: Optional[str] = None) -> Dict[str, int]:
    """
    Look up a landmark layout by name

    Args:
        name: Layout name, defaults to config.LANDMARK_LAYOUT

    Returns:
        Dict of anatomical name -> frame index
    """
    key = (name or config.LANDMARK_LAYOUT).lower()
    if key not in LAYOUTS:
        raise PreconditionViolation(
            f"Unknown landmark layout '{key}', expected one of {sorted(LAYOUTS)}"
        )
    return dict(LAYOUTS[key])


def to_landmark(obj: Any) -> Optional[Landmark]:
    """Coerce a Landmark, a mapping or None. Unusable entries become None."""
    if obj is None or isinstance(obj, Landmark):
        return obj
    if not isinstance(obj, Mapping):
        return None

    data = dict(obj)
    if "visibility" not in data and "score" in data:
        data["visibility"] = data.pop("score")
    if data.get("visibility") is None:
        data["visibility"] = 0.0
    try:
        return Landmark(**{k: data[k] for k in ("x", "y", "z", "visibility") if k in data})
    except ValidationError:
        return None


def get_point(frame: LandmarkSet, name: str, layout: Dict[str, int]) -> Optional[Landmark]:
    """
    Read one anatomical point from a frame

    Returns None when the index is out of range, the entry is missing,
    or its coordinates or visibility are not finite.
    """
    index = layout[name]
    if index >= len(frame):
        return None
    point = to_landmark(frame[index])
    if point is None:
        return None
    if not all(math.isfinite(v) for v in (point.x, point.y, point.visibility)):
        return None
    return point


def midpoint(a: Landmark, b: Landmark) -> tuple:
    """Midpoint of two landmarks as an (x, y) tuple"""
    return ((a.x + b.x) / 2, (a.y + b.y) / 2)


def from_keypoints(keypoints: Sequence[Mapping[str, Any]], width: float, height: float) -> List[Landmark]:
    """
    Convert pixel-space detector keypoints to normalized landmarks

    Args:
        keypoints: Sequence of {"x": px, "y": px, "score": conf} in layout order
        width: Source frame width in pixels
        height: Source frame height in pixels

    Returns:
        List of Landmarks (empty when the frame has no dimensions)
    """
    if not width or not height:
        return []

    landmarks = []
    for kp in keypoints:
        landmarks.append(Landmark(
            x=float(kp["x"]) / width,
            y=float(kp["y"]) / height,
            z=0.0,
            visibility=float(kp.get("score") or 0.0)
        ))
    return landmarks

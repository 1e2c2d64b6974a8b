"""
Synthetic landmark frames for demos, replay files and tests.

PostureSimulator drifts three posture parameters with a bounded random walk
and renders each step into a fixed-index landmark frame.
"""
import random
from typing import Dict, List, Optional

from posture_engine import config
from posture_engine.landmarks import LAYOUT_SIZES, get_layout
from posture_engine.models import Landmark

# Posture parameter ranges (normalized units)
PARAM_RANGES = {
    "neck_lean": (-0.03, 0.08),       # ear midpoint x offset from shoulders
    "shoulder_tilt": (-0.02, 0.02),   # left minus right shoulder y
    "torso_lean": (-0.03, 0.06)       # hip midpoint x offset from shoulders
}

# Random walk configuration
PARAM_CHANGE_MAX = 0.004  # Max change per frame

# Upright reference pose
SHOULDER_Y = 0.60
EAR_Y = 0.35
NOSE_Y = 0.38
HIP_Y = 0.95
VISIBILITY = 0.9


def build_frame(neck_lean: float = 0.0, shoulder_tilt: float = 0.0, torso_lean: float = 0.0,
                include_hips: bool = True, layout_name: Optional[str] = None) -> List[Optional[Landmark]]:
    """
    Render posture parameters into a landmark frame

    Args:
        neck_lean: Horizontal offset of the head from the shoulder midpoint
        shoulder_tilt: Vertical difference between left and right shoulder
        torso_lean: Horizontal offset of the hips from the shoulder midpoint
        include_hips: False mimics a webcam close-up with hips off-screen
        layout_name: Landmark layout, defaults to config.LANDMARK_LAYOUT

    Returns:
        Fixed-index list, None at indices the simulator does not model
    """
    name = (layout_name or config.LANDMARK_LAYOUT).lower()
    layout = get_layout(name)
    frame: List[Optional[Landmark]] = [None] * LAYOUT_SIZES[name]

    points = {
        "nose": (0.50 + neck_lean, NOSE_Y),
        "left_ear": (0.45 + neck_lean, EAR_Y),
        "right_ear": (0.55 + neck_lean, EAR_Y),
        "left_shoulder": (0.40, SHOULDER_Y + shoulder_tilt / 2),
        "right_shoulder": (0.60, SHOULDER_Y - shoulder_tilt / 2)
    }
    if include_hips:
        points["left_hip"] = (0.42 + torso_lean, HIP_Y)
        points["right_hip"] = (0.58 + torso_lean, HIP_Y)

    for point_name, (x, y) in points.items():
        frame[layout[point_name]] = Landmark(x=x, y=y, z=0.0, visibility=VISIBILITY)
    return frame


def upright_frame(layout_name: Optional[str] = None) -> List[Optional[Landmark]]:
    return build_frame(layout_name=layout_name)


def slouched_frame(layout_name: Optional[str] = None) -> List[Optional[Landmark]]:
    return build_frame(neck_lean=0.06, torso_lean=0.05, layout_name=layout_name)


class PostureSimulator:
    """Tracks current posture parameters with a bounded random walk"""

    def __init__(self, seed: Optional[int] = None, include_hips: bool = True,
                 layout_name: Optional[str] = None):
        self.rng = random.Random(seed)
        self.include_hips = include_hips
        self.layout_name = layout_name

        # Initialize upright
        self.current = {metric: 0.0 for metric in PARAM_RANGES}

    def next_params(self) -> Dict[str, float]:
        """Generate next set of posture parameters using random walk"""
        for metric, (min_val, max_val) in PARAM_RANGES.items():
            delta = self.rng.uniform(-PARAM_CHANGE_MAX, PARAM_CHANGE_MAX)
            self.current[metric] = max(min_val, min(max_val, self.current[metric] + delta))
        return dict(self.current)

    def next_frame(self) -> List[Optional[Landmark]]:
        params = self.next_params()
        return build_frame(include_hips=self.include_hips, layout_name=self.layout_name, **params)

    def frames(self, count: int) -> List[List[Optional[Landmark]]]:
        return [self.next_frame() for _ in range(count)]

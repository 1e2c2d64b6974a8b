import pytest

from posture_engine import config
from posture_engine.landmarks import get_layout
from posture_engine.models import Landmark, PostureMetrics, PostureResult, ResultReason
from posture_engine.simulator import build_frame


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.setattr(config, "LANDMARK_LAYOUT", "blazepose")
    monkeypatch.setattr(config, "LOG_FRAMES", False)
    monkeypatch.setattr(config, "LOG_LEVEL", "INFO")


@pytest.fixture
def layout():
    return get_layout("blazepose")


def set_point(frame, name, x=None, y=None, visibility=0.9, layout_name="blazepose"):
    """Place (or overwrite) one named landmark in a frame"""
    index = get_layout(layout_name)[name]
    current = frame[index]
    frame[index] = Landmark(
        x=(current.x if current else 0.5) if x is None else x,
        y=(current.y if current else 0.5) if y is None else y,
        z=0.0,
        visibility=visibility
    )
    return frame


def make_result(score=100, is_good=True, neck=100, shoulders=100, spine=100):
    return PostureResult(
        is_good=is_good,
        score=score,
        metrics=PostureMetrics(neck=neck, shoulders=shoulders, spine=spine),
        message="test",
        reason=ResultReason.NONE if is_good else ResultReason.BAD_POSTURE
    )


@pytest.fixture
def upright():
    return build_frame()

import pytest

from posture_engine import config
from posture_engine.pipeline import ignored_result
from posture_engine.models import IgnoreReason
from posture_engine.smoother import new_state, snapshot, update

from conftest import make_result


def test_session_defaults():
    state = new_state()
    assert state.display_score == 100
    assert state.momentum == 0
    assert state.slouch_seconds == 0


def test_display_score_moves_ten_percent_toward_target():
    state = new_state()
    snap = update(state, make_result(score=50, is_good=False))
    assert snap.display_score == pytest.approx(95.0)


def test_sub_metrics_are_smoothed_independently():
    state = new_state()
    update(state, make_result(score=60, is_good=False, neck=0, shoulders=100, spine=50))
    assert state.display_neck == pytest.approx(90.0)
    assert state.display_shoulders == pytest.approx(100.0)
    assert state.display_spine == pytest.approx(95.0)
    assert snapshot(state).metrics.neck == 90


def test_constant_score_converges_geometrically():
    state = new_state()
    for step in range(1, 61):
        update(state, make_result(score=40, is_good=False))
        assert state.display_score - 40 == pytest.approx(60 * 0.9 ** step)
    assert state.display_score == pytest.approx(40, abs=0.2)


def test_momentum_rises_slowly_and_caps():
    state = new_state()
    update(state, make_result())
    assert state.momentum == pytest.approx(0.05)
    for _ in range(40):
        update(state, make_result())
    assert state.momentum == pytest.approx(1.0)


def test_momentum_falls_faster_and_floors():
    state = new_state()
    update(state, make_result(score=30, is_good=False))
    assert state.momentum == pytest.approx(-0.1)
    for _ in range(20):
        update(state, make_result(score=30, is_good=False))
    assert state.momentum == pytest.approx(-1.0)


def test_slouch_time_counts_bad_frames_only():
    state = new_state()
    for _ in range(30):
        update(state, make_result(score=30, is_good=False))
    for _ in range(30):
        update(state, make_result())
    assert state.slouch_seconds == pytest.approx(30 * config.FRAME_INTERVAL_SECONDS)
    assert state.slouch_seconds == pytest.approx(1.0)


def test_ignored_results_leave_state_untouched():
    state = new_state()
    update(state, make_result(score=50, is_good=False))
    before = state.model_dump()

    for reason in IgnoreReason:
        snap = update(state, ignored_result(reason))
        assert snap.display_score == before["display_score"]

    assert state.model_dump() == before


def test_accumulators_track_evaluated_frames():
    state = new_state()
    update(state, make_result())
    update(state, make_result(score=40, is_good=False, neck=20))
    assert state.evaluated_frames == 2
    assert state.good_frames == 1
    assert state.score_total == 140
    assert state.neck_total == 120

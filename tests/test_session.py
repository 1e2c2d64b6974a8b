from datetime import datetime, timedelta, timezone

import pytest

from posture_engine import start_session, stop_session
from posture_engine.errors import PreconditionViolation
from posture_engine.models import IgnoreReason
from posture_engine.recommendation import build_recommendation
from posture_engine.models import SessionSummary
from posture_engine.simulator import slouched_frame, upright_frame

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def test_new_session_starts_from_defaults():
    session = start_session(started_at=T0)
    assert session.active
    assert session.state.display_score == 100
    assert session.state.momentum == 0
    assert session.state.slouch_seconds == 0


def test_summary_splits_good_and_bad_time():
    session = start_session(sensitivity=5, started_at=T0)
    for _ in range(30):
        session.process(upright_frame())
    for _ in range(30):
        session.process(slouched_frame())

    summary = stop_session(session, ended_at=T0 + timedelta(seconds=60))

    assert summary.duration_sec == 60
    assert summary.evaluated_frames == 60
    assert summary.good_time_sec == 1
    assert summary.bad_time_sec == 1
    assert summary.avg_score == 84
    assert summary.breakdown["shoulders"] == 100
    assert summary.start_time == T0.isoformat()
    assert not session.active


def test_live_sensitivity_overrides_session_default():
    session = start_session(sensitivity=5, started_at=T0)
    result, _ = session.process(slouched_frame(), 1)
    assert result.is_good
    result, _ = session.process(slouched_frame())
    assert not result.is_good


def test_ignored_frames_are_counted_but_not_smoothed():
    session = start_session(started_at=T0)
    result, snap = session.process(None)
    assert result.ignore_reason == IgnoreReason.NO_USER
    assert session.ignored_frames == 1
    assert session.state.evaluated_frames == 0
    assert snap.display_score == 100


def test_empty_session_summary_is_neutral():
    session = start_session(started_at=T0)
    summary = stop_session(session, ended_at=T0 + timedelta(seconds=5))
    assert summary.evaluated_frames == 0
    assert summary.avg_score == 100
    assert summary.good_time_sec == 0
    assert summary.bad_time_sec == 0


def test_stopped_session_rejects_more_work():
    session = start_session(started_at=T0)
    stop_session(session, ended_at=T0)
    with pytest.raises(PreconditionViolation):
        stop_session(session)
    with pytest.raises(PreconditionViolation):
        session.process(upright_frame())


def test_stop_without_session_is_a_caller_bug():
    with pytest.raises(PreconditionViolation):
        stop_session(None)


def test_invalid_session_sensitivity():
    with pytest.raises(PreconditionViolation):
        start_session(sensitivity=12)


def test_unknown_layout_is_rejected():
    with pytest.raises(PreconditionViolation):
        start_session(layout="openpose")


def test_session_logs_lifecycle(capsys):
    session = start_session(started_at=T0)
    stop_session(session, ended_at=T0)
    out = capsys.readouterr().out
    assert "SESSION_START" in out
    assert "Session Stopped" in out


def _summary(session_id, avg, neck, spine=95, shoulders=95):
    return SessionSummary(
        id=session_id,
        start_time=T0.isoformat(),
        end_time=T0.isoformat(),
        duration_sec=600,
        avg_score=avg,
        good_time_sec=300,
        bad_time_sec=300,
        evaluated_frames=18000,
        breakdown={"neck": neck, "spine": spine, "shoulders": shoulders}
    )


def test_recommendation_targets_weakest_area():
    rec = build_recommendation(_summary("s1", 70, neck=50))
    assert rec["risk_level"] == "HIGH"
    assert rec["dominant_issue"] == "neck"
    assert rec["recommendation"]["priority"] == "HIGH"
    assert "Lift Your Head!" in rec["recommendation"]["message"]


def test_recommendation_for_clean_session():
    rec = build_recommendation(_summary("s1", 98, neck=98, spine=98, shoulders=98))
    assert rec["risk_level"] == "NONE"
    assert rec["dominant_issue"] is None
    assert rec["recommendation"]["actions"] == []


def test_recommendation_flags_worsening_trend():
    history = [_summary("s0", 92, neck=90)]
    rec = build_recommendation(_summary("s1", 75, neck=65), history)
    assert rec["trends"]["neck"]["direction"] == "WORSENING"
    assert rec["trends"]["overall"]["change"] == -17
    assert "Increase posture breaks frequency" in rec["recommendation"]["actions"]


def test_recommendation_does_not_mutate_rules():
    history = [_summary("s0", 92, neck=90)]
    build_recommendation(_summary("s1", 75, neck=65), history)
    rec = build_recommendation(_summary("s2", 75, neck=65))
    assert "Increase posture breaks frequency" not in rec["recommendation"]["actions"]

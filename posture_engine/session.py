# Session Lifecycle - start/stop tracking and build the session summary
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from posture_engine import classifier
from posture_engine import config
from posture_engine import logger
from posture_engine import pipeline
from posture_engine import smoother
from posture_engine.errors import PreconditionViolation
from posture_engine.landmarks import get_layout
from posture_engine.models import (
    DisplaySnapshot,
    LandmarkSet,
    PostureResult,
    SessionSummary,
    SmootherState,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TrackingSession(BaseModel):
    """
    One contiguous tracking interval. Single writer: do not call
    process() for the same session from more than one thread at a time.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = Field(default_factory=utc_now)
    ended_at: Optional[datetime] = None
    sensitivity: int = config.DEFAULT_SENSITIVITY
    layout: Dict[str, int] = Field(default_factory=get_layout)
    state: SmootherState = Field(default_factory=smoother.new_state)
    ignored_frames: int = 0

    @property
    def active(self) -> bool:
        return self.ended_at is None

    def process(self, frame: Optional[LandmarkSet],
                sensitivity: Optional[int] = None) -> Tuple[PostureResult, DisplaySnapshot]:
        """
        Evaluate one frame and update the smoother

        Args:
            frame: Fixed-index landmark sequence
            sensitivity: Live sensitivity, falls back to the session default

        Returns:
            Tuple of (PostureResult, DisplaySnapshot)
        """
        if not self.active:
            raise PreconditionViolation(f"Session {self.id} is already stopped")

        level = self.sensitivity if sensitivity is None else sensitivity
        result, snap = pipeline.evaluate_and_smooth(self.state, frame, level, self.layout)
        if result.is_ignored:
            self.ignored_frames += 1
        return result, snap


def start_session(sensitivity: int = config.DEFAULT_SENSITIVITY,
                  layout: Optional[str] = None,
                  started_at: Optional[datetime] = None) -> TrackingSession:
    """
    Begin a tracking session with fresh smoother defaults

    Args:
        sensitivity: Default sensitivity for frames processed without one
        layout: Landmark layout name, defaults to config.LANDMARK_LAYOUT
        started_at: Start time override (UTC now by default)

    Returns:
        TrackingSession
    """
    classifier.check_sensitivity(sensitivity)
    session = TrackingSession(
        sensitivity=sensitivity,
        layout=get_layout(layout),
        started_at=started_at or utc_now()
    )

    logger.log_lifecycle("SESSION_START", session.id)
    logger.log_session("Session Started", {
        "session_id": session.id,
        "sensitivity": sensitivity,
        "layout": layout or config.LANDMARK_LAYOUT
    })
    return session


def summarize(session: TrackingSession, ended_at: datetime) -> SessionSummary:
    """Build the persistence hand-off for a session"""
    state = session.state
    frames = state.evaluated_frames
    bad_frames = frames - state.good_frames

    if frames:
        avg_score = int(round(state.score_total / frames))
        breakdown = {
            "neck": int(round(state.neck_total / frames)),
            "shoulders": int(round(state.shoulders_total / frames)),
            "spine": int(round(state.spine_total / frames))
        }
    else:
        avg_score = config.NEUTRAL_SCORE
        breakdown = {"neck": config.NEUTRAL_SCORE, "shoulders": config.NEUTRAL_SCORE, "spine": config.NEUTRAL_SCORE}

    return SessionSummary(
        id=session.id,
        start_time=session.started_at.isoformat(),
        end_time=ended_at.isoformat(),
        duration_sec=max(0, int((ended_at - session.started_at).total_seconds())),
        avg_score=avg_score,
        good_time_sec=int(round(state.good_frames * config.FRAME_INTERVAL_SECONDS)),
        bad_time_sec=int(round(bad_frames * config.FRAME_INTERVAL_SECONDS)),
        evaluated_frames=frames,
        breakdown=breakdown
    )


def stop_session(session: TrackingSession, ended_at: Optional[datetime] = None) -> SessionSummary:
    """
    Close a session and return its final summary

    Args:
        session: Active tracking session
        ended_at: End time override (UTC now by default)

    Returns:
        SessionSummary ready for an external persistence layer
    """
    if session is None:
        raise PreconditionViolation("stop_session requires a session")
    if not session.active:
        raise PreconditionViolation(f"Session {session.id} is already stopped")

    session.ended_at = ended_at or utc_now()
    summary = summarize(session, session.ended_at)

    logger.log_session("Session Stopped", {
        "session_id": summary.id,
        "duration_sec": summary.duration_sec,
        "avg_score": summary.avg_score,
        "good_time_sec": summary.good_time_sec,
        "bad_time_sec": summary.bad_time_sec,
        "ignored_frames": session.ignored_frames
    })
    logger.log_lifecycle("SESSION_END", session.id)
    return summary

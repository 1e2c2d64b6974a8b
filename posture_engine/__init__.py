"""
Posture scoring engine.

Turns per-frame body landmarks into a posture score, three sub-scores
(neck, shoulders, spine), a good/bad verdict and a corrective hint, and
smooths them over a tracking session.

validator:      cheap rejections of unusable frames
scoring:        geometric sub-scores
classifier:     weighted score, sensitivity threshold, message
smoother:       session display score, momentum, slouch time
pipeline:       evaluate / evaluate_and_smooth
session:        start/stop tracking and session summary
"""
from posture_engine.errors import PreconditionViolation
from posture_engine.models import (
    DisplaySnapshot,
    IgnoreReason,
    Landmark,
    PostureMetrics,
    PostureResult,
    ResultReason,
    SessionSummary,
    SmootherState,
)
from posture_engine.pipeline import evaluate, evaluate_and_smooth
from posture_engine.session import TrackingSession, start_session, stop_session
from posture_engine.smoother import new_state

__all__ = [
    'PreconditionViolation',
    'DisplaySnapshot',
    'IgnoreReason',
    'Landmark',
    'PostureMetrics',
    'PostureResult',
    'ResultReason',
    'SessionSummary',
    'SmootherState',
    'evaluate',
    'evaluate_and_smooth',
    'TrackingSession',
    'start_session',
    'stop_session',
    'new_state',
]

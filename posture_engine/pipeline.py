# Pipeline - frame -> validator -> scorer -> classifier -> smoother
from typing import Dict, Optional, Tuple

from posture_engine import config
from posture_engine import classifier
from posture_engine import scoring
from posture_engine import smoother
from posture_engine import validator
from posture_engine.errors import PreconditionViolation
from posture_engine.landmarks import get_layout
from posture_engine.models import (
    DisplaySnapshot,
    IgnoreReason,
    LandmarkSet,
    PostureMetrics,
    PostureResult,
    ResultReason,
    SmootherState,
)

IGNORE_MESSAGES = {
    IgnoreReason.NO_USER: "No user detected",
    IgnoreReason.ADJUST_CAMERA: "Adjust camera to show both shoulders",
    IgnoreReason.HAND_NEAR_FACE: "Hand near face",
    IgnoreReason.LOOKING_AWAY: "Looking away"
}


def ignored_result(reason: IgnoreReason) -> PostureResult:
    """Neutral "no opinion" result: score 100, good, tagged with the sub-reason"""
    return PostureResult(
        is_good=True,
        score=config.NEUTRAL_SCORE,
        metrics=PostureMetrics(),
        message=IGNORE_MESSAGES[reason],
        reason=ResultReason.IGNORE,
        ignore_reason=reason
    )


def evaluate(frame: Optional[LandmarkSet], sensitivity: int,
             layout: Optional[Dict[str, int]] = None) -> PostureResult:
    """
    Score a single frame. Pure: no state is read or written.

    Args:
        frame: Fixed-index landmark sequence
        sensitivity: User sensitivity level (1-10)
        layout: Name -> index mapping, defaults to the configured layout

    Returns:
        PostureResult
    """
    classifier.check_sensitivity(sensitivity)
    layout = layout or get_layout()

    outcome = validator.validate(frame, layout)
    if not outcome.proceed:
        return ignored_result(outcome.reason)

    metrics = scoring.score(frame, layout)
    if metrics is None:
        return ignored_result(IgnoreReason.NO_USER)

    verdict = classifier.classify(metrics, sensitivity)
    return PostureResult(
        is_good=verdict.is_good,
        score=verdict.score,
        metrics=metrics,
        message=verdict.message,
        reason=verdict.reason
    )


def evaluate_and_smooth(state: SmootherState, frame: Optional[LandmarkSet], sensitivity: int,
                        layout: Optional[Dict[str, int]] = None) -> Tuple[PostureResult, DisplaySnapshot]:
    """
    Score a frame and fold it into the session's smoother state

    Args:
        state: Session smoother state (caller-owned, mutated in place)
        frame: Fixed-index landmark sequence
        sensitivity: User sensitivity level (1-10)
        layout: Name -> index mapping, defaults to the configured layout

    Returns:
        Tuple of (PostureResult, DisplaySnapshot)
    """
    if state is None:
        raise PreconditionViolation("evaluate_and_smooth requires an active session state")
    if not isinstance(state, SmootherState):
        raise PreconditionViolation(
            f"Expected SmootherState, got {type(state).__name__}"
        )

    result = evaluate(frame, sensitivity, layout)
    return result, smoother.update(state, result)

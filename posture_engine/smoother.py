# Temporal Smoother - the only stateful stage
#
# A continuous numeric integrator over evaluated frames. Ignored frames
# never touch the state, so "no opinion" is not counted as good posture.
#
# slouch_seconds is a frame count times FRAME_INTERVAL_SECONDS (1/30 s by
# default). It assumes a steady evaluation cadence and is a coarse session
# statistic, not a wall-clock measurement.
from posture_engine import config
from posture_engine import logger
from posture_engine.models import DisplaySnapshot, PostureMetrics, PostureResult, SmootherState


def new_state() -> SmootherState:
    """Session defaults: display 100, momentum 0, no slouch time"""
    return SmootherState()


def _approach(current: float, target: float) -> float:
    return current + (target - current) * config.SMOOTHING_FACTOR


def snapshot(state: SmootherState) -> DisplaySnapshot:
    return DisplaySnapshot(
        display_score=state.display_score,
        metrics=PostureMetrics(
            neck=int(round(state.display_neck)),
            shoulders=int(round(state.display_shoulders)),
            spine=int(round(state.display_spine))
        ),
        momentum=state.momentum,
        slouch_seconds=state.slouch_seconds
    )


def update(state: SmootherState, result: PostureResult) -> DisplaySnapshot:
    """
    Fold one classifier result into the session state

    Args:
        state: Session state, mutated in place
        result: Per-frame result; ignored results leave the state untouched

    Returns:
        DisplaySnapshot after the update
    """
    if result.is_ignored:
        return snapshot(state)

    state.display_score = _approach(state.display_score, result.score)
    state.display_neck = _approach(state.display_neck, result.metrics.neck)
    state.display_shoulders = _approach(state.display_shoulders, result.metrics.shoulders)
    state.display_spine = _approach(state.display_spine, result.metrics.spine)

    if result.is_good:
        state.momentum = min(config.MOMENTUM_MAX, state.momentum + config.MOMENTUM_GAIN)
        state.good_frames += 1
    else:
        state.momentum = max(config.MOMENTUM_MIN, state.momentum - config.MOMENTUM_LOSS)
        state.slouch_seconds += config.FRAME_INTERVAL_SECONDS

    state.evaluated_frames += 1
    state.score_total += result.score
    state.neck_total += result.metrics.neck
    state.shoulders_total += result.metrics.shoulders
    state.spine_total += result.metrics.spine

    logger.log_frame("SMOOTHER", "State Updated", {
        "display_score": f"{state.display_score:.2f}",
        "momentum": f"{state.momentum:.2f}",
        "slouch_seconds": f"{state.slouch_seconds:.3f}"
    })
    return snapshot(state)

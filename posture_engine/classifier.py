# Classifier - weighted global score, sensitivity threshold, corrective hint
from posture_engine import config
from posture_engine.errors import PreconditionViolation
from posture_engine.models import Classification, PostureMetrics, ResultReason


def check_sensitivity(sensitivity: int) -> int:
    """Reject sensitivity values outside the supported integer range"""
    if isinstance(sensitivity, bool) or not isinstance(sensitivity, int):
        raise PreconditionViolation(
            f"Sensitivity must be an int, got {type(sensitivity).__name__}"
        )
    if not config.SENSITIVITY_MIN <= sensitivity <= config.SENSITIVITY_MAX:
        raise PreconditionViolation(
            f"Sensitivity must be within {config.SENSITIVITY_MIN}-{config.SENSITIVITY_MAX}, got {sensitivity}"
        )
    return sensitivity


def threshold(sensitivity: int) -> int:
    """Sensitivity 1 -> 54 ... 10 -> 90"""
    return config.THRESHOLD_BASE + check_sensitivity(sensitivity) * config.THRESHOLD_STEP


def global_score(metrics: PostureMetrics) -> int:
    values = metrics.model_dump()
    total = sum(values[name] * weight for name, weight in config.METRIC_WEIGHTS.items())
    return int(round(total))


def focus_area(metrics: PostureMetrics) -> str:
    """Lowest sub-score name; ties go to the earlier entry in METRIC_PRIORITY"""
    values = metrics.model_dump()
    return min(config.METRIC_PRIORITY, key=lambda name: values[name])


def classify(metrics: PostureMetrics, sensitivity: int) -> Classification:
    """
    Combine sub-scores into a verdict

    Args:
        metrics: Sub-scores from the geometric scorer
        sensitivity: User sensitivity level (1-10)

    Returns:
        Classification with score, good/bad flag, message and reason
    """
    cutoff = threshold(sensitivity)
    score = global_score(metrics)

    if score >= cutoff:
        return Classification(
            score=score,
            is_good=True,
            message=config.GOOD_MESSAGE,
            reason=ResultReason.NONE
        )

    return Classification(
        score=score,
        is_good=False,
        message=config.MESSAGES[focus_area(metrics)],
        reason=ResultReason.BAD_POSTURE
    )

from typing import Dict, List, Optional

from posture_engine.config import METRIC_PRIORITY, RISK_THRESHOLDS, TREND_THRESHOLD
from posture_engine.models import SessionSummary
from posture_engine.recommendation.rules import METRIC_RULES


def _compute_trends(session_history: List[SessionSummary]) -> Dict[str, dict]:
    trends = {}

    for session in session_history:
        trends.setdefault("overall", []).append(session.avg_score)
        for metric, value in session.breakdown.items():
            trends.setdefault(metric, []).append(value)

    trend_result = {}
    for metric, values in trends.items():
        if len(values) < 2:
            continue

        # Scores are "higher is better", so a drop means worsening
        delta = values[-1] - values[0]
        direction = (
            "WORSENING" if delta < -TREND_THRESHOLD else
            "IMPROVING" if delta > TREND_THRESHOLD else
            "STABLE"
        )

        trend_result[metric] = {
            "direction": direction,
            "change": delta,
            "latest": values[-1]
        }

    return trend_result


def _risk_level(deficit: int) -> str:
    if deficit >= RISK_THRESHOLDS["HIGH"]:
        return "HIGH"
    if deficit >= RISK_THRESHOLDS["MODERATE"]:
        return "MODERATE"
    if deficit >= RISK_THRESHOLDS["LOW"]:
        return "LOW"
    return "NONE"


def build_recommendation(summary: SessionSummary, history: Optional[List[SessionSummary]] = None) -> dict:
    """
    Turn a finished session into a coaching recommendation

    Args:
        summary: Summary of the session that just ended
        history: Earlier summaries (oldest first), used for trend detection

    Returns:
        Dict with risk level, dominant issue, trends and recommended actions
    """
    # 1️⃣ Identify dominant issue (lowest average sub-score)
    dominant_metric = min(
        METRIC_PRIORITY,
        key=lambda name: summary.breakdown.get(name, 100)
    )
    dominant_score = summary.breakdown.get(dominant_metric, 100)
    risk_level = _risk_level(100 - dominant_score)

    # 2️⃣ Compute trends across this and earlier sessions
    trends = _compute_trends(list(history or []) + [summary])

    if risk_level == "NONE":
        return {
            "session_id": summary.id,
            "risk_level": risk_level,
            "dominant_issue": None,
            "trends": trends,
            "recommendation": {
                "priority": "LOW",
                "message": "Great session, keep it up.",
                "actions": []
            }
        }

    # 3️⃣ Rule-based actions
    rule = METRIC_RULES[dominant_metric]
    actions = list(rule["base_actions"])

    if trends.get(dominant_metric, {}).get("direction") == "WORSENING":
        actions.append("Increase posture breaks frequency")

    priority = {"HIGH": "HIGH", "MODERATE": "MEDIUM"}.get(risk_level, "LOW")

    return {
        "session_id": summary.id,
        "risk_level": risk_level,
        "dominant_issue": dominant_metric,
        "trends": trends,
        "recommendation": {
            "priority": priority,
            "message": f"Posture issue detected: {rule['label']}. {rule['message']}",
            "actions": actions
        }
    }

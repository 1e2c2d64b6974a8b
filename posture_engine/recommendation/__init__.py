from posture_engine.recommendation.builder import build_recommendation
from posture_engine.recommendation.rules import METRIC_RULES

__all__ = ["build_recommendation", "METRIC_RULES"]

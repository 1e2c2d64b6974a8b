from posture_engine.config import MESSAGES

METRIC_RULES = {
    "neck": {
        "label": "Forward head posture",
        "message": MESSAGES["neck"],
        "base_actions": [
            "Raise screen so the top third sits at eye level",
            "Perform chin tucks: pull chin back gently",
            "Keep ears stacked over shoulders"
        ]
    },
    "spine": {
        "label": "Torso leaning",
        "message": MESSAGES["spine"],
        "base_actions": [
            "Sit upright with back against the chair",
            "Engage core muscles gently",
            "Use a chair with lumbar support"
        ]
    },
    "shoulders": {
        "label": "Shoulder imbalance",
        "message": MESSAGES["shoulders"],
        "base_actions": [
            "Relax shoulders and keep them level",
            "Avoid leaning on one armrest",
            "Perform shoulder rolls every 30 minutes"
        ]
    },
}

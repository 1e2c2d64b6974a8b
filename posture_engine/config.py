# Configuration Module - Procedural approach with module-level variables
# All posture constants are empirically tuned, override via .env if needed
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FRAMES = os.getenv("LOG_FRAMES", "false").lower() == "true"  # Per-frame logs (noisy at 30 Hz)

# Landmark Layout ("blazepose" = 33 points, "movenet" = 17 points)
LANDMARK_LAYOUT = os.getenv("LANDMARK_LAYOUT", "blazepose").lower()

# Landmark Confidence Thresholds
MIN_SHOULDER_VISIBILITY = float(os.getenv("MIN_SHOULDER_VISIBILITY", "0.2"))  # >= passes
MIN_WRIST_VISIBILITY = float(os.getenv("MIN_WRIST_VISIBILITY", "0.2"))        # > counts as visible
MIN_HIP_VISIBILITY = float(os.getenv("MIN_HIP_VISIBILITY", "0.2"))            # >= passes

# Geometry
ASPECT_RATIO = float(os.getenv("ASPECT_RATIO", str(4 / 3)))  # Source frame width / height
VERTICAL_REFERENCE_DEG = 90.0

# Sub-score Penalties
NECK_PENALTY = float(os.getenv("NECK_PENALTY", "3.0"))          # per degree of deviation
SPINE_PENALTY = float(os.getenv("SPINE_PENALTY", "2.0"))        # per degree of deviation
SHOULDER_PENALTY = float(os.getenv("SHOULDER_PENALTY", "0.8"))  # per scaled unit
SHOULDER_SCALE = 1000.0  # normalized y difference -> pseudo pixels

# Score Clamp (floor > 0 keeps "detected but poor" apart from "no user")
SCORE_FLOOR = int(os.getenv("SCORE_FLOOR", "20"))
SCORE_CEILING = 100
NEUTRAL_SCORE = 100

# Global Score Weights (must sum to 1.0)
METRIC_WEIGHTS = {
    "neck": 0.45,
    "spine": 0.35,
    "shoulders": 0.20
}

# Corrective message priority when sub-scores tie
METRIC_PRIORITY = ["neck", "spine", "shoulders"]

# Sensitivity -> Threshold (threshold = base + step * level)
SENSITIVITY_MIN = 1
SENSITIVITY_MAX = 10
DEFAULT_SENSITIVITY = int(os.getenv("DEFAULT_SENSITIVITY", "5"))
THRESHOLD_BASE = 50
THRESHOLD_STEP = 4

# Feedback Messages
GOOD_MESSAGE = "Perfect Posture"
MESSAGES = {
    "neck": "Lift Your Head!",
    "spine": "Sit Up Straight!",
    "shoulders": "Fix Shoulders!"
}

# Temporal Smoothing
SMOOTHING_FACTOR = float(os.getenv("SMOOTHING_FACTOR", "0.1"))
MOMENTUM_GAIN = 0.05   # per good frame
MOMENTUM_LOSS = 0.10   # per bad frame
MOMENTUM_MIN = -1.0
MOMENTUM_MAX = 1.0
EVALUATION_FPS = int(os.getenv("EVALUATION_FPS", "30"))
FRAME_INTERVAL_SECONDS = 1.0 / EVALUATION_FPS  # Coarse, assumes steady cadence

# Risk Thresholds for Recommendations (deficit = 100 - average score)
RISK_THRESHOLDS = {
    "LOW": 10,
    "MODERATE": 25,
    "HIGH": 45
}

# Trend Detection Threshold
TREND_THRESHOLD = 10  # score points between first and latest session


# Structured Logging Module - Procedural Approach
from datetime import datetime
from typing import Any, Dict, Optional

from posture_engine import config

# ANSI Color Codes for Terminal
class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    PURPLE = '\033[95m'
    CYAN = '\033[96m'
    WHITE = '\033[97m'
    RESET = '\033[0m'
    BOLD = '\033[1m'

# Step Prefixes with Emojis
STEP_PREFIXES = {
    "VALIDATOR": "🔍",
    "SCORER": "📐",
    "SMOOTHER": "📈",
    "SESSION": "🧘",
    "REPLAY": "🎞️",
    "ERROR": "❌",
    "SUCCESS": "✅",
    "WARNING": "⚠️"
}

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40
}

# Next Step Suggestions
NEXT_STEPS = {
    "SESSION:STARTED": "Feed frames through session.process(frame, sensitivity)",
    "SESSION:STOPPED": "Hand the summary to the persistence layer",
    "REPLAY:LOADED": "Replaying frames through a fresh session",
}


def get_timestamp() -> str:
    """Get formatted timestamp"""
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


def is_enabled(level: str) -> bool:
    """Check a level name against the configured LOG_LEVEL"""
    return LEVELS.get(level, 20) >= LEVELS.get(config.LOG_LEVEL, 20)


def log_step(step: str, action: str, data: Optional[Dict[str, Any]] = None,
             color: str = Colors.CYAN, level: str = "INFO"):
    """
    Log a step with structured format

    Args:
        step: Step category (VALIDATOR, SCORER, SMOOTHER, SESSION, etc.)
        action: Description of the action
        data: Optional dictionary of data to display
        color: ANSI color code
        level: DEBUG, INFO, WARNING or ERROR
    """
    if not is_enabled(level):
        return

    prefix = STEP_PREFIXES.get(step, "🔹")
    timestamp = get_timestamp()

    print(f"{color}{Colors.BOLD}[{timestamp}] {prefix} [{step}]{Colors.RESET} {action}")

    if data:
        for key, value in data.items():
            # Truncate long values
            if isinstance(value, str) and len(value) > 100:
                value = value[:97] + "..."
            print(f"   {Colors.WHITE}├─ {key}: {value}{Colors.RESET}")

    # Suggest next step
    next_step_key = f"{step}:{action.split()[-1].upper()}" if action else step
    if next_step_key in NEXT_STEPS:
        print(f"   {Colors.YELLOW}└─ >>> Next: {NEXT_STEPS[next_step_key]}{Colors.RESET}")
    print()  # Blank line for readability


def log_frame(step: str, action: str, data: Optional[Dict[str, Any]] = None):
    """Log per-frame events (only when LOG_FRAMES is enabled)"""
    if not config.LOG_FRAMES:
        return
    log_step(step, action, data, Colors.BLUE, level="DEBUG")


def log_session(action: str, data: Optional[Dict[str, Any]] = None):
    """Log tracking session events"""
    log_step("SESSION", action, data, Colors.PURPLE)


def log_replay(action: str, data: Optional[Dict[str, Any]] = None):
    """Log replay tool events"""
    log_step("REPLAY", action, data, Colors.CYAN)


def log_error(action: str, error: Exception, data: Optional[Dict[str, Any]] = None):
    """Log errors with exception details"""
    error_data = data or {}
    error_data["Error"] = str(error)
    error_data["Type"] = type(error).__name__
    log_step("ERROR", action, error_data, Colors.RED, level="ERROR")


def log_success(action: str, data: Optional[Dict[str, Any]] = None):
    """Log success events"""
    log_step("SUCCESS", action, data, Colors.GREEN)


def log_warning(action: str, data: Optional[Dict[str, Any]] = None):
    """Log warnings"""
    log_step("WARNING", action, data, Colors.YELLOW, level="WARNING")


def log_lifecycle(phase: str, details: str = ""):
    """
    Log major lifecycle events with clear visual separation

    Args:
        phase: Phase name (e.g., "SESSION_START", "SESSION_END")
        details: Optional details
    """
    if not is_enabled("INFO"):
        return
    separator = "=" * 80
    print(f"\n{Colors.BOLD}{Colors.CYAN}{separator}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.CYAN}>>> {phase} {details}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.CYAN}{separator}{Colors.RESET}\n")

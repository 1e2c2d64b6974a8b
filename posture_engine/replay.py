"""
Replay recorded landmark frames through a tracking session

Input is JSON lines. Each line is either a landmark list or an object
{"landmarks": [...], "sensitivity": 7}. Lines may carry the STR_JSON prefix
used by device log dumps (PREFIX); anything else is skipped. A recorded
sensitivity outside 1-10 (or not an int) falls back to the session default.

Usage:
  python -m posture_engine.replay frames.jsonl --sensitivity 6
  python -m posture_engine.replay frames.jsonl --generate 900 --seed 7
"""
import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Tuple

from posture_engine import classifier
from posture_engine import config
from posture_engine import logger
from posture_engine.errors import PreconditionViolation
from posture_engine.recommendation import build_recommendation
from posture_engine.session import start_session, stop_session
from posture_engine.simulator import PostureSimulator

PREFIX = "📊 STR_JSON:"


def parse_line(line: str) -> Optional[Tuple[list, Optional[int]]]:
    """
    Parse one JSON-lines record

    Returns:
        Tuple of (landmarks, sensitivity or None), or None for unusable lines
    """
    line = line.strip()
    if line.startswith(PREFIX):
        line = line[len(PREFIX):].strip()
    if not line:
        return None

    try:
        record = json.loads(line)
    except json.JSONDecodeError:
        return None

    if isinstance(record, list):
        return record, None
    if isinstance(record, dict) and isinstance(record.get("landmarks"), list):
        return record["landmarks"], _record_sensitivity(record.get("sensitivity"))
    return None


def _record_sensitivity(value: Any) -> Optional[int]:
    """Recorded sensitivity, or None (session default) when it is unusable"""
    if value is None:
        return None
    try:
        return classifier.check_sensitivity(value)
    except PreconditionViolation as e:
        logger.log_warning("Recorded Sensitivity Ignored", {"value": repr(value), "reason": str(e)})
        return None


def load_frames(file_path: str) -> List[Tuple[list, Optional[int]]]:
    frames = []
    skipped = 0
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            parsed = parse_line(line)
            if parsed is None:
                skipped += 1
                continue
            frames.append(parsed)

    if skipped:
        logger.log_warning("Unusable Lines Skipped", {"file": file_path, "skipped_lines": skipped})
    logger.log_replay("Frames Loaded", {
        "file": file_path,
        "frames": len(frames),
        "skipped_lines": skipped
    })
    return frames


def write_frames(file_path: str, count: int, seed: Optional[int] = None,
                 layout_name: Optional[str] = None) -> int:
    """Write `count` synthetic frames as JSON lines"""
    simulator = PostureSimulator(seed=seed, layout_name=layout_name)
    with open(file_path, "w", encoding="utf-8") as f:
        for frame in simulator.frames(count):
            payload = [p.model_dump() if p is not None else None for p in frame]
            f.write(json.dumps(payload) + "\n")

    logger.log_success("Synthetic Frames Written", {"file": file_path, "frames": count})
    return count


def run_replay(frames: List[Tuple[list, Optional[int]]], sensitivity: int = config.DEFAULT_SENSITIVITY,
               layout_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Run frames through a fresh session

    Returns:
        Dict with the session summary, recommendation and ignore count
    """
    session = start_session(sensitivity=sensitivity, layout=layout_name)
    for landmarks, frame_sensitivity in frames:
        session.process(landmarks, frame_sensitivity)
    summary = stop_session(session)

    return {
        "summary": summary.model_dump(),
        "ignored_frames": session.ignored_frames,
        "recommendation": build_recommendation(summary)
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Posture engine frame replay")
    parser.add_argument("file", help="JSON-lines file of landmark frames")
    parser.add_argument("--sensitivity", type=int, default=config.DEFAULT_SENSITIVITY,
                        help=f"Sensitivity 1-10 (default: {config.DEFAULT_SENSITIVITY})")
    parser.add_argument("--layout", default=None, help="Landmark layout: blazepose or movenet")
    parser.add_argument("--generate", type=int, metavar="N", help="Write N synthetic frames instead of replaying")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for --generate")

    args = parser.parse_args(argv)

    if args.generate is not None:
        write_frames(args.file, args.generate, seed=args.seed, layout_name=args.layout)
        return 0

    try:
        frames = load_frames(args.file)
    except OSError as e:
        logger.log_error("Replay File Unreadable", e, {"file": args.file})
        return 1

    report = run_replay(frames, sensitivity=args.sensitivity, layout_name=args.layout)
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

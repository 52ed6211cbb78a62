import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from .exercise_analysis.pose_utils import landmarks_from_rows
from .trainer import FormCheckSession

logger = logging.getLogger(__name__)


def load_frames(path: str) -> List[Dict[str, Any]]:
    """
    Load recorded frames from a JSON file.

    The file holds a list of ``{"timestamp_ms": ..., "landmarks": [...]}``
    objects, or an object with such a list under ``"frames"``.
    """
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("frames")
    if not isinstance(data, list):
        raise ValueError("Expected a list of frames")
    return data


def replay(frames: List[Dict[str, Any]], exercise: Optional[str]) -> Dict[str, Any]:
    session = FormCheckSession(
        exercise_name=exercise,
        on_rep_count=lambda count: print(f"Rep {count}"),
    )
    last_messages: List[str] = []
    for idx, frame in enumerate(frames):
        try:
            timestamp_ms = float(frame["timestamp_ms"])
            landmarks = landmarks_from_rows(frame["landmarks"])
        except (KeyError, TypeError, ValueError, IndexError) as e:
            logger.warning("Skipping malformed frame %d: %s", idx, e)
            continue
        report = session.process_landmarks(landmarks, timestamp_ms)
        messages = [cue.message for cue in report.feedback]
        if messages and messages != last_messages:
            logger.info("[%.0f ms] %s", timestamp_ms, "; ".join(messages))
        last_messages = messages
    return session.summary()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Replay recorded pose landmarks through the form checker."""
    parser = argparse.ArgumentParser(description="Form check and rep counting from recorded pose landmarks")
    parser.add_argument(
        "--landmarks",
        type=str,
        required=True,
        help="Path to a JSON file of recorded frames"
    )
    parser.add_argument(
        "--exercise",
        type=str,
        default=None,
        help="Exercise name, e.g. 'Barbell Squat' (default: generic analysis)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-frame angles and metrics"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if not os.path.isfile(args.landmarks):
        print(f"Landmarks file not found: {args.landmarks}")
        return 1

    try:
        frames = load_frames(args.landmarks)
        summary = replay(frames, args.exercise)
    except (json.JSONDecodeError, ValueError) as e:
        print(f"Could not read landmarks file {args.landmarks}: {e}")
        return 1

    print(f"Exercise: {summary['exercise'] or 'unspecified'} ({summary['analyzer']} analyzer)")
    print(f"Frames: {summary['frames_processed']} ({summary['unreliable_frames']} unreliable)")
    print(f"Reps: {summary['rep_count']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .exercise_analysis.analyzer_registry import get_analyzer_for_exercise, resolve_exercise_family
from .exercise_analysis.base_analyzer import AnalysisResult, FeedbackCue
from .exercise_analysis.pose_utils import Pose
from .feedback.feedback_throttle import FeedbackThrottle
from .rep_counting.rep_counter import RepCounterState, create_rep_counter, update_rep_counter

logger = logging.getLogger(__name__)


@dataclass
class FrameReport:
    """What a caller needs to render after one frame."""
    analysis: AnalysisResult
    rep_count: int
    rep_completed: bool
    feedback: List[FeedbackCue] = field(default_factory=list)  # Throttled cues to display

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis": self.analysis.to_dict(),
            "rep_count": self.rep_count,
            "rep_completed": self.rep_completed,
            "feedback": [cue.to_dict() for cue in self.feedback],
        }


class FormCheckSession:
    """
    Runs the form analysis and rep counter for one exercise attempt.

    This is a convenience caller: it owns the rep counter state that the
    pure counter functions expect to be threaded between frames.
    """

    def __init__(
        self,
        exercise_name: Optional[str] = None,
        on_rep_count: Optional[Callable[[int], None]] = None,
        feedback_update_interval_ms: Optional[float] = None,
    ):
        """
        Initialize the session.

        Args:
            exercise_name: Free-text exercise name used to pick the analyzer
            on_rep_count: Called with the new count whenever a rep is counted
            feedback_update_interval_ms: Override for the feedback throttle
        """
        self.on_rep_count = on_rep_count
        self.feedback_throttle = FeedbackThrottle(feedback_update_interval_ms)
        self.frames_processed = 0
        self.unreliable_frames = 0
        self.set_exercise(exercise_name)

    @property
    def rep_count(self) -> int:
        return self.rep_state.count

    def set_exercise(self, exercise_name: Optional[str]) -> None:
        """Switch to another exercise and start counting from zero."""
        self.exercise_name = exercise_name
        self.exercise_family = resolve_exercise_family(exercise_name)
        self.analyzer = get_analyzer_for_exercise(exercise_name)
        logger.info("Exercise set to %r (%s analyzer)", exercise_name, self.exercise_family)
        self.reset()

    def reset(self) -> None:
        """Start a new set of the same exercise."""
        self.rep_state: RepCounterState = create_rep_counter()
        self.feedback_throttle.reset()
        self.frames_processed = 0
        self.unreliable_frames = 0

    def process_landmarks(self, landmarks: Pose, timestamp_ms: float) -> FrameReport:
        """
        Process the pose of a single frame.

        Args:
            landmarks: 33 landmarks from the pose estimator
            timestamp_ms: Frame timestamp in milliseconds

        Returns:
            FrameReport with the raw analysis, rep count and cues to display
        """
        analysis = self.analyzer(landmarks)
        self.frames_processed += 1
        if not analysis.analysis_reliable:
            self.unreliable_frames += 1

        previous_count = self.rep_state.count
        self.rep_state = update_rep_counter(self.rep_state, analysis.rep_metric, analysis.phase, timestamp_ms)
        rep_completed = self.rep_state.count != previous_count

        if rep_completed and self.on_rep_count is not None:
            self.on_rep_count(self.rep_state.count)

        feedback = self.feedback_throttle.update(analysis.feedback, timestamp_ms)
        return FrameReport(
            analysis=analysis,
            rep_count=self.rep_state.count,
            rep_completed=rep_completed,
            feedback=feedback,
        )

    def summary(self) -> Dict[str, Any]:
        """JSON-serializable summary of the attempt so far."""
        return {
            "exercise": self.exercise_name,
            "analyzer": self.exercise_family,
            "rep_count": self.rep_state.count,
            "frames_processed": self.frames_processed,
            "unreliable_frames": self.unreliable_frames,
            "rep_counter": self.rep_state.to_dict(),
        }

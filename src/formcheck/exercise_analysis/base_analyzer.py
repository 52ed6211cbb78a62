import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from .config_utils import get_config_section, load_form_config
from .pose_utils import (
    POSE_LANDMARK_COUNT,
    Landmark,
    Pose,
    PoseLandmark,
    all_visible,
    angle_between_points,
    average_optional,
    clamp_unit,
    pose_confidence,
)

logger = logging.getLogger(__name__)

_FORM_CONFIG = load_form_config()


class Severity(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    ERROR = "error"


class Phase(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class FeedbackCue:
    """Short coaching message shown to the user."""
    message: str
    severity: Severity

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "severity": self.severity.value}


@dataclass
class AnalysisResult:
    """Represents the analysis of a single pose snapshot."""
    feedback: List[FeedbackCue] = field(default_factory=list)
    rep_metric: Optional[float] = None  # 0.0 (bottom of the rep) .. 1.0 (top)
    phase: Optional[Phase] = None
    analysis_reliable: bool = True  # False when the pose could not be trusted
    error_message: Optional[str] = None  # Set only for malformed input

    @classmethod
    def unreliable(cls, error_message: Optional[str] = None) -> "AnalysisResult":
        return cls(analysis_reliable=False, error_message=error_message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feedback": [cue.to_dict() for cue in self.feedback],
            "rep_metric": self.rep_metric,
            "phase": self.phase.value if self.phase is not None else None,
            "analysis_reliable": self.analysis_reliable,
            "error_message": self.error_message,
        }


ExerciseAnalyzer = Callable[[Pose], AnalysisResult]

# (name, regex patterns, analyzer class), in registration order
EXERCISE_ANALYZER_REGISTRY: List[Tuple[str, Tuple[str, ...], Type["BaseExerciseAnalyzer"]]] = []


def register_exercise_analyzer(name: str, *patterns: str):
    """Register an analyzer class for exercise names matching any of ``patterns``."""
    def decorator(cls):
        EXERCISE_ANALYZER_REGISTRY.append((name, patterns, cls))
        return cls
    return decorator


class BaseExerciseAnalyzer(ABC):
    """
    Base class for exercise analyzers.

    Subclasses implement ``analyze_pose``. Calling an analyzer validates the
    snapshot, applies confidence gating over ``REQUIRED_LANDMARKS`` and then
    delegates. Analyzers hold only configuration, so one instance can serve
    every frame of every session.
    """

    config_section: str = ""
    REQUIRED_LANDMARKS: Tuple[PoseLandmark, ...] = ()

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        """
        Args:
            config: Optional overrides for this analyzer's thresholds
        """
        self.thresholds: Dict[str, Any] = get_config_section(_FORM_CONFIG, "pose")
        self.thresholds.update(get_config_section(_FORM_CONFIG, self.config_section))
        if config:
            self.thresholds.update(config)
        self.min_landmark_visibility = self.thresholds["min_landmark_visibility"]
        self.min_pose_confidence = self.thresholds["min_pose_confidence"]

    def __call__(self, pose: Pose) -> AnalysisResult:
        return self.analyze(pose)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def analyze(self, pose: Pose) -> AnalysisResult:
        is_valid, error_message = self.validate_pose(pose)
        if not is_valid:
            logger.warning("%s: %s", type(self).__name__, error_message)
            return AnalysisResult.unreliable(error_message)

        confidence = self.calculate_confidence(pose)
        if confidence < self.min_pose_confidence:
            logger.debug("%s: pose confidence %.2f below %.2f, skipping frame",
                         type(self).__name__, confidence, self.min_pose_confidence)
            return AnalysisResult.unreliable()

        result = self.analyze_pose(pose)
        if result.rep_metric is None:
            logger.debug("%s: joints for the rep metric not visible, skipping frame", type(self).__name__)
            return AnalysisResult.unreliable()
        return result

    @abstractmethod
    def analyze_pose(self, pose: Pose) -> AnalysisResult:
        """
        Analyze a snapshot that has already passed validation and gating.

        Args:
            pose: 33 landmarks indexed by PoseLandmark

        Returns:
            AnalysisResult with feedback, rep metric and phase
        """

    @staticmethod
    def validate_pose(pose: Pose) -> Tuple[bool, Optional[str]]:
        """
        Check the snapshot has the expected number of landmarks.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            count = len(pose)
        except TypeError:
            return False, f"Expected a sequence of {POSE_LANDMARK_COUNT} landmarks, got {type(pose).__name__}"
        if count != POSE_LANDMARK_COUNT:
            return False, f"Expected {POSE_LANDMARK_COUNT} landmarks, got {count}"
        return True, None

    def calculate_confidence(self, pose: Pose) -> float:
        """Mean visibility of the landmarks this analyzer relies on."""
        return pose_confidence(pose, self.REQUIRED_LANDMARKS)

    # --- Helpers shared by the exercise analyzers ---
    def _visible(self, *landmarks: Landmark) -> bool:
        return all_visible(landmarks, self.min_landmark_visibility)

    def _joint_angle(self, pose: Pose, a: PoseLandmark, vertex: PoseLandmark, c: PoseLandmark) -> Optional[float]:
        """Angle at ``vertex``, or None when any of the three joints is not visible."""
        if not self._visible(pose[a], pose[vertex], pose[c]):
            return None
        return angle_between_points(pose[a], pose[vertex], pose[c])

    def _bilateral_angle(
        self,
        pose: Pose,
        left: Sequence[PoseLandmark],
        right: Sequence[PoseLandmark],
    ) -> Optional[float]:
        """Average of the left and right joint angles over whichever sides are visible."""
        return average_optional(self._joint_angle(pose, *left), self._joint_angle(pose, *right))

    def _normalize(self, angle: Optional[float], bottom_key: str, top_key: str) -> Optional[float]:
        """Map an angle onto 0..1 between the configured bottom and top angles."""
        if angle is None:
            return None
        bottom = self.thresholds[bottom_key]
        top = self.thresholds[top_key]
        return clamp_unit((angle - bottom) / (top - bottom))

    def _phase(self, metric: Optional[float]) -> Optional[Phase]:
        if metric is None:
            return None
        return Phase.DOWN if metric < self.thresholds["phase_midpoint"] else Phase.UP

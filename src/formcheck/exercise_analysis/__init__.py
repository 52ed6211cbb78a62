"""
Exercise analysis package for form feedback and rep metrics.
"""

from .pose_utils import (
    POSE_LANDMARK_COUNT,
    Landmark,
    PoseLandmark,
    angle_between_points,
    landmarks_from_rows,
    pose_confidence,
)
from .base_analyzer import (
    AnalysisResult,
    BaseExerciseAnalyzer,
    FeedbackCue,
    Phase,
    Severity,
    register_exercise_analyzer,
)
from .squat_analyzer import SquatAnalyzer
from .bench_press_analyzer import BenchPressAnalyzer
from .deadlift_analyzer import DeadliftAnalyzer
from .overhead_press_analyzer import OverheadPressAnalyzer
from .generic_analyzer import GenericAnalyzer
from .analyzer_registry import available_exercises, get_analyzer_for_exercise, resolve_exercise_family
from .config_utils import FormConfigError, load_form_config

__all__ = [
    'POSE_LANDMARK_COUNT',
    'Landmark',
    'PoseLandmark',
    'angle_between_points',
    'landmarks_from_rows',
    'pose_confidence',
    'AnalysisResult',
    'BaseExerciseAnalyzer',
    'FeedbackCue',
    'Phase',
    'Severity',
    'register_exercise_analyzer',
    'SquatAnalyzer',
    'BenchPressAnalyzer',
    'DeadliftAnalyzer',
    'OverheadPressAnalyzer',
    'GenericAnalyzer',
    'available_exercises',
    'get_analyzer_for_exercise',
    'resolve_exercise_family',
    'FormConfigError',
    'load_form_config',
]

"""
formcheck - pose-based exercise form feedback and rep counting.
"""

from .exercise_analysis import (
    AnalysisResult,
    FeedbackCue,
    Landmark,
    Phase,
    PoseLandmark,
    Severity,
    angle_between_points,
    get_analyzer_for_exercise,
    landmarks_from_rows,
)
from .rep_counting import RepCounterState, create_rep_counter, update_rep_counter
from .trainer import FormCheckSession, FrameReport

__version__ = "0.1.0"

__all__ = [
    'AnalysisResult',
    'FeedbackCue',
    'Landmark',
    'Phase',
    'PoseLandmark',
    'Severity',
    'angle_between_points',
    'get_analyzer_for_exercise',
    'landmarks_from_rows',
    'RepCounterState',
    'create_rep_counter',
    'update_rep_counter',
    'FormCheckSession',
    'FrameReport',
]

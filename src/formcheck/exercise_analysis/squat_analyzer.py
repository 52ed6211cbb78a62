import logging

from .base_analyzer import (
    AnalysisResult,
    BaseExerciseAnalyzer,
    FeedbackCue,
    Severity,
    register_exercise_analyzer,
)
from .pose_utils import Pose, PoseLandmark, midpoint

logger = logging.getLogger(__name__)

L = PoseLandmark


@register_exercise_analyzer("squat", r"squat")
class SquatAnalyzer(BaseExerciseAnalyzer):
    """Knee-angle based squat analysis with depth, back lean and knee tracking cues."""

    config_section = "squat"
    REQUIRED_LANDMARKS = (
        L.LEFT_SHOULDER, L.RIGHT_SHOULDER,
        L.LEFT_HIP, L.RIGHT_HIP,
        L.LEFT_KNEE, L.RIGHT_KNEE,
        L.LEFT_ANKLE, L.RIGHT_ANKLE,
    )

    def analyze_pose(self, pose: Pose) -> AnalysisResult:
        t = self.thresholds
        feedback = []

        knee_angle = self._bilateral_angle(
            pose,
            (L.LEFT_HIP, L.LEFT_KNEE, L.LEFT_ANKLE),
            (L.RIGHT_HIP, L.RIGHT_KNEE, L.RIGHT_ANKLE),
        )

        # Depth
        if knee_angle is not None:
            if knee_angle > t["shallow_knee_angle"]:
                feedback.append(FeedbackCue("Go deeper into the squat", Severity.WARNING))
            elif knee_angle < t["good_depth_knee_angle"]:
                feedback.append(FeedbackCue("Good depth", Severity.GOOD))

        # Back straightness: shoulders should stay roughly above the hips
        shoulders_and_hips = (pose[L.LEFT_SHOULDER], pose[L.RIGHT_SHOULDER], pose[L.LEFT_HIP], pose[L.RIGHT_HIP])
        if self._visible(*shoulders_and_hips):
            shoulder_mid_x, _ = midpoint(pose[L.LEFT_SHOULDER], pose[L.RIGHT_SHOULDER])
            hip_mid_x, _ = midpoint(pose[L.LEFT_HIP], pose[L.RIGHT_HIP])
            if abs(shoulder_mid_x - hip_mid_x) > t["max_back_lean"]:
                feedback.append(FeedbackCue("Keep your back straight", Severity.ERROR))

        # Knee tracking: knees caving in past the ankles
        l_knee, r_knee = pose[L.LEFT_KNEE], pose[L.RIGHT_KNEE]
        l_ankle, r_ankle = pose[L.LEFT_ANKLE], pose[L.RIGHT_ANKLE]
        if self._visible(l_knee, r_knee, l_ankle, r_ankle):
            margin = t["knee_cave_margin"]
            if l_knee.x > l_ankle.x + margin or r_knee.x < r_ankle.x - margin:
                feedback.append(FeedbackCue("Push knees out over toes", Severity.WARNING))

        metric = self._normalize(knee_angle, "knee_angle_bottom", "knee_angle_top")
        logger.debug("squat: knee_angle=%s metric=%s", knee_angle, metric)
        return AnalysisResult(feedback=feedback, rep_metric=metric, phase=self._phase(metric))

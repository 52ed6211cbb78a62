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


@register_exercise_analyzer(
    "overhead_press", r"overhead", r"shoulder\s*press", r"military\s*press", r"\bohps?\b"
)
class OverheadPressAnalyzer(BaseExerciseAnalyzer):
    config_section = "overhead_press"
    REQUIRED_LANDMARKS = (
        L.LEFT_SHOULDER, L.RIGHT_SHOULDER,
        L.LEFT_ELBOW, L.RIGHT_ELBOW,
        L.LEFT_WRIST, L.RIGHT_WRIST,
        L.LEFT_HIP, L.RIGHT_HIP,
    )

    def analyze_pose(self, pose: Pose) -> AnalysisResult:
        t = self.thresholds
        feedback = []

        elbow_angle = self._bilateral_angle(
            pose,
            (L.LEFT_SHOULDER, L.LEFT_ELBOW, L.LEFT_WRIST),
            (L.RIGHT_SHOULDER, L.RIGHT_ELBOW, L.RIGHT_WRIST),
        )

        # Lockout: arms straight with the wrists above the shoulders
        if elbow_angle is not None and elbow_angle > t["lockout_elbow_angle"]:
            wrists_overhead = [
                wrist.y < shoulder.y
                for wrist, shoulder in (
                    (pose[L.LEFT_WRIST], pose[L.LEFT_SHOULDER]),
                    (pose[L.RIGHT_WRIST], pose[L.RIGHT_SHOULDER]),
                )
                if self._visible(wrist, shoulder)
            ]
            if wrists_overhead and all(wrists_overhead):
                feedback.append(FeedbackCue("Good lockout overhead", Severity.GOOD))

        # Excessive lean back
        if self._visible(pose[L.LEFT_SHOULDER], pose[L.RIGHT_SHOULDER], pose[L.LEFT_HIP], pose[L.RIGHT_HIP]):
            shoulder_mid_x, _ = midpoint(pose[L.LEFT_SHOULDER], pose[L.RIGHT_SHOULDER])
            hip_mid_x, _ = midpoint(pose[L.LEFT_HIP], pose[L.RIGHT_HIP])
            if abs(shoulder_mid_x - hip_mid_x) > t["max_back_lean"]:
                feedback.append(FeedbackCue("Avoid leaning back too far", Severity.WARNING))

        metric = self._normalize(elbow_angle, "elbow_angle_bottom", "elbow_angle_top")
        logger.debug("overhead_press: elbow_angle=%s metric=%s", elbow_angle, metric)
        return AnalysisResult(feedback=feedback, rep_metric=metric, phase=self._phase(metric))

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


@register_exercise_analyzer("deadlift", r"dead\s*lift", r"\brdls?\b", r"romanian")
class DeadliftAnalyzer(BaseExerciseAnalyzer):
    """
    Hip-hinge analysis for deadlift variations.

    The lockout and chest checks are independent, so a frame can report
    both, either or neither.
    """

    config_section = "deadlift"
    REQUIRED_LANDMARKS = (
        L.LEFT_SHOULDER, L.RIGHT_SHOULDER,
        L.LEFT_HIP, L.RIGHT_HIP,
        L.LEFT_KNEE, L.RIGHT_KNEE,
    )

    def analyze_pose(self, pose: Pose) -> AnalysisResult:
        t = self.thresholds
        feedback = []

        hip_angle = self._bilateral_angle(
            pose,
            (L.LEFT_SHOULDER, L.LEFT_HIP, L.LEFT_KNEE),
            (L.RIGHT_SHOULDER, L.RIGHT_HIP, L.RIGHT_KNEE),
        )

        torso = (pose[L.LEFT_SHOULDER], pose[L.RIGHT_SHOULDER], pose[L.LEFT_HIP], pose[L.RIGHT_HIP])
        torso_visible = self._visible(*torso)
        if torso_visible:
            shoulder_mid_x, shoulder_mid_y = midpoint(pose[L.LEFT_SHOULDER], pose[L.RIGHT_SHOULDER])
            hip_mid_x, hip_mid_y = midpoint(pose[L.LEFT_HIP], pose[L.RIGHT_HIP])

            # y grows downward: shoulders sinking below the hips means the chest dropped
            if shoulder_mid_y > hip_mid_y + t["chest_drop_margin"]:
                feedback.append(FeedbackCue("Keep your chest up", Severity.ERROR))

        # Lockout: hips extended with the trunk stacked over the hips
        if hip_angle is not None and hip_angle > t["lockout_hip_angle"]:
            upright = not torso_visible or abs(shoulder_mid_x - hip_mid_x) <= t["lockout_max_lean"]
            if upright:
                feedback.append(FeedbackCue("Good lockout", Severity.GOOD))

        metric = self._normalize(hip_angle, "hip_angle_bottom", "hip_angle_top")
        logger.debug("deadlift: hip_angle=%s metric=%s", hip_angle, metric)
        return AnalysisResult(feedback=feedback, rep_metric=metric, phase=self._phase(metric))

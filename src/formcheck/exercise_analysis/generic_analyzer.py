import logging

from .base_analyzer import AnalysisResult, BaseExerciseAnalyzer, FeedbackCue, Severity
from .pose_utils import Pose, PoseLandmark

logger = logging.getLogger(__name__)

L = PoseLandmark


class GenericAnalyzer(BaseExerciseAnalyzer):
    """
    Fallback analyzer for exercises without a dedicated analyzer.

    Checks that shoulders and hips stay level and tracks the elbow angle as
    the rep metric. Not registered under any pattern: the registry returns it
    when no other analyzer matches.
    """

    config_section = "generic"
    REQUIRED_LANDMARKS = (
        L.LEFT_SHOULDER, L.RIGHT_SHOULDER,
        L.LEFT_ELBOW, L.RIGHT_ELBOW,
        L.LEFT_WRIST, L.RIGHT_WRIST,
        L.LEFT_HIP, L.RIGHT_HIP,
    )

    def analyze_pose(self, pose: Pose) -> AnalysisResult:
        t = self.thresholds
        feedback = []

        l_shoulder, r_shoulder = pose[L.LEFT_SHOULDER], pose[L.RIGHT_SHOULDER]
        if self._visible(l_shoulder, r_shoulder) and abs(l_shoulder.y - r_shoulder.y) > t["max_shoulder_tilt"]:
            feedback.append(FeedbackCue("Keep shoulders level", Severity.WARNING))

        l_hip, r_hip = pose[L.LEFT_HIP], pose[L.RIGHT_HIP]
        if self._visible(l_hip, r_hip) and abs(l_hip.y - r_hip.y) > t["max_hip_tilt"]:
            feedback.append(FeedbackCue("Keep hips level", Severity.WARNING))

        elbow_angle = self._bilateral_angle(
            pose,
            (L.LEFT_SHOULDER, L.LEFT_ELBOW, L.LEFT_WRIST),
            (L.RIGHT_SHOULDER, L.RIGHT_ELBOW, L.RIGHT_WRIST),
        )
        metric = self._normalize(elbow_angle, "elbow_angle_bottom", "elbow_angle_top")
        logger.debug("generic: elbow_angle=%s metric=%s", elbow_angle, metric)
        return AnalysisResult(feedback=feedback, rep_metric=metric, phase=self._phase(metric))

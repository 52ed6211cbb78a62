import logging

from .base_analyzer import (
    AnalysisResult,
    BaseExerciseAnalyzer,
    FeedbackCue,
    Severity,
    register_exercise_analyzer,
)
from .pose_utils import Pose, PoseLandmark

logger = logging.getLogger(__name__)

L = PoseLandmark


@register_exercise_analyzer("bench_press", r"bench", r"chest\s*press", r"push[\s-]*up")
class BenchPressAnalyzer(BaseExerciseAnalyzer):
    config_section = "bench_press"
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

        # Elbow flare: upper arm measured against the torso (shoulder->hip)
        flares = [
            angle for angle in (
                self._joint_angle(pose, L.LEFT_ELBOW, L.LEFT_SHOULDER, L.LEFT_HIP),
                self._joint_angle(pose, L.RIGHT_ELBOW, L.RIGHT_SHOULDER, L.RIGHT_HIP),
            )
            if angle is not None
        ]
        if flares:
            worst_flare = max(flares)
            if worst_flare > t["max_elbow_flare"]:
                feedback.append(FeedbackCue("Tuck elbows closer to body", Severity.WARNING))
            elif all(t["ideal_flare_min"] <= flare <= t["ideal_flare_max"] for flare in flares):
                feedback.append(FeedbackCue("Good elbow position", Severity.GOOD))

        # Wrists should stay stacked over the elbows
        l_wrist, r_wrist = pose[L.LEFT_WRIST], pose[L.RIGHT_WRIST]
        l_elbow, r_elbow = pose[L.LEFT_ELBOW], pose[L.RIGHT_ELBOW]
        if self._visible(l_wrist, r_wrist, l_elbow, r_elbow):
            max_drift = t["max_wrist_drift"]
            if abs(l_wrist.x - l_elbow.x) > max_drift or abs(r_wrist.x - r_elbow.x) > max_drift:
                feedback.append(FeedbackCue("Keep wrists stacked over elbows", Severity.WARNING))

        metric = self._normalize(elbow_angle, "elbow_angle_bottom", "elbow_angle_top")
        logger.debug("bench_press: elbow_angle=%s flares=%s metric=%s", elbow_angle, flares, metric)
        return AnalysisResult(feedback=feedback, rep_metric=metric, phase=self._phase(metric))

from typing import List, Optional

from ..exercise_analysis.base_analyzer import FeedbackCue
from ..exercise_analysis.config_utils import get_config_section, load_form_config

_SESSION_CONFIG = get_config_section(load_form_config(), "session")


class FeedbackThrottle:
    """Keeps the displayed feedback cues from flickering between frames."""

    def __init__(self, update_interval_ms: Optional[float] = None):
        """
        Args:
            update_interval_ms: Minimum time between two refreshes of the
                displayed cues (defaults to the session config)
        """
        if update_interval_ms is None:
            update_interval_ms = _SESSION_CONFIG["feedback_update_interval_ms"]
        self.update_interval_ms = update_interval_ms
        self.last_update_ms: Optional[float] = None
        self.current: List[FeedbackCue] = []

    def update(self, cues: List[FeedbackCue], timestamp_ms: float) -> List[FeedbackCue]:
        """
        Offer the cues of a new frame.

        The displayed cues only change once the update interval has elapsed
        and the new frame actually has something to say; an empty frame
        leaves the previous cues on screen.

        Returns:
            The cues to display after this frame
        """
        due = self.last_update_ms is None or timestamp_ms - self.last_update_ms >= self.update_interval_ms
        if due:
            self.last_update_ms = timestamp_ms
            if cues:
                self.current = list(cues)
        return list(self.current)

    def reset(self) -> None:
        self.last_update_ms = None
        self.current = []

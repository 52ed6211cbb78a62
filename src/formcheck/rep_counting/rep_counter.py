"""
rep_counter.py - Debounced repetition counting over the analyzer output stream.

The counter is a pure function over an immutable state value. Callers keep
the state between frames and start over with ``create_rep_counter()`` when
the exercise or set changes.
"""
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

import numpy as np

from ..exercise_analysis.base_analyzer import Phase
from ..exercise_analysis.config_utils import get_config_section, load_form_config

logger = logging.getLogger(__name__)

_REP_CONFIG = get_config_section(load_form_config(), "rep_counter")

SMOOTHING_FACTOR: float = _REP_CONFIG["smoothing_factor"]
MIN_REP_INTERVAL_MS: float = _REP_CONFIG["min_rep_interval_ms"]


@dataclass(frozen=True)
class RepCounterState:
    """Snapshot of the rep counter between two frames."""
    count: int = 0
    last_phase: Optional[Phase] = None  # Phase given with the previous non-null metric
    smoothed_metric: Optional[float] = None  # Exponential moving average of the rep metric
    last_rep_timestamp_ms: Optional[float] = None  # When the last rep was counted

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "last_phase": self.last_phase.value if self.last_phase is not None else None,
            "smoothed_metric": self.smoothed_metric,
            "last_rep_timestamp_ms": self.last_rep_timestamp_ms,
        }


def create_rep_counter() -> RepCounterState:
    return RepCounterState()


def update_rep_counter(
    state: RepCounterState,
    metric: Optional[float],
    phase: Optional[Union[Phase, str]],
    timestamp_ms: float,
    smoothing_factor: float = SMOOTHING_FACTOR,
    min_rep_interval_ms: float = MIN_REP_INTERVAL_MS,
) -> RepCounterState:
    """
    Advance the rep counter by one frame.

    A rep is counted on a down -> up transition, provided at least
    ``min_rep_interval_ms`` passed since the previous counted rep.

    Args:
        state: State returned by the previous call (or create_rep_counter())
        metric: Rep metric in 0..1, or None when the frame was unreliable
        phase: "up" / "down" from the analyzer. None, or a value that is not
            a Phase, is stored as None and never completes a rep.
        timestamp_ms: Frame timestamp in milliseconds
        smoothing_factor: Weight of the new reading in the moving average
        min_rep_interval_ms: Minimum time between two counted reps

    Returns:
        New RepCounterState; ``state`` itself when the metric is missing
    """
    if metric is None or np.isnan(metric):
        return state

    if state.smoothed_metric is None:
        smoothed = float(metric)
    else:
        smoothed = state.smoothed_metric * (1 - smoothing_factor) + metric * smoothing_factor

    current_phase = None
    if phase is not None:
        try:
            current_phase = Phase(phase)
        except ValueError:
            logger.warning("Unknown phase %r, treating it as no phase", phase)

    count = state.count
    last_rep_timestamp_ms = state.last_rep_timestamp_ms

    if state.last_phase == Phase.DOWN and current_phase == Phase.UP:
        if last_rep_timestamp_ms is None or timestamp_ms - last_rep_timestamp_ms >= min_rep_interval_ms:
            count += 1
            last_rep_timestamp_ms = timestamp_ms
            logger.info("Rep %d counted at %.0f ms", count, timestamp_ms)
        else:
            logger.debug("Ignoring rep at %.0f ms: %.0f ms since last rep",
                         timestamp_ms, timestamp_ms - last_rep_timestamp_ms)

    return replace(
        state,
        count=count,
        last_phase=current_phase,
        smoothed_metric=smoothed,
        last_rep_timestamp_ms=last_rep_timestamp_ms,
    )

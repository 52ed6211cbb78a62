from .rep_counter import (
    MIN_REP_INTERVAL_MS,
    SMOOTHING_FACTOR,
    RepCounterState,
    create_rep_counter,
    update_rep_counter,
)

__all__ = [
    'MIN_REP_INTERVAL_MS',
    'SMOOTHING_FACTOR',
    'RepCounterState',
    'create_rep_counter',
    'update_rep_counter',
]

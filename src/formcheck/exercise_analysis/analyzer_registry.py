"""
Resolve exercise names to analyzers.

Analyzer modules register themselves with ``register_exercise_analyzer`` when
imported; the import order below is the matching priority.
"""
import logging
import re
from typing import Dict, List, Optional, Type

from .base_analyzer import EXERCISE_ANALYZER_REGISTRY, BaseExerciseAnalyzer
from .generic_analyzer import GenericAnalyzer
from . import squat_analyzer  # noqa: F401
from . import bench_press_analyzer  # noqa: F401
from . import deadlift_analyzer  # noqa: F401
from . import overhead_press_analyzer  # noqa: F401

logger = logging.getLogger(__name__)

GENERIC_EXERCISE = "generic"

_analyzer_instances: Dict[Type[BaseExerciseAnalyzer], BaseExerciseAnalyzer] = {}


def _get_instance(cls: Type[BaseExerciseAnalyzer]) -> BaseExerciseAnalyzer:
    if cls not in _analyzer_instances:
        _analyzer_instances[cls] = cls()
    return _analyzer_instances[cls]


def resolve_exercise_family(exercise_name: Optional[str]) -> str:
    """Name of the analyzer family an exercise name maps to ("generic" if none)."""
    if not exercise_name:
        return GENERIC_EXERCISE
    for name, patterns, _ in EXERCISE_ANALYZER_REGISTRY:
        if any(re.search(pattern, exercise_name, re.IGNORECASE) for pattern in patterns):
            return name
    return GENERIC_EXERCISE


def get_analyzer_for_exercise(exercise_name: Optional[str] = None) -> BaseExerciseAnalyzer:
    """
    Get the analyzer for an exercise name.

    Matching is case-insensitive and the first registered family whose
    pattern occurs in the name wins. Unknown or missing names get the
    generic analyzer. Analyzers are created once and shared.
    """
    family = resolve_exercise_family(exercise_name)
    for name, _, cls in EXERCISE_ANALYZER_REGISTRY:
        if name == family:
            return _get_instance(cls)
    logger.debug("No dedicated analyzer for %r, using generic analyzer", exercise_name)
    return _get_instance(GenericAnalyzer)


def available_exercises() -> List[str]:
    return [name for name, _, _ in EXERCISE_ANALYZER_REGISTRY] + [GENERIC_EXERCISE]

"""
pose_utils.py - Shared landmark types, geometry and visibility helpers.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

POSE_LANDMARK_COUNT = 33


class PoseLandmark(IntEnum):
    """Index of each body part in a 33-point pose snapshot."""
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


@dataclass
class Landmark:
    """A single body keypoint in normalized image coordinates (y grows downward)."""
    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = 1.0  # None means unknown and counts as 1.0


Pose = Sequence[Landmark]
PointLike = Union[Landmark, Sequence[float]]


def _xy(point: PointLike) -> np.ndarray:
    if isinstance(point, Landmark):
        return np.array([point.x, point.y], dtype=float)
    return np.array([point[0], point[1]], dtype=float)


# --- Math & Geometry Utilities ---
def angle_between_points(a: PointLike, vertex: PointLike, c: PointLike) -> float:
    """
    Calculate the angle at ``vertex`` between the rays vertex->a and vertex->c.

    Only x and y are used. The angle is in degrees in the 0-180 range.

    Args:
        a: First point (e.g., hip for a knee angle)
        vertex: Middle point where the angle is measured (e.g., knee)
        c: Last point (e.g., ankle)
    Returns:
        Angle in degrees, or 0.0 when either ray has zero length
    """
    ba = _xy(a) - _xy(vertex)
    bc = _xy(c) - _xy(vertex)
    norm_ba = np.linalg.norm(ba)
    norm_bc = np.linalg.norm(bc)
    if norm_ba == 0 or norm_bc == 0:
        return 0.0
    cosine_angle = np.clip(np.dot(ba, bc) / (norm_ba * norm_bc), -1.0, 1.0)
    return float(np.degrees(np.arccos(cosine_angle)))


def midpoint(a: Landmark, b: Landmark) -> Tuple[float, float]:
    """Midpoint of two landmarks in the image plane."""
    return (a.x + b.x) / 2, (a.y + b.y) / 2


def average_optional(*values: Optional[float]) -> Optional[float]:
    """Mean of the values that are not None, or None if there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return float(np.mean(present))


def clamp_unit(value: float) -> float:
    return float(np.clip(value, 0.0, 1.0))


# --- Visibility ---
def visibility_of(landmark: Landmark) -> float:
    return 1.0 if landmark.visibility is None else landmark.visibility


def is_visible(landmark: Optional[Landmark], min_visibility: float) -> bool:
    return landmark is not None and visibility_of(landmark) >= min_visibility


def all_visible(landmarks: Iterable[Optional[Landmark]], min_visibility: float) -> bool:
    return all(is_visible(lm, min_visibility) for lm in landmarks)


def pose_confidence(pose: Pose, indices: Iterable[int]) -> float:
    """
    Aggregate confidence of a pose restricted to the given landmark indices.

    Returns:
        Mean visibility between 0 and 1 (0.0 when no index is given)
    """
    visibilities = [visibility_of(pose[idx]) for idx in indices]
    if not visibilities:
        return 0.0
    return float(np.mean(visibilities))


# --- Conversion ---
def landmark_from_row(row: Union[Mapping[str, Any], Sequence[float]]) -> Landmark:
    """Build a Landmark from a ``{"x", "y", "z", "visibility"}`` mapping or an ``[x, y, z, visibility]`` row."""
    if isinstance(row, Mapping):
        visibility = row.get("visibility")
        return Landmark(
            x=float(row["x"]),
            y=float(row["y"]),
            z=float(row.get("z", 0.0)),
            visibility=1.0 if visibility is None else float(visibility),
        )
    x, y = float(row[0]), float(row[1])
    z = float(row[2]) if len(row) > 2 else 0.0
    visibility = float(row[3]) if len(row) > 3 and row[3] is not None else 1.0
    return Landmark(x, y, z, visibility)


def landmarks_from_rows(rows: Iterable[Union[Mapping[str, Any], Sequence[float]]]) -> List[Landmark]:
    """Convert raw detector output rows into a pose snapshot."""
    return [landmark_from_row(row) for row in rows]

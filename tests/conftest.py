"""Shared pose fixtures.

Coordinates are normalized image coordinates with y growing downward, for a
person facing the camera with their left side on the left of the image.
"""

import pytest

from formcheck.exercise_analysis.pose_utils import Landmark, PoseLandmark

L = PoseLandmark


def lm(x, y, z=0.0, visibility=1.0):
    return Landmark(x, y, z, visibility)


def make_standing_pose():
    """Upright stance: shoulders above hips above knees above ankles, arms down."""
    pose = [lm(0.5, 0.5) for _ in range(33)]
    pose[L.NOSE] = lm(0.5, 0.15)
    pose[L.LEFT_SHOULDER] = lm(0.45, 0.3)
    pose[L.RIGHT_SHOULDER] = lm(0.55, 0.3)
    pose[L.LEFT_ELBOW] = lm(0.4, 0.45)
    pose[L.RIGHT_ELBOW] = lm(0.6, 0.45)
    pose[L.LEFT_WRIST] = lm(0.38, 0.55)
    pose[L.RIGHT_WRIST] = lm(0.62, 0.55)
    pose[L.LEFT_HIP] = lm(0.47, 0.55)
    pose[L.RIGHT_HIP] = lm(0.53, 0.55)
    pose[L.LEFT_KNEE] = lm(0.47, 0.75)
    pose[L.RIGHT_KNEE] = lm(0.53, 0.75)
    pose[L.LEFT_ANKLE] = lm(0.47, 0.95)
    pose[L.RIGHT_ANKLE] = lm(0.53, 0.95)
    return pose


def make_deep_squat_pose():
    """Hips dropped toward the ankles with the knees pushed forward."""
    pose = make_standing_pose()
    pose[L.LEFT_HIP] = lm(0.47, 0.75)
    pose[L.RIGHT_HIP] = lm(0.53, 0.75)
    pose[L.LEFT_KNEE] = lm(0.42, 0.85)
    pose[L.RIGHT_KNEE] = lm(0.58, 0.85)
    pose[L.LEFT_ANKLE] = lm(0.47, 0.95)
    pose[L.RIGHT_ANKLE] = lm(0.53, 0.95)
    pose[L.LEFT_SHOULDER] = lm(0.47, 0.5)
    pose[L.RIGHT_SHOULDER] = lm(0.53, 0.5)
    return pose


def make_squat_bottom_pose():
    """Below parallel: knee angle of about 60 degrees, hips sitting back."""
    pose = make_standing_pose()
    pose[L.LEFT_HIP] = lm(0.60, 0.875)
    pose[L.RIGHT_HIP] = lm(0.66, 0.875)
    pose[L.LEFT_KNEE] = lm(0.47, 0.8)
    pose[L.RIGHT_KNEE] = lm(0.53, 0.8)
    pose[L.LEFT_SHOULDER] = lm(0.58, 0.55)
    pose[L.RIGHT_SHOULDER] = lm(0.68, 0.55)
    return pose


def make_overhead_lockout_pose():
    """Standing with both arms pressed straight overhead."""
    pose = make_standing_pose()
    pose[L.LEFT_ELBOW] = lm(0.44, 0.18)
    pose[L.RIGHT_ELBOW] = lm(0.56, 0.18)
    pose[L.LEFT_WRIST] = lm(0.44, 0.06)
    pose[L.RIGHT_WRIST] = lm(0.56, 0.06)
    return pose


@pytest.fixture
def standing_pose():
    return make_standing_pose()


@pytest.fixture
def deep_squat_pose():
    return make_deep_squat_pose()


@pytest.fixture
def squat_bottom_pose():
    return make_squat_bottom_pose()


@pytest.fixture
def overhead_lockout_pose():
    return make_overhead_lockout_pose()

"""
Unit tests for landmark validation and angle extraction.
"""

from types import SimpleNamespace

import pytest

from pose_coach.analyzers import (
    VISIBILITY_THRESHOLD,
    JointAngle,
    Landmark,
    PoseLandmark,
    all_valid,
    angles_to_dict,
    compute_angles,
    extract_angles,
    is_valid,
    landmarks_from_mediapipe,
)

from pose_factory import make_landmarks, point_at, pushup_pose


class TestLandmarkValidation:
    """Test suite for is_valid and all_valid."""

    def test_threshold_is_exclusive(self):
        landmarks = [Landmark(0.1, 0.1, VISIBILITY_THRESHOLD), Landmark(0.1, 0.1, 0.51)]
        assert not is_valid(landmarks, 0)
        assert is_valid(landmarks, 1)

    def test_missing_index(self):
        landmarks = [Landmark(0.1, 0.1, 0.9)]
        assert not is_valid(landmarks, 5)
        assert not all_valid(landmarks, [0, 5])

    def test_none_entry(self):
        assert not is_valid([None, Landmark(0.1, 0.1, 0.9)], 0)

    def test_all_valid(self):
        landmarks = make_landmarks({11: (0.1, 0.1), 13: (0.2, 0.2), 15: (0.3, 0.3)})
        assert all_valid(landmarks, [11, 13, 15])
        assert not all_valid(landmarks, [11, 13, 15, 12])

    def test_from_mediapipe(self):
        result = SimpleNamespace(landmark=[SimpleNamespace(x=0.1, y=0.2, visibility=0.7)] * 33)
        landmarks = landmarks_from_mediapipe(result)
        assert len(landmarks) == 33
        assert landmarks[0] == Landmark(0.1, 0.2, 0.7)

    def test_from_mediapipe_without_pose(self):
        assert landmarks_from_mediapipe(None) is None

    def test_landmark_from_dict(self):
        assert Landmark.from_dict({"x": 0.5, "y": "0.25"}) == Landmark(0.5, 0.25, 0.0)

    @pytest.mark.parametrize("field", ["x", "y", "visibility"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_landmark_from_dict_rejects_non_finite(self, field, value):
        data = {"x": 0.5, "y": 0.5, "visibility": 0.9}
        data[field] = value
        with pytest.raises(ValueError):
            Landmark.from_dict(data)

    def test_non_finite_coordinate_is_invalid(self):
        landmarks = [Landmark(float("nan"), 0.1, 0.9), Landmark(0.1, float("inf"), 0.9)]
        assert not is_valid(landmarks, 0)
        assert not is_valid(landmarks, 1)

    def test_non_finite_elbow_is_skipped(self):
        landmarks = pushup_pose(160, 160)
        landmarks[PoseLandmark.LEFT_ELBOW] = Landmark(float("nan"), 0.5, 0.9)
        angles = compute_angles(landmarks)
        assert JointAngle.LEFT_ELBOW not in angles
        assert angles[JointAngle.RIGHT_ELBOW] == 160


class TestAngleExtraction:
    """Test suite for compute_angles and extract_angles."""

    def test_only_valid_triples_are_computed(self):
        elbow = (0.5, 0.5)
        landmarks = make_landmarks({
            PoseLandmark.LEFT_SHOULDER: (0.5, 0.3),
            PoseLandmark.LEFT_ELBOW: elbow,
            PoseLandmark.LEFT_WRIST: point_at(elbow, 0),
        })
        assert compute_angles(landmarks) == {JointAngle.LEFT_ELBOW: 90}

    def test_both_arms_and_shoulders(self):
        angles = compute_angles(pushup_pose(160, 80))
        assert angles[JointAngle.LEFT_ELBOW] == 160
        assert angles[JointAngle.RIGHT_ELBOW] == 80
        assert JointAngle.LEFT_SHOULDER in angles
        assert JointAngle.RIGHT_SHOULDER in angles
        assert JointAngle.LEFT_KNEE not in angles

    def test_low_visibility_frame_computes_nothing(self):
        landmarks = make_landmarks({i: (0.5, 0.5) for i in range(33)}, visibility=0.3)
        assert compute_angles(landmarks) == {}

    def test_merge_keeps_prior_keys(self):
        knee = (0.5, 0.5)
        landmarks = make_landmarks({
            PoseLandmark.RIGHT_HIP: point_at(knee, -10),
            PoseLandmark.RIGHT_KNEE: knee,
            PoseLandmark.RIGHT_ANKLE: point_at(knee, 90),
        })
        previous = {JointAngle.LEFT_ELBOW: 170}
        merged = extract_angles(landmarks, previous)
        assert merged == {JointAngle.LEFT_ELBOW: 170, JointAngle.RIGHT_KNEE: 100}
        assert previous == {JointAngle.LEFT_ELBOW: 170}

    def test_merge_overwrites_recomputed_keys(self):
        merged = extract_angles(pushup_pose(160), {JointAngle.LEFT_ELBOW: 90})
        assert merged[JointAngle.LEFT_ELBOW] == 160

    def test_no_pose_keeps_previous(self):
        previous = {JointAngle.LEFT_KNEE: 120}
        assert extract_angles(None, previous) == previous

    def test_angles_to_dict(self):
        assert angles_to_dict({JointAngle.LEFT_KNEE: 120}) == {"leftKnee": 120}

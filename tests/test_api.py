"""
Integration tests for API routes.

Tests for Flask endpoints using a stub pose detector, so no camera or
MediaPipe model is needed.
"""

import base64
import json

import cv2
import numpy as np
import pytest

from pose_coach.config import AnalyzerConfig
from pose_coach.utils import MobileFrameProcessor

from pose_factory import pushup_pose, to_json


class StubDetector:
    """Returns canned landmarks instead of running MediaPipe."""

    def __init__(self, frames):
        self.frames = list(frames)

    def detect(self, frame):
        return self.frames.pop(0) if self.frames else None

    def close(self):
        pass


def encoded_image(size=100):
    test_image = np.zeros((size, size, 3), dtype=np.uint8)
    _, buffer = cv2.imencode('.jpg', test_image)
    return base64.b64encode(buffer).decode('utf-8')


@pytest.fixture
def processor():
    return MobileFrameProcessor(config=AnalyzerConfig(), detector=StubDetector([]))


@pytest.fixture
def client(processor):
    """Create a test client for the Flask app."""
    from run import create_app
    app = create_app(processor)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


class TestAPIRoutes:
    """Test suite for API routes."""

    def test_index_route(self, client):
        """Test that index page loads correctly."""
        response = client.get('/')
        assert response.status_code == 200
        assert b'Pose Coach' in response.data

    def test_health_check(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json() == {"status": "healthy", "exercise": "pushup"}

    def test_select_exercise(self, client, processor):
        response = client.post('/select_exercise', json={'mode': 'squat'})
        assert response.status_code == 200
        assert response.get_json()['exercise'] == 'squat'
        assert client.get('/status').get_json()['exercise'] == 'squat'

    def test_select_unknown_exercise(self, client):
        response = client.post('/select_exercise', json={'mode': 'burpee'})
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_select_without_mode(self, client):
        assert client.post('/select_exercise', json={}).status_code == 400

    def test_reset_analyzer(self, client, processor):
        """Test analyzer reset endpoint."""
        processor.session.squat.reps = 3
        processor.session.pushup.reps = 2
        response = client.post('/reset_analyzer', json={'mode': 'squat'})
        assert response.status_code == 200
        assert processor.session.squat.reps == 0
        assert processor.session.pushup.reps == 2


class TestProcessLandmarks:
    """Test suite for /process_landmarks."""

    def test_missing_landmarks(self, client):
        response = client.post('/process_landmarks', json={'mode': 'pushup'})
        assert response.status_code == 400

    def test_no_pose(self, client):
        response = client.post('/process_landmarks', json={'landmarks': None, 'mode': 'pushup'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['skipped'] is True
        assert data['feedback'] == ''
        assert data['reps'] == 0

    def test_malformed_landmark(self, client):
        response = client.post('/process_landmarks', json={'landmarks': [{'x': 0.1}]})
        assert response.status_code == 400

    def test_landmarks_not_a_list(self, client):
        response = client.post('/process_landmarks', json={'landmarks': 'nope'})
        assert response.status_code == 400

    def test_push_up_rep_over_api(self, client):
        data = None
        for angle in [160] * 5 + [80, 160]:
            response = client.post('/process_landmarks', json={
                'landmarks': to_json(pushup_pose(angle, angle)),
                'mode': 'pushup',
            })
            assert response.status_code == 200
            data = response.get_json()
        assert data['reps'] == 1
        assert data['stage'] == 'up'
        assert data['skipped'] is False
        assert data['angles']['leftElbow'] == 160

    def test_good_form_flag(self, client):
        response = client.post('/process_landmarks', json={
            'landmarks': to_json(pushup_pose(80, 80)),
            'mode': 'push-up',
        })
        data = response.get_json()
        assert data['feedback'] == 'Great push-up!'
        assert data['good_form'] is True


class TestProcessFrame:
    """Test suite for /process_frame."""

    def test_process_frame_invalid_json(self, client):
        """Test process_frame with invalid JSON."""
        response = client.post(
            '/process_frame',
            data='not json',
            content_type='application/json'
        )
        assert response.status_code == 400

    def test_process_frame_missing_image(self, client):
        """Test process_frame with missing image field."""
        response = client.post('/process_frame', json={'mode': 'squat'})
        assert response.status_code == 400

    def test_process_frame_tiny_payload(self, client):
        response = client.post('/process_frame', json={'image': 'abcd'})
        assert response.status_code == 400

    def test_process_frame_without_pose(self, client):
        """Frame with nobody in it is returned annotated but skipped."""
        response = client.post('/process_frame', json={
            'image': encoded_image(),
            'mode': 'squat',
        })
        assert response.status_code == 200
        data = json.loads(response.data)
        assert 'image' in data
        assert data['skipped'] is True
        assert data['exercise'] == 'squat'

    def test_process_frame_with_pose(self, processor, client):
        processor._detector = StubDetector([pushup_pose(160, 160)])
        response = client.post('/process_frame', json={
            'image': encoded_image(200),
            'mode': 'pushup',
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['skipped'] is False
        assert data['angles']['leftElbow'] == 160
        decoded = cv2.imdecode(np.frombuffer(base64.b64decode(data['image']), np.uint8), cv2.IMREAD_COLOR)
        assert decoded.shape == (200, 200, 3)


class TestRequestValidation:
    """Bodies that are valid JSON but not usable requests."""

    @pytest.mark.parametrize('endpoint', [
        '/process_frame',
        '/process_landmarks',
        '/select_exercise',
        '/reset_analyzer',
    ])
    @pytest.mark.parametrize('body', ['[1]', '"x"', '["image"]', '["landmarks"]'])
    def test_body_must_be_object(self, client, endpoint, body):
        response = client.post(endpoint, data=body, content_type='application/json')
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Request body must be a JSON object'}

    def test_reset_without_body_resets_active(self, client, processor):
        processor.session.pushup.reps = 4
        response = client.post('/reset_analyzer')
        assert response.status_code == 200
        assert processor.session.pushup.reps == 0

    @pytest.mark.parametrize('value', ['NaN', 'Infinity', '-Infinity'])
    def test_non_finite_coordinate(self, client, processor, value):
        body = '{"landmarks": [{"x": %s, "y": 0.5, "visibility": 0.9}], "mode": "pushup"}' % value
        response = client.post('/process_landmarks', data=body, content_type='application/json')
        assert response.status_code == 400
        assert 'error' in response.get_json()
        assert processor.session.angles == {}

    def test_non_finite_visibility(self, client):
        landmarks = to_json(pushup_pose(160, 160))
        body = json.dumps({'landmarks': landmarks, 'mode': 'pushup'})
        body = body.replace('"visibility": 0.9', '"visibility": NaN', 1)
        response = client.post('/process_landmarks', data=body, content_type='application/json')
        assert response.status_code == 400

    def test_processing_error_returns_json(self, client, processor, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError('boom')

        monkeypatch.setattr(processor, 'process_landmarks', explode)
        response = client.post('/process_landmarks', json={
            'landmarks': to_json(pushup_pose(160, 160)),
            'mode': 'pushup',
        })
        assert response.status_code == 500
        assert response.get_json() == {'error': 'boom'}

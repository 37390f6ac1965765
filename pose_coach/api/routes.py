"""
API Routes Module
=================

Flask API routes for the pose coach server.
"""

import base64
import binascii
import logging
from typing import Optional

import cv2
import numpy as np
from flask import render_template_string, request, jsonify

from ..analyzers import Exercise, Landmark
from ..utils import MobileFrameProcessor

logger = logging.getLogger(__name__)


def _encode_frame(frame: np.ndarray) -> Optional[str]:
    """Encode frame to a base64 JPEG string."""
    ret, buffer = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, 85])
    return base64.b64encode(buffer).decode("utf-8") if ret else None


def _decode_frame(image_data: str) -> np.ndarray:
    """
    Decode a base64 JPEG into a BGR frame.

    Raises:
        ValueError: If the payload is not a usable image
    """
    if not image_data or len(image_data) < 100:
        raise ValueError("Invalid image data - too small")
    try:
        img_bytes = base64.b64decode(image_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Base64 decode error: {e}") from e

    nparr = np.frombuffer(img_bytes, np.uint8)
    frame = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    if frame is None or frame.size == 0:
        raise ValueError("Failed to decode image")
    if frame.shape[0] < 10 or frame.shape[1] < 10:
        raise ValueError("Image too small")
    return frame



def _json_object():
    """
    Request body parsed as a JSON object.

    Returns:
        Tuple of (body or None if absent or not JSON, error response or None)
    """
    data = request.get_json(silent=True)
    if data is not None and not isinstance(data, dict):
        return None, (jsonify({"error": "Request body must be a JSON object"}), 400)
    return data, None


def _parse_mode(data) -> Optional[Exercise]:
    """Exercise named by the request's "mode" field, or None if absent."""
    mode = data.get("mode") if data else None
    return Exercise.parse(mode) if mode else None


def _parse_landmarks(raw):
    """
    Parse a JSON landmark list; null means no pose detected.

    Raises:
        ValueError: If the list or one of its entries is malformed
    """
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValueError("landmarks must be a list or null")
    try:
        return [Landmark.from_dict(item) if item is not None else None for item in raw]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed landmark: {e}") from e


def register_routes(app, html_template: str, processor: Optional[MobileFrameProcessor] = None):
    """
    Register all API routes with the Flask app.

    Args:
        app: Flask application instance
        html_template: HTML template string for the index page
        processor: Frame processor holding the session, created if omitted
    """
    processor = processor or MobileFrameProcessor()
    app.extensions["pose_coach"] = processor

    @app.route("/")
    def index():
        """Serve the main web interface."""
        return render_template_string(html_template)

    @app.route("/process_frame", methods=["POST"])
    def process_frame():
        """
        Process a frame from mobile camera and return analyzed frame.

        Request JSON:
            {
                "image": "<base64-encoded-jpeg>",
                "mode": "pushup" | "squat" | "plank"
            }

        Response JSON:
            {
                "image": "<base64-encoded-jpeg>",
                "feedback": "<feedback-message>",
                "good_form": true | false | null,
                "reps": <int> | null,
                "stage": "not_ready" | "up" | "down" | null,
                "angles": {"leftElbow": <int>, ...},
                "skipped": true | false
            }
        """
        data, error = _json_object()
        if error:
            return error
        if not data or "image" not in data:
            return jsonify({"error": "No image data"}), 400
        try:
            exercise = _parse_mode(data)
            frame = _decode_frame(data["image"])
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        try:
            annotated, result, snapshot = processor.process_frame(frame, exercise)
            encoded_image = _encode_frame(annotated)
            if encoded_image is None:
                return jsonify({"error": "Failed to encode processed frame"}), 500
        except Exception as e:
            logger.exception("Error processing frame")
            return jsonify({"error": str(e)}), 500

        response = dict(snapshot)
        response.update({"image": encoded_image, "skipped": result is None})
        return jsonify(response)

    @app.route("/process_landmarks", methods=["POST"])
    def process_landmarks():
        """
        Evaluate one frame of landmarks produced by an on-device pose model.

        Request JSON:
            {
                "landmarks": [{"x": <float>, "y": <float>, "visibility": <float>}, ...] | null,
                "mode": "pushup" | "squat" | "plank"
            }

        Response JSON: as /process_frame without "image".
        """
        data, error = _json_object()
        if error:
            return error
        if data is None or "landmarks" not in data:
            return jsonify({"error": "No landmark data"}), 400
        try:
            exercise = _parse_mode(data)
            landmarks = _parse_landmarks(data["landmarks"])
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        try:
            result, snapshot = processor.process_landmarks(landmarks, exercise)
        except Exception as e:
            logger.exception("Error processing landmarks")
            return jsonify({"error": str(e)}), 500

        response = dict(snapshot)
        response["skipped"] = result is None
        return jsonify(response)

    @app.route("/select_exercise", methods=["POST"])
    def select_exercise():
        """
        Change the active exercise without resetting any counters.

        Request JSON:
            {
                "mode": "pushup" | "squat" | "plank"
            }
        """
        data, error = _json_object()
        if error:
            return error
        try:
            exercise = _parse_mode(data)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        if exercise is None:
            return jsonify({"error": "No exercise given"}), 400
        processor.select_exercise(exercise)
        return jsonify(processor.snapshot(exercise))

    @app.route("/reset_analyzer", methods=["POST"])
    def reset_analyzer():
        """
        Reset counters and state of one exercise.

        Request JSON:
            {
                "mode": "pushup" | "squat" | "plank"
            }
        """
        data, error = _json_object()
        if error:
            return error
        try:
            exercise = _parse_mode(data)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        processor.reset(exercise)
        return jsonify({"status": "ok"})


    @app.route("/status")
    def status():
        """Current feedback, reps and angles of the active exercise."""
        return jsonify(processor.snapshot())

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "exercise": processor.exercise.value,
        })

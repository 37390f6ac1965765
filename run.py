"""
Pose Coach Server
=================

Main entry point for the Flask server.

Usage:
    python run.py

Or with gunicorn (single worker, the session lives in process memory):
    gunicorn -w 1 --threads 4 -b 0.0.0.0:5000 run:app
"""

import logging
from typing import Optional

from flask import Flask

from pose_coach.api import register_routes
from pose_coach.config import get_server_config
from pose_coach.templates import HTML_TEMPLATE
from pose_coach.utils import MobileFrameProcessor

logger = logging.getLogger(__name__)


def create_app(processor: Optional[MobileFrameProcessor] = None) -> Flask:
    """
    Create the Flask app.

    Args:
        processor: Frame processor to serve, a fresh one if omitted
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    register_routes(app, HTML_TEMPLATE, processor)
    return app


app = create_app()


def main():
    """Main entry point."""
    config = get_server_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Pose coach server running at http://%s:%d (debug=%s)",
                config.host, config.port, config.debug)
    logger.info("Endpoints: GET /, POST /process_frame, POST /process_landmarks, "
                "POST /select_exercise, POST /reset_analyzer, GET /status, GET /health")
    app.run(host=config.host, port=config.port, debug=config.debug, threaded=True)


if __name__ == "__main__":
    main()

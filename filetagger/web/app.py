"""Flask application factory for filetagger."""

import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from filetagger.config import AppConfig, load_config
from filetagger.models import displayable
from filetagger.orchestration import ActivityLog, TagService

from .routes import SERVICE_KEY, bp

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    activity_log: Optional[ActivityLog] = None,
) -> Flask:
    """Create the filetagger Flask application.

    Args:
        config: Runtime configuration. Loaded from the environment when
            omitted, which raises ConfigError if the root folder is unset.
        activity_log: Optional open ActivityLog to record requests to.

    Returns:
        Configured Flask application.
    """
    if config is None:
        config = load_config()

    app = Flask(__name__)
    app.config[SERVICE_KEY] = TagService(config, activity_log=activity_log)
    app.register_blueprint(bp)
    app.add_template_filter(displayable, "displayable")

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error while serving request")
        return jsonify({"success": False, "message": "An unexpected error occurred."}), 500

    logger.info(f"Serving files under {config.root_folder}")
    return app

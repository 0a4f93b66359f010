from __future__ import annotations

import atexit
import logging
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from cropscout.blueprints.api.field import field_api
from cropscout.config import load_config, setup_logging


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    config = load_config()
    if config_overrides:
        for key, value in config_overrides.items():
            setattr(config, key if key == "DEBUG" else key.lower(), value)

    setup_logging(debug=config.DEBUG, log_file=config.log_file or None, level=config.log_level)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())
    flask_app.json.sort_keys = False

    from cropscout.services.container import ServiceContainer

    container = ServiceContainer.build(config)
    flask_app.config["CONTAINER"] = container
    atexit.register(container.shutdown)

    # Global JSON error handler for anything that escapes safe_route
    # (404/405 from routing, malformed JSON bodies).
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            raise exc
        from cropscout.domain.exceptions import CropScoutError
        from cropscout.utils.http import error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, CropScoutError):
            status = exc.http_status
            if status >= 500:
                return safe_error(exc, status, context=type(exc).__name__)
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    V1 = "/api/v1"
    flask_app.register_blueprint(field_api, url_prefix=f"{V1}/field")

    for bp_name in flask_app.blueprints:
        logging.info(f" Registered blueprint: {bp_name}")

    logger = logging.getLogger(__name__)
    logger.info("CropScout application initialized successfully.")

    return flask_app

"""Console entry point for the CropScout API server."""

from __future__ import annotations

import logging

from cropscout import create_app
from cropscout.config import load_config


def main() -> int:
    config = load_config()
    app = create_app()

    logging.info("Starting server on %s:%s", config.host, config.port)
    try:
        app.run(host=config.host, port=config.port, debug=config.DEBUG, use_reloader=False)
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

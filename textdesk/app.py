# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import importlib
from typing import Any, Protocol, cast

from flask import Flask

from textdesk.infrastructure.container import Container
from textdesk.shared.config import AppConfig, load_config
from textdesk.shared.logging import logger, setup_logging
from textdesk.shared.middleware.error_handler import configure_error_handling
from textdesk.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


def _add_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp


def create_app(
    config: AppConfig | None = None,
    container: Container | None = None,
    *,
    configure_logging: bool = True,
) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    if configure_logging:
        setup_logging(config.log_level, debug_mode=config.debug_logging)

    if container.uses_database:
        # Builds the engine and ensures the users/sessions tables
        _ = container.engine

    app = Flask(__name__)
    app.extensions["textdesk.container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    _add_security_headers(app, config)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.protected_controller.as_blueprint())

    if config.session.sweeper_enabled:
        sweeper = container.session_sweeper
        sweeper.start()
        atexit.register(sweeper.stop)

    logger.info(f"Flask app initialized (storage={config.storage_backend})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=False)

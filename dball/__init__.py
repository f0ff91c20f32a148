"""Double-color-ball ticket tracking and settlement service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        config: optional overrides applied after the environment config.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from dball.config import get_config
    from dball.db import init_db
    from dball.error_handlers import register_error_handlers
    from dball.logging_config import configure_logging
    from dball.routes.draw import draw_bp
    from dball.routes.health import health_bp
    from dball.routes.periods import periods_bp
    from dball.routes.tickets import tickets_bp
    from dball.services.period_locks import default_period_locks

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config:
        app.config.update(config)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)
    default_period_locks().timeout = float(app.config["PERIOD_LOCK_TIMEOUT"])

    app.register_blueprint(health_bp)
    app.register_blueprint(tickets_bp)
    app.register_blueprint(draw_bp)
    app.register_blueprint(periods_bp)

    return app

"""Lottery ticket sales service (Flask application package)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config keys applied on top of the environment config.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lottery_sales.config import get_config
    from lottery_sales.db import init_db
    from lottery_sales.error_handlers import register_error_handlers
    from lottery_sales.logging_config import configure_logging
    from lottery_sales.routes.customers import customers_bp
    from lottery_sales.routes.draws import draws_bp
    from lottery_sales.routes.health import health_bp
    from lottery_sales.routes.sales import sales_bp
    from lottery_sales.routes.tickets import tickets_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(draws_bp, url_prefix="/api")
    app.register_blueprint(tickets_bp, url_prefix="/api")
    app.register_blueprint(customers_bp, url_prefix="/api")
    app.register_blueprint(sales_bp, url_prefix="/api")

    return app

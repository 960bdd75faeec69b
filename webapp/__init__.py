# --------------------------------------------------------------
#  __init__.py (package root)
# --------------------------------------------------------------
from typing import Optional, Type

from flask import Flask
from flask_cors import CORS

from nhxedit.config import EditorConfig

from .config import Config
from .services.logging_config import configure_logging
from .services.session_store import SessionStore
from .routes.routes import bp as main_bp

__all__ = ["create_app"]


def create_app(config_object: Optional[Type[Config]] = None) -> Flask:
    """Factory for the Flask WSGI application.

    Each call builds an app with its own session store, so tests can create a
    fresh app per test case.
    """
    import sys

    app: Optional[Flask] = None
    try:
        app = Flask(__name__)
        app.config.from_object(config_object or Config)

        # Configure logging early to capture all messages
        configure_logging(app)

        app.logger.info("[INIT] Enabling CORS...")
        CORS(app, origins=app.config["CORS_ORIGINS"])

        app.logger.info("[INIT] Creating session store...")
        app.extensions["nhxedit_sessions"] = SessionStore(
            EditorConfig.from_env(), max_sessions=app.config["MAX_SESSIONS"]
        )

        app.logger.info("[INIT] Registering blueprints...")
        app.register_blueprint(main_bp)

        app.logger.info("[INIT] Flask app creation complete")
        return app
    except Exception as e:
        # If logging is not configured yet, fallback to stderr
        if app is not None:
            app.logger.error(f"[INIT ERROR] Failed to create app: {e}", exc_info=True)
        else:
            print(f"[INIT ERROR] Failed to create app: {e}", file=sys.stderr)
        raise

import logging
import os
import sys

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from pymongo.errors import PyMongoError

import config
from models import MongoStore, get_store

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when the service cannot start with the current environment."""


def create_app(store: MongoStore | None = None, test_config: dict | None = None):
    """
    Build the Flask app.

    ``store`` is the shared MongoDB connection; when omitted one is opened from
    MONGO_URI, which must be set.
    """
    if store is None:
        if not config.MONGO_URI:
            raise ConfigurationError("Missing MONGO_URI in .env. Add it and restart.")
        store = MongoStore().connect(
            config.MONGO_URI,
            db_name=config.MONGO_DB_NAME,
            timeout_ms=config.MONGO_TIMEOUT_MS,
        )

    app = Flask(__name__)

    # Disable strict slashes to avoid redirect issues with CORS
    app.url_map.strict_slashes = False

    CORS(app, origins=config.CORS_ORIGINS)

    app.config["UPLOADS_DIR"] = config.UPLOADS_DIR
    if test_config:
        app.config.update(test_config)

    # Ensure uploads dir exists
    app.config["UPLOADS_DIR"] = os.path.abspath(app.config["UPLOADS_DIR"])
    os.makedirs(app.config["UPLOADS_DIR"], exist_ok=True)

    store.init_app(app)

    from routes.employees import employees_bp

    app.register_blueprint(employees_bp, url_prefix="/api")

    @app.route("/")
    def home():
        return {
            "message": "Employee Onboarding API",
            "version": "1.0",
            "status": "running",
            "endpoints": {
                "health": "GET /health",
                "onboard": "POST /api/onboard",
                "employees": "GET /api/employees",
                "uploads": "GET /uploads/<filename>"
            }
        }

    @app.route("/health")
    def health_check():
        return jsonify({"ok": True, "db": get_store().state})

    # Serve stored documents so they can be viewed in the browser
    @app.route("/uploads/<path:filename>")
    def uploaded_file(filename):
        return send_from_directory(app.config["UPLOADS_DIR"], filename)

    return app


def load_app():
    """create_app() for real deployments: a bad environment or unreachable database exits with status 1."""
    try:
        return create_app()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    except PyMongoError as e:
        logger.error(f"MongoDB connection error: {e}")
        sys.exit(1)


def main():
    app = load_app()

    debug = os.environ.get("FLASK_ENV") != "production"
    logger.info(f"Server running on port {config.PORT}")
    app.run(host="0.0.0.0", port=config.PORT, debug=debug, use_reloader=False)


# Create the WSGI app when importing this module (needed for gunicorn, see
# gunicorn.conf.py), but allow scripts and tests to disable this by setting CREATE_APP_ON_IMPORT=0
if __name__ != "__main__" and os.getenv("CREATE_APP_ON_IMPORT", "1") not in ("0", "false", "False"):
    app = load_app()

if __name__ == "__main__":
    main()

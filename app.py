"""
Flask application for the quiz content admin.

Wires together:
- the service layer (books, sections, categories, quizzes, questions, GK, users)
- the admin blueprints
- database, migrations and cache extensions

Run with ``flask --app app run`` (the CLI finds ``create_app``) or
``python app.py`` for a debug server.
"""

import os
import re
from datetime import datetime
from typing import Any, Dict, Optional

import click
from dotenv import load_dotenv
from flask import Flask, jsonify

from extensions import cache, db, migrate
import models  # noqa: F401  (registers the tables with SQLAlchemy)
from services import get_service_factory, get_user_service, init_services
from blueprints import get_blueprint_info, register_blueprints

load_dotenv()


def _normalize_sqlite_uri(uri: str, base_dir: str) -> str:
    if not uri or not uri.startswith("sqlite:///"):
        return uri
    raw_path = uri.replace("sqlite:///", "", 1)
    # If already absolute (drive letter or leading slash), leave as-is.
    if os.path.isabs(raw_path) or re.match(r"^[A-Za-z]:[\\/]", raw_path):
        return uri
    abs_path = os.path.abspath(os.path.join(base_dir, raw_path))
    return f"sqlite:///{abs_path.replace(os.sep, '/')}"


def _configure(app: Flask, overrides: Optional[Dict[str, Any]]) -> None:
    overrides = overrides or {}

    if "SQLALCHEMY_DATABASE_URI" not in overrides:
        os.makedirs(app.instance_path, exist_ok=True)
        default_db_path = os.path.join(app.instance_path, "quiz_admin.db")
        raw_db_uri = os.getenv(
            "DATABASE_URL", f"sqlite:///{default_db_path.replace(os.sep, '/')}"
        )
        app.config["SQLALCHEMY_DATABASE_URI"] = _normalize_sqlite_uri(
            raw_db_uri, app.root_path
        )
    app.config.setdefault("SQLALCHEMY_TRACK_MODIFICATIONS", False)

    app.secret_key = os.getenv("FLASK_KEY")
    if not app.secret_key:
        app.logger.warning(
            "FLASK_KEY not set, using a default secret key. Please set this in your .env file for production."
        )
        app.secret_key = "quiz_admin_development_secret_key"

    app.config.setdefault("CACHE_TYPE", os.getenv("CACHE_TYPE", "SimpleCache"))
    app.config.setdefault("CACHE_DEFAULT_TIMEOUT", int(os.getenv("CACHE_TTL", "60")))

    app.config.update(overrides)
    app.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error("Unhandled error: %s", error)
        return jsonify({"success": False, "error": "Internal server error"}), 500


def _register_commands(app: Flask) -> None:
    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    def create_admin_command(email: str, password: str):
        """Create or reset a dashboard admin account."""
        result = get_user_service().create_admin(email, password)
        if not result.get("success"):
            raise click.ClickException(result.get("error", "Unable to create admin."))
        click.echo(f"Admin account ready: {result['account'].email}")


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask application."""
    app = Flask(__name__)
    _configure(app, config_overrides)

    db.init_app(app)
    migrate.init_app(app, db)
    cache.init_app(app)

    print("[*] Initializing services...")
    init_services()
    print("[+] Services initialized successfully")

    print("[*] Registering blueprints...")
    register_blueprints(app)
    print("[+] Blueprints registered successfully")

    _register_error_handlers(app)
    _register_commands(app)

    @app.route("/health")
    def health_check():
        """Health check endpoint for monitoring."""
        try:
            db.session.execute(db.text("SELECT 1"))
            services = get_service_factory().get_all_services()
            return jsonify(
                {
                    "status": "healthy",
                    "timestamp": datetime.now().isoformat(),
                    "database": "available",
                    "services": {name: "available" for name in services},
                    "blueprint_info": get_blueprint_info(),
                }
            )
        except Exception as e:
            app.logger.exception("Health check failed: %s", e)
            return (
                jsonify(
                    {
                        "status": "unhealthy",
                        "error": str(e),
                        "timestamp": datetime.now().isoformat(),
                    }
                ),
                500,
            )

    return app


if __name__ == "__main__":
    application = create_app()

    print("\n[*] Blueprint Configuration:")
    for name, info in get_blueprint_info().items():
        print(f"   {name}: {info['url_prefix']} - {info['description']}")
    print(f"[DB] Database: {application.config['SQLALCHEMY_DATABASE_URI']}")
    print("=" * 50)

    application.run(debug=True, port=5001)

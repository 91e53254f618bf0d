"""Blueprint registration."""

from .admin_routes import admin_bp
from .auth_routes import auth_bp
from .catalog_routes import catalog_bp
from .gk_routes import gk_bp

BLUEPRINTS = (
    (auth_bp, "Admin sign in / sign out"),
    (admin_bp, "Dashboard, users and question reports"),
    (catalog_bp, "Books, sections, categories, quizzes and questions"),
    (gk_bp, "GK subjects, topics and one-liner questions"),
)


def register_blueprints(app):
    for blueprint, _ in BLUEPRINTS:
        app.register_blueprint(blueprint)


def get_blueprint_info():
    return {
        blueprint.name: {
            "url_prefix": blueprint.url_prefix,
            "description": description,
        }
        for blueprint, description in BLUEPRINTS
    }

import os
from apispec import APISpec
from flask_apispec import FlaskApiSpec
from flask_cors import CORS
from flask_talisman import Talisman
from flask import Flask
import click
import logging
import sys

from common.utils.database import init_db
from common.utils.logging_service import LOG_FORMAT, LOG_LEVEL
from common.utils.utils_views import bp as utils_bp
from films.films_views import bp as films_bp, createFilm
from users.users_views import bp as users_bp, createUser
from genres.genres_views import bp as genres_bp
from mpa.mpa_views import bp as mpa_bp
from directors.directors_views import bp as directors_bp, createDirector
from reviews.reviews_views import bp as reviews_bp, create_review
import exceptions_views
from apispec.ext.marshmallow import MarshmallowPlugin

logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],  # Log to stdout
)

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    app = Flask(__name__, instance_relative_config=True)

    app.config.update(
        {
            "APISPEC_SPEC": APISpec(
                title="Filmorate API",
                version="v1",
                plugins=[MarshmallowPlugin()],
                openapi_version="3.0.2",
            ),
            "APISPEC_SWAGGER_URL": "/swagger/",  # JSON
            "APISPEC_SWAGGER_UI_URL": "/swagger-ui/",  # UI
        }
    )

    app.config.update(
        ORIGINS=os.getenv("ORIGINS", "*"),
        FORCE_HTTPS=os.getenv("FORCE_HTTPS", "false").lower() == "true",
    )

    if test_config is not None:
        app.config.update(test_config)

    csp = {"default-src": ["'self'"], "frame-ancestors": ["'none'"]}
    Talisman(
        app,
        force_https=app.config["FORCE_HTTPS"],
        frame_options="DENY",
        content_security_policy=csp,
        referrer_policy="no-referrer",
        x_xss_protection=True,
        x_content_type_options=True,
        strict_transport_security=app.config["FORCE_HTTPS"],
    )

    @app.after_request
    def add_no_cache(response):
        response.headers["Cache-Control"] = "no-store, max-age=0, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response

    CORS(app, origins=[app.config["ORIGINS"]])

    app.register_blueprint(films_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(genres_bp)
    app.register_blueprint(mpa_bp)
    app.register_blueprint(directors_bp)
    app.register_blueprint(reviews_bp)
    app.register_blueprint(utils_bp)
    app.register_blueprint(exceptions_views.bp)

    app.logger.handlers = logging.getLogger().handlers
    app.logger.setLevel(LOG_LEVEL)

    @app.cli.command("init-db")
    def init_db_command():
        """Recreate the tables and load the reference data."""
        init_db()
        click.echo("Initialized the database.")

    docs = FlaskApiSpec(app)
    docs.register(createFilm, blueprint="films", endpoint="createFilm")
    docs.register(createUser, blueprint="users", endpoint="createUser")
    docs.register(createDirector, blueprint="directors", endpoint="createDirector")
    docs.register(create_review, blueprint="reviews", endpoint="create_review")

    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)

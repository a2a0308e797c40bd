"""Flask application factory."""
import logging
import time
from typing import Any, Optional

from flask import Flask, Response, g, request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from werkzeug.exceptions import HTTPException

from spellcat import monitoring
from spellcat.api import api, error_response
from spellcat.config import Settings, settings
from spellcat.models.base import SessionLocal, engine, init_db
from spellcat.services.word_service import WordService

logger = logging.getLogger(__name__)


def create_app(
    db_engine: Optional[Engine] = None,
    app_settings: Optional[Settings] = None,
    seed_words: bool = True,
) -> Flask:
    """Create the web application.

    Tables are created on the given engine and, unless ``seed_words`` is
    False, the curriculum word list is loaded into an empty database.
    """
    app_settings = app_settings or settings
    if db_engine is None:
        db_engine = engine
        session_factory = SessionLocal
    else:
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = app_settings.server.secret_key
    app.json.sort_keys = False
    app.extensions["spellcat"] = {
        "session_factory": session_factory,
        "settings": app_settings,
    }

    init_db(db_engine)
    if seed_words:
        db = session_factory()
        try:
            WordService(db, app_settings.learning).initialize_word_list()
        finally:
            db.close()

    app.register_blueprint(api)

    @app.before_request
    def start_timer() -> None:
        g.request_started = time.perf_counter()

    @app.after_request
    def observe_duration(response: Response) -> Response:
        started = g.pop("request_started", None)
        if started is not None:
            monitoring.request_duration.labels(endpoint=request.endpoint or "unknown").observe(
                time.perf_counter() - started
            )
        return response

    @app.teardown_appcontext
    def close_session(exc: Optional[BaseException]) -> None:
        db = g.pop("db", None)
        if db is not None:
            if exc is not None:
                db.rollback()
            db.close()

    @app.errorhandler(ValueError)
    @app.errorhandler(TypeError)
    def handle_invalid(e: Exception) -> Any:
        monitoring.error_count.labels(error_type=type(e).__name__).inc()
        logger.warning("Rejected request to %s: %s", request.path, e)
        return error_response(str(e), 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception) -> Any:
        if isinstance(e, HTTPException):
            return error_response(e.description, e.code)
        monitoring.error_count.labels(error_type=type(e).__name__).inc()
        logger.exception("Unhandled error on %s", request.path)
        return error_response("Internal server error", 500)

    @app.errorhandler(LookupError)
    def handle_not_found(e: LookupError) -> Any:
        # KeyError and IndexError are programming errors, not missing resources
        if type(e) is not LookupError:
            return handle_unexpected(e)
        message = e.args[0] if e.args else "Not found"
        return error_response(str(message), 404)

    if app_settings.monitoring.enabled:
        @app.route("/metrics")
        def metrics() -> Response:
            body, content_type = monitoring.render_metrics()
            return Response(body, content_type=content_type)

    logger.info("Application created (database: %s)", db_engine.url.render_as_string(hide_password=True))
    return app

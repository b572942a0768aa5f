import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, g, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from config import Config
from src.core import LedgerState
from src.domain.marketplace import MarketplaceLedger, MarketplaceQueries, StringIdentityPolicy
from src.domain.projects import ProjectStore
from src.infrastructure import PinataClient
from src.interfaces.http.responses import InvalidPayload, invalid_payload_response
from src.interfaces.http.routes import (
    project_bp,
    nft_bp,
    user_bp,
    marketplace_bp,
    health_bp,
)
from src.observability import configure_structured_logging, metrics_blueprint
from src.settings import load_app_settings


logger = logging.getLogger(__name__)

# Room for multipart boundaries and form fields on top of the file itself
UPLOAD_FORM_OVERHEAD = 64 * 1024


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root (no extra console spam)

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def create_app(state=None, pinning_client=None, ownership_policy=None, settings_overrides=None):
    """Build the Flask app around a single ledger state.

    ``state``, ``pinning_client`` and ``ownership_policy`` may be injected
    (tests do); otherwise fresh defaults are created for the process lifetime.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    settings = load_app_settings(settings_overrides)
    app.config['MAX_CONTENT_LENGTH'] = settings.max_upload_bytes + UPLOAD_FORM_OVERHEAD
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_allowed_origins}},
        allow_headers=["Content-Type", "X-Request-ID", "X-Pinata-Api-Key", "X-Pinata-Secret-Api-Key"],
        expose_headers=["X-Request-ID"],
    )

    @app.errorhandler(InvalidPayload)
    def _handle_invalid_payload(exc):
        return invalid_payload_response(exc)

    @app.errorhandler(RequestEntityTooLarge)
    def _handle_too_large(exc):
        return jsonify({
            "status": "error",
            "error_code": "file_too_large",
            "message": f"Uploads are limited to {settings.max_upload_bytes} bytes.",
        }), 413

    # One state container per process; every store shares it
    ledger_state = state or LedgerState()
    app.extensions['app_settings'] = settings
    app.extensions['ledger_state'] = ledger_state
    app.extensions['project_store'] = ProjectStore(ledger_state)
    app.extensions['marketplace_ledger'] = MarketplaceLedger(
        ledger_state,
        ownership_policy=ownership_policy or StringIdentityPolicy(),
    )
    app.extensions['marketplace_queries'] = MarketplaceQueries(ledger_state)
    app.extensions['pinning_client'] = pinning_client or PinataClient(
        endpoint=settings.pinata_endpoint,
        timeout=settings.pinata_timeout_seconds,
        uploaded_via=settings.pin_uploaded_via,
    )
    if settings.pinning_credentials() is None:
        app.logger.info("Pinata credentials not configured; uploads need per-request credentials.")

    # --- Register Blueprints ---
    app.register_blueprint(project_bp)
    app.register_blueprint(nft_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(marketplace_bp)
    app.register_blueprint(metrics_blueprint)
    app.register_blueprint(health_bp)

    return app


if __name__ == '__main__':
    debug_mode = bool(Config.DEBUG)
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src', 'log')
    # With the reloader only the child process writes a log file
    if not debug_mode or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    app = create_app()
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True
    logger.info("Starting Flask application...")
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=int(os.getenv('PORT', '5000')), threaded=True)

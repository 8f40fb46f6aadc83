"""HTTP server routes and handlers."""

import logging
from typing import Optional

from flask import Flask, Response, jsonify, render_template_string, request
from werkzeug.exceptions import RequestEntityTooLarge

from .config import Settings
from .docs import DOCS_TEMPLATE
from .errors import NotFoundError, NueDBError, ValidationError
from .store import Store
from .utils import format_limit, serialized_size, to_mb

logger = logging.getLogger(__name__)

DBINFO_TEMPLATE = """
<p>Database Size Information:</p>
<ul>
  <li>Used Size: {used} MB</li>
  <li>Remaining Size: {remaining} MB</li>
  <li>Maximum Size: {maximum} MB</li>
</ul>
"""


def text_response(message: str, status: int = 200) -> Response:
    return Response(message, status=status, mimetype='text/plain')


def wants_json() -> bool:
    """Whether the client asked for the machine-readable form of a page."""
    if request.args.get('format') == 'json':
        return True
    best = request.accept_mimetypes.best_match(['text/html', 'application/json'])
    return best == 'application/json'


def create_app(store: Store, settings: Optional[Settings] = None) -> Flask:
    """Create and configure Flask app.

    Args:
        store: Store instance every route operates on
        settings: Size limits and retention shown in the docs page

    Returns:
        Configured Flask app
    """
    settings = settings or Settings()
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = settings.max_body_size

    @app.errorhandler(NueDBError)
    def handle_error(error: NueDBError):
        if error.status_code >= 500:
            logger.error('%s %s failed: %s', request.method, request.path, error.message)
        return text_response(error.message, error.status_code)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_body_too_large(error):
        limit = format_limit(settings.max_body_size)
        return text_response(f'Request body exceeds the maximum limit of {limit} MB', 400)

    @app.before_request
    def sweep_expired():
        """Drop expired records before any route sees the store."""
        store.sweep()

    @app.route('/write/<user_id>', methods=['POST'])
    def write(user_id: str):
        """Store the ``json`` field of the body under user_id."""
        if request.content_length is not None and request.content_length > settings.max_body_size:
            raise RequestEntityTooLarge()

        body = request.get_json(silent=True)
        if not isinstance(body, dict) or body.get('json') is None:
            raise ValidationError('Missing json body parameter')

        value = body['json']
        try:
            size = serialized_size(value)
        except ValueError as e:
            raise ValidationError(f'JSON value cannot be stored: {e}') from e

        if size > settings.max_payload_size:
            limit = format_limit(settings.max_payload_size)
            raise ValidationError(f'JSON size exceeds the maximum limit of {limit} MB')

        store.put(user_id, value)
        return text_response(f'Data for user {user_id} has been written')

    @app.route('/read/<user_id>', methods=['GET'])
    def read(user_id: str):
        """Return the stored value, or an empty object if there is none."""
        found, value = store.get(user_id)
        return jsonify(value if found else {})

    @app.route('/delete/<user_id>', methods=['GET'])
    def delete(user_id: str):
        if not store.delete(user_id):
            raise NotFoundError(f'No data found for user {user_id}')
        return text_response(f'Data for user {user_id} has been deleted')

    @app.route('/dbinfo', methods=['GET'])
    def dbinfo():
        """Report the size of the persisted document."""
        info = store.size_info()
        if wants_json():
            return jsonify({
                'usedSize': info.used,
                'remainingSize': info.remaining,
                'maxDbSize': info.max_size,
                'keyCount': len(store.keys()),
            })

        return DBINFO_TEMPLATE.format(
            used=to_mb(info.used),
            remaining=to_mb(info.remaining),
            maximum=to_mb(info.max_size),
        )

    @app.route('/', methods=['GET'])
    def index():
        return render_template_string(
            DOCS_TEMPLATE,
            base_url=request.host_url,
            max_payload_mb=format_limit(settings.max_payload_size),
            retention_days=f'{settings.retention_days:g}',
        )

    return app

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from safpay.config import config, DarajaConfig
from safpay.errors.exceptions import AppError
from safpay.utils.logger import get_logger, RequestLogger

CORS_ALLOWED_HEADERS = [
    'X-Requested-With',
    'x-access-token',
    'Origin',
    'Content-Type',
    'Accept',
    'Authorization',
]

logger = get_logger('safpay.app')


def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config.get(config_name, config['default']))

    # Daraja settings are frozen here and passed to providers from app.config
    app.config['DARAJA'] = DarajaConfig.from_app_config(app.config)

    # Middleware
    CORS(app, origins='*', allow_headers=CORS_ALLOWED_HEADERS, supports_credentials=True)
    RequestLogger(app)

    # Register blueprints
    from safpay.api import register_blueprints
    register_blueprints(app)

    # Error handlers
    register_error_handlers(app)

    return app


def _request_url():
    query = request.query_string.decode('utf-8', errors='replace')
    return f'{request.path}?{query}' if query else request.path


def _query_args():
    return {
        key: values[0] if len(values) == 1 else values
        for key, values in request.args.lists()
    }


def register_error_handlers(app):
    """Register error handlers"""

    def route_not_found(error):
        return jsonify({
            'message': 'The route you requested was not found on this server',
            'status': 404,
            'method': request.method,
            'url': _request_url(),
            'query': _query_args(),
        }), 404

    # Unknown paths and known paths with the wrong method are both unmatched routes
    app.register_error_handler(404, route_not_found)
    app.register_error_handler(405, route_not_found)

    @app.errorhandler(AppError)
    def app_error(error):
        logger.error(f'{error.error}: {error.message}', exc_info=error)
        body = {'success': False, 'message': error.message}
        if error.details is not None:
            body['details'] = error.details
        return jsonify(body), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error):
        logger.error(f'HTTP {error.code}: {error.description}')
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        logger.error('An error has occurred', exc_info=error)
        return jsonify({
            'success': False,
            'message': str(error) or 'Internal server Error'
        }), 500

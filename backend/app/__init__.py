from flask import Flask, current_app
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import os

load_dotenv()

REGISTRY_EXTENSION = 'api_registry'
DOCUMENT_EXTENSION = 'openapi_document'


def create_app(config: Optional[Dict[str, Any]] = None, registry=None):
    """Build the Flask app.

    `registry` is an open (or already finalized) contract registry; when
    omitted the service's default contract is built. The registry is
    finalized here, so an inconsistent contract fails startup with
    `ValidationErrors` before any route is reachable.
    """
    app = Flask(__name__)

    app.config['API_TITLE'] = os.getenv('API_TITLE', 'Employee Management API')
    app.config['API_VERSION'] = os.getenv('API_VERSION', '1.0.0')
    app.config['OPENAPI_URL'] = os.getenv('OPENAPI_URL', '/api-docs/openapi.json')
    app.config['DOCS_URL'] = os.getenv('DOCS_URL', '/docs')

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    # Contract: finalize once at boot, emit once, serve read-only afterwards
    from .openapi import build_registry
    from .openapi_parts import emit

    if registry is None:
        registry = build_registry(app.config['API_TITLE'], app.config['API_VERSION'])
    resolved = registry.finalize()
    app.extensions[REGISTRY_EXTENSION] = registry
    app.extensions[DOCUMENT_EXTENSION] = emit(resolved)
    app.logger.info('API contract ready: %d operations, %d schemas', len(resolved.operations), len(resolved.schemas))

    from .routes.employees import employees_bp  # employee service placeholders
    app.register_blueprint(employees_bp)

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    def openapi_spec():
        return get_document()

    def docs_index():
        # Lightweight HTML referencing Redoc CDN (no local install) for quick browsing
        return (
            "<!DOCTYPE html><html><head><title>API Docs</title>"
            "<link rel=\"stylesheet\" href=\"https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.css\" />"
            f"</head><body><redoc spec-url='{app.config['OPENAPI_URL']}'></redoc>"
            "<script src='https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.js'></script>"
            "</body></html>"
        )

    app.add_url_rule(app.config['OPENAPI_URL'], 'openapi_spec', openapi_spec)
    app.add_url_rule(app.config['DOCS_URL'], 'docs_index', docs_index)

    return app


def get_registry():
    return current_app.extensions[REGISTRY_EXTENSION]


def get_document() -> Dict[str, Any]:
    return current_app.extensions[DOCUMENT_EXTENSION]

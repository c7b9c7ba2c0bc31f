"""
Ops Routes
==========

Public status and health endpoints.
"""

import time
from datetime import datetime

from flask import current_app, jsonify
from pymongo.errors import PyMongoError

from . import ops_bp

_started_at = time.time()


def _check_database():
    """Ping the document store."""
    start = time.time()
    try:
        current_app.extensions['pruto'].database.ping()
    except PyMongoError as e:
        return {'status': 'critical', 'error': str(e)}
    return {'status': 'ok', 'latency_ms': round((time.time() - start) * 1000, 1)}


def _build_health_response():
    """Build health data dict and overall status string."""
    checks = {
        'database': _check_database(),
        'uptime': {'status': 'ok', 'seconds': int(time.time() - _started_at)},
    }
    status = 'critical' if any(c['status'] == 'critical' for c in checks.values()) else 'ok'
    data = {
        'status': status,
        'checks': checks,
        'timestamp': datetime.now().isoformat(),
    }
    return data, status


@ops_bp.route('/')
def index():
    """Plain status line for the server root."""
    return 'Pruto Backend Server is running', 200, {'Content-Type': 'text/plain; charset=utf-8'}


@ops_bp.route('/health')
def health_check():
    """Public health endpoint for uptime monitors."""
    data, status = _build_health_response()
    code = 503 if status == 'critical' else 200
    return jsonify(data), code

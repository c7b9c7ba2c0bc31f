"""
Ops Module
==========

Server status endpoints for uptime monitors (no auth).

Usage:
    from pruto.modules.ops import ops_bp

    app.register_blueprint(ops_bp)  # Registers / and /health
"""

from flask import Blueprint

ops_bp = Blueprint(
    'ops',
    __name__
)

from . import routes

__all__ = ['ops_bp']

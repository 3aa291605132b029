"""
API module - routes and schemas.
Routes are split by domain: settings, health.
"""

from .routes import register_routes

__all__ = ["register_routes"]

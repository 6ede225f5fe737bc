"""Marketplace API package."""

from marketplace.api.routes import register_error_handlers, routers

__all__ = ["routers", "register_error_handlers"]

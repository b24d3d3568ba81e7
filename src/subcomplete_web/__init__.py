"""Flask front end for the substring autocomplete index."""
from .web import app, serve

__all__ = ["app", "serve"]

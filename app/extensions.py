"""
Flask extensions initialization.
"""
from flask import current_app

from .services.region_registry import RegionRegistry


class Regions:
    """Attaches the region registry to an app, Flask-extension style."""

    key = 'region_registry'

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.extensions[self.key] = RegionRegistry.from_config(app.config)

    @property
    def registry(self) -> RegionRegistry:
        return current_app.extensions[self.key]


# Region registry
regions = Regions()

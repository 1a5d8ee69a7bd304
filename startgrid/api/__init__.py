"""
HTTP API for grid persistence and icon search.
"""

from startgrid.api.routes import create_grid_blueprint

__all__ = ["create_grid_blueprint"]

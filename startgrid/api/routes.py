"""
Grid HTTP API mounted on the Dash (Flask) server.

    PUT /grid/update          replace the account's grid
    GET /grid/search_icon     icon candidates for the add-cell dialog
"""

import logging
from typing import Callable

from flask import Blueprint, jsonify, request

from startgrid.db.repository import GridRepository
from startgrid.icons.catalog import IconCatalog
from startgrid.layouts.cells import Grid

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 15


def create_grid_blueprint(
    grid_repo: GridRepository,
    catalog: IconCatalog,
    current_account: Callable[[], str],
) -> Blueprint:
    """
    Build the ``/grid`` blueprint.

    Args:
        grid_repo: Repository storing grids
        catalog: Icon catalog for searches
        current_account: Returns the id of the requesting account

    Returns:
        Blueprint to register on the Flask server
    """
    bp = Blueprint("grid", __name__, url_prefix="/grid")

    @bp.route("/update", methods=["PUT"])
    def update_grid():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"ok": False, "error": "Body must be a grid object"}), 400

        grid = Grid.from_dict(data, grid_repo.default_col, grid_repo.default_row)
        grid_repo.replace(current_account(), grid)
        return jsonify({"ok": True})

    @bp.route("/search_icon", methods=["GET"])
    def search_icon():
        query = request.args.get("q", "")
        limit = request.args.get("l", DEFAULT_LIMIT, type=int)
        return jsonify(catalog.search(query, limit))

    return bp

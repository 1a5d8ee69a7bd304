"""
StartGrid - Browser start page built from a grid of cells.

Link tiles and embedded widgets are arranged on a fixed-size draggable grid,
edited in place and saved per account.
"""

__version__ = "0.1.0"

from startgrid.config import Config

__all__ = ["Config", "__version__"]

"""
Entry point for running StartGrid as a module.

Usage:
    python -m startgrid serve --port 8050
"""

from startgrid.cli import app

if __name__ == "__main__":
    app()

#!/usr/bin/env python3
"""
Main entry point for the Pelada Manager web application.

This script launches the Flask-based JSON API server.
"""
import logging
import sys

from pelada.ui.web_app import run_web_app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Optional first argument: JSON roster file to load at startup
    run_web_app(roster_file=sys.argv[1] if len(sys.argv) > 1 else None)

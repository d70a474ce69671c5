"""
Entry point for running Lighthouse as a module.

Usage:
    python -m lighthouse [command] [options]

Example:
    python -m lighthouse offline status
    python -m lighthouse offline enqueue POST /api/sessions --body '{"minutes": 25}'
    python -m lighthouse offline sync
"""

from lighthouse.cli.main import cli

if __name__ == "__main__":
    cli()

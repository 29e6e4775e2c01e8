"""Entry point for ``python -m wirecall``."""

from wirecall.cli.commands import app

if __name__ == "__main__":
    app()

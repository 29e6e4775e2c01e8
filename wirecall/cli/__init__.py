"""Command-line interface for wirecall."""

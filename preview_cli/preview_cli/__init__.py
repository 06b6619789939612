"""Command-line interface for the livepreview engine."""

"""Command-line interface for minigit."""

"""CLI module for marketpulse."""

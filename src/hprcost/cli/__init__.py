"""Command-line interface for hprcost."""

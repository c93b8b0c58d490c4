"""Command line interface for aws-sessions-switcher."""

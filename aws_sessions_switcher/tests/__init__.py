"""Tests for aws-sessions-switcher."""

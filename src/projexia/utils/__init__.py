"""Utility modules for Projexia."""

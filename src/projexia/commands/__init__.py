"""Command-line sub-applications for Projexia."""

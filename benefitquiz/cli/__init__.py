"""Command-line entry points for benefitquiz."""

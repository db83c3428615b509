"""Input adapters that turn coverage tool output into covhtml models."""

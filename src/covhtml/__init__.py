"""covhtml — HTML reports for gocov coverage data."""

__version__ = "0.1.0"

"""Asset performance in real terms: gold, housing and PCE denominated charts."""

__version__ = "0.1.0"

"""HTTP API for the dashboard data."""

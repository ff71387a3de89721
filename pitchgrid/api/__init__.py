"""HTTP API for running matches."""

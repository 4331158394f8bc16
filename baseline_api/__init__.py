"""HTTP API for the baseline compatibility checker."""

"""HTTP routes for the editing API."""

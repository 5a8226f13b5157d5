"""Endpoint functions for the Drive and OAuth APIs."""

"""Fetch-cycle pipelines: updaters and price processing."""

"""Dashboard web app and health endpoint."""

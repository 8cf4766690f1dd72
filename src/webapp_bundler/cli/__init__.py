"""Command-line interface for webapp-bundler."""

"""Services and repositories for the pay API."""

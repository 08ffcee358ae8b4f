"""Infrastructure Layer: HTTP transport, demo store, logging setup."""

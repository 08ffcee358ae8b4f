"""API Layer: demo FastAPI routes and global error handlers."""

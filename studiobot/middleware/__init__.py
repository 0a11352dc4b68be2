"""Authentication and CORS for the FastAPI app."""

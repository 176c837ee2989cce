"""User endpoints, persistence and job applications."""

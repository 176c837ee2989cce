"""Company endpoints and persistence."""

"""Job endpoints and persistence."""

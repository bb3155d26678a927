"""Services around the core: structured logging and the match runner."""

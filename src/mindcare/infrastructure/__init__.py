"""Infrastructure layer: logging and chat responder clients."""

class RenderError(Exception):
    """Raised when a redacted artifact cannot be produced."""

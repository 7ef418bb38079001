class SchemaSourceError(RuntimeError):
    """Raised when the schema cannot be loaded from its source."""

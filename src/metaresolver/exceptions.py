# Custom exceptions for metaresolver

class MetaResolverError(Exception):
    """Base exception for all library-specific errors."""
    pass

class ConfigError(MetaResolverError):
    """Raised when a resolver is assembled with invalid configuration."""
    pass


class MetamodelError(MetaResolverError):
    """Raised when the bundled metamodel is built inconsistently."""

    def __init__(self, class_name: str, message: str):
        self.class_name = class_name
        self.message = message
        super().__init__(f"Invalid metamodel class '{class_name}': {message}")

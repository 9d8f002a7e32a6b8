"""Custom exceptions for the GlobalMarket validation system."""


class GlobalMarketError(Exception):
    """Base exception for GlobalMarket related errors."""
    pass


class SchemaDefinitionError(GlobalMarketError):
    """Raised when a collection validator cannot be compiled into a schema."""

    def __init__(self, path, message):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class UnknownCollectionError(GlobalMarketError, KeyError):
    """Raised when a collection name is not in the registry."""

    def __init__(self, name):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown collection: '{self.name}'"


class ConfigurationError(GlobalMarketError):
    """Raised when required connection settings are missing."""
    pass

"""Errors raised while building class models."""


class ConfigurationError(RuntimeError):
    """Raised when a class declaration cannot be turned into a class model."""


class MultipleCreatorsError(ConfigurationError):
    """Raised when more than one constructor or factory is marked as the creator."""


class InvalidCreatorError(ConfigurationError):
    """Raised when a creator factory does not return the modelled type."""


class IncompleteCreatorAnnotationError(ConfigurationError):
    """Raised when a creator parameter carries no property marker."""


class CreatorTypeMismatchError(ConfigurationError):
    """Raised when a creator parameter type does not fit its bound property."""

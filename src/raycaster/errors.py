"""Exception types shared across the package."""


class ConfigurationError(ValueError):
    """Raised when a primitive, projection or render setting is malformed.

    Construction-time validation raises this so that bad inputs fail before
    any ray is cast. Ray casts themselves never raise for a miss; they
    return ``None``.
    """

class ConfigurationError(ValueError):
    """Raised before a simulation starts when the configuration cannot be simulated."""


class ComputationWarning(UserWarning):
    """Non-fatal numeric condition; a documented fallback value was substituted."""

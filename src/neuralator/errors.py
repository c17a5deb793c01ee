"""
Neuralator Errors Module

Exceptions raised by the package. Both derive from ValueError, so callers
that only care about "bad input" can keep catching the built-in type.

Classes:
    ConfigurationError:    Invalid hyperparameters, raised before a run starts
    TopologyMismatchError: Two networks built from different layer sizes were compared
"""

class ConfigurationError(ValueError):
    """Raised when a Config cannot drive a run."""
    pass

class TopologyMismatchError(ValueError):
    """Raised when comparing networks that were built from different layer sizes."""
    pass

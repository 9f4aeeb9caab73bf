# file: src/module1_hamming/errors.py

"""
Exception hierarchy shared by the block code and the solver.

All exceptions inherit from HammingSimError for unified handling.
"""


class HammingSimError(Exception):
    """Base exception for all simulator errors."""
    pass


class InvalidInputError(HammingSimError, ValueError):
    """Raised when a data word or codeword is malformed."""
    pass


class InvalidParameterError(HammingSimError, ValueError):
    """Raised when a configuration value lies outside its declared range."""

    def __init__(self, message: str, parameter: str = None, value=None):
        super().__init__(message)
        self.parameter = parameter
        self.value = value

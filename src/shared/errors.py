# shared/errors.py
class VectorError(Exception):
    """
    Base class for errors raised by vector operations.
    """


class InvalidArgument(VectorError, ValueError):
    """
    Raised when an input does not resolve to three finite numeric components.
    """


class DivisionByZero(VectorError, ZeroDivisionError):
    """
    Raised when an operation would divide by zero.
    """

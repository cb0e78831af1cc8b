"""Exception hierarchy for the BCH codec.

Construction-time misconfiguration and call-level input errors are raised as
exceptions. A received word that cannot be corrected is *not* an exception:
``BchCoder.decode`` reports it through ``DecodeStatus.UNCORRECTABLE``.
"""


class BchError(Exception):
    """Base class for every error raised by bchfec."""
    default_message = "A failure of some kind occurred in the BCH codec."

    def __init__(self, msg: str = None):
        if msg is None:
            msg = self.default_message
        super().__init__(msg)


class InvalidFieldParameters(BchError, ValueError):
    """Extension degree or primitive polynomial cannot build GF(2^m)."""
    default_message = "Field polynomial is not primitive for the requested degree."


class InvalidCodeParameters(BchError, ValueError):
    """(n, k, t) are inconsistent with each other or with the field."""
    default_message = "Code parameters are inconsistent with the field."


class DivisionByZero(BchError, ZeroDivisionError):
    """Inverse or logarithm of the zero field element."""
    default_message = "Division by zero in GF field."


class DivisionByZeroPolynomial(DivisionByZero):
    default_message = "Polynomial division by the zero polynomial."


class SingularMatrixError(BchError, ArithmeticError):
    """Gaussian elimination found a column without a nonzero pivot."""
    default_message = "Matrix is singular over the field."


class InputLengthMismatch(BchError, ValueError):
    default_message = "Input has the wrong number of bits."


class EncodingInputLengthMismatch(InputLengthMismatch):
    default_message = "Message length does not match k."


class DecodingInputLengthMismatch(InputLengthMismatch):
    default_message = "Received word length does not match n."


class ConsistencyError(BchError, ValueError):
    """An arithmetic invariant that must always hold was violated."""
    default_message = "Internal arithmetic produced an inconsistent result."

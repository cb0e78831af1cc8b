"""Binary BCH forward-error-correction codec."""
from .bchcoder import (
    BchCoder,
    DecodeResult,
    DecodeStatus,
    bch_code,
    build_code,
    decode,
    encode,
)
from .bchcodegenerator import BchCodeGenerator, build_generator
from .exceptions import (
    BchError,
    ConsistencyError,
    DecodingInputLengthMismatch,
    DivisionByZero,
    DivisionByZeroPolynomial,
    EncodingInputLengthMismatch,
    InvalidCodeParameters,
    InvalidFieldParameters,
)
from .galoisfield import GF2, GaloisField, build_field, find_primitive_polynomial
from .minpoly import MinimalPolynomialResolver

__version__ = "0.1.0"

from .backends import Backend, BN128Backend, Secp256k1Backend, get_backend  # noqa: F401
from .errors import (  # noqa: F401
    BackendArithmeticError,
    DeserializationError,
    DuplicateIdentifier,
    InvalidIdentifier,
    InvalidThreshold,
    VerificationFailed,
    VSSError,
    ZeroIdentifier,
)
from .polynomial import Polynomial  # noqa: F401
from .shamir import Share, combine, combine_in_group, lagrange_coefficients, split  # noqa: F401
from .feldman import FeldmanVerifier  # noqa: F401
from .pedersen import PedersenResult, PedersenVerifier  # noqa: F401
from . import codec, feldman, pedersen  # noqa: F401

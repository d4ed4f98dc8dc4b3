import functools
import hmac
import logging

from . import util
from .backends import Backend, get_backend
from .errors import InvalidThreshold
from .polynomial import Polynomial


def _values_equal(a, b) -> bool:
    if not (isinstance(a, int) and isinstance(b, int)):
        # group shares hold public points
        return a == b
    width = max(32, (max(a.bit_length(), b.bit_length()) + 8) // 8)
    return hmac.compare_digest(
        a.to_bytes(width, byteorder='big', signed=True),
        b.to_bytes(width, byteorder='big', signed=True))


class Share(object):
    __slots__ = ('identifier', 'value')

    def __init__(self, identifier: int, value):
        self.identifier = identifier
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Share):
            return NotImplemented
        return self.identifier == other.identifier and _values_equal(self.value, other.value)

    __hash__ = None

    def __iter__(self):
        yield self.identifier
        yield self.value

    def __repr__(self):
        # never show the value
        return '<{}.{} identifier={}>'.format(__name__, self.__class__.__name__, self.identifier)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.erase()

    def erase(self):
        self.value = 0 if isinstance(self.value, int) else None


def resolve_identifiers(identifiers, backend: Backend) -> list:
    # an int n is shorthand for the sequential identifiers 1..n
    if isinstance(identifiers, int):
        identifiers = range(1, identifiers + 1)
    identifiers = list(identifiers)
    util.validate_identifiers(identifiers, backend.order)
    return identifiers


def split_with_polynomial(secret: int, threshold: int, identifiers, backend: Backend = None, rng=None):
    """
    Like :func:`split` but also hand back the polynomial. The caller owns it and
    must erase it once it has no further use for the coefficients.
    """
    backend = backend or get_backend()
    identifiers = resolve_identifiers(identifiers, backend)
    util.validate_threshold(threshold, len(identifiers))

    polynomial = Polynomial.random(secret, threshold, backend, rng)
    try:
        shares = [Share(x, polynomial.evaluate(x)) for x in identifiers]
    except BaseException:
        polynomial.erase()
        raise

    logging.debug('split secret into {} {} shares with threshold {}'.format(len(shares), backend.name, threshold))
    return shares, polynomial


def split(secret: int, threshold: int, identifiers, backend: Backend = None, rng=None) -> list:
    """
    Split ``secret`` into one share per identifier such that any ``threshold``
    of them recover it.
    """
    shares, polynomial = split_with_polynomial(secret, threshold, identifiers, backend, rng)
    polynomial.erase()
    return shares


def lagrange_coefficients(identifiers, backend: Backend) -> list:
    identifiers = list(identifiers)
    util.validate_identifiers(identifiers, backend.order)

    coefficients = []
    for i, x_i in enumerate(identifiers):
        numerator = denominator = 1
        for j, x_j in enumerate(identifiers):
            if i == j:
                continue
            numerator = backend.scalar_mul(numerator, x_j)
            denominator = backend.scalar_mul(denominator, backend.scalar_sub(x_j, x_i))
        coefficients.append(backend.scalar_mul(numerator, backend.scalar_inv(denominator)))

    return coefficients


def _check_share_count(shares: list, threshold: int):
    if not shares:
        raise InvalidThreshold('cannot combine an empty set of shares')

    if threshold is not None:
        util.validate_threshold(threshold)
        if len(shares) < threshold:
            raise InvalidThreshold('{} shares supplied but threshold is {}'.format(len(shares), threshold))


def combine(shares, backend: Backend = None, threshold: int = None) -> int:
    """
    Recover the secret from ``shares`` by Lagrange interpolation at zero.

    Supplying fewer shares than the sharing threshold is only detected when
    ``threshold`` is passed. Without it the result is silently wrong, so callers
    that cannot vouch for the share count should pass it or verify the shares
    with Feldman or Pedersen commitments first.
    """
    backend = backend or get_backend()
    shares = list(shares)
    _check_share_count(shares, threshold)

    lambdas = lagrange_coefficients((share.identifier for share in shares), backend)
    for share in shares:
        backend.validate_scalar(share.value)

    logging.debug('combining {} {} shares'.format(len(shares), backend.name))
    return functools.reduce(
        backend.scalar_add,
        (backend.scalar_mul(share.value, lam) for share, lam in zip(shares, lambdas)),
        0)


def combine_in_group(shares, backend: Backend = None, threshold: int = None):
    """
    Interpolate shares whose values are group elements, e.g. partial signatures
    or partial decryptions computed as G·share.
    """
    backend = backend or get_backend()
    shares = list(shares)
    _check_share_count(shares, threshold)

    lambdas = lagrange_coefficients((share.identifier for share in shares), backend)
    for share in shares:
        backend.validate_point(share.value)

    logging.debug('combining {} {} group shares'.format(len(shares), backend.name))
    return backend.sum_points(backend.point_mul(share.value, lam) for share, lam in zip(shares, lambdas))

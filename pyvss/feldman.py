"""
Feldman verifiable secret sharing.

Commitments C_i = G·a_i to the sharing polynomial let anybody check a share
against G·value == Σ C_i·x^i. C_0 = G·secret is exposed, so the scheme binds the
dealer but does not hide the secret's commitment; see :mod:`pyvss.pedersen`
when that matters.
"""
import logging

from . import shamir, util
from .backends import Backend, get_backend
from .errors import BackendArithmeticError, InvalidThreshold, VerificationFailed
from .polynomial import Polynomial, evaluate_in_group


def _resolve_generator(backend: Backend, generator):
    if generator is None:
        return backend.generator
    backend.validate_point(generator)
    if backend.is_identity(generator):
        raise BackendArithmeticError('the identity cannot serve as a commitment generator')
    return generator


def commit(polynomial: Polynomial, backend: Backend = None, generator=None) -> list:
    backend = backend or polynomial.backend
    generator = _resolve_generator(backend, generator)
    return [backend.point_mul(generator, coeff) for coeff in polynomial.coefficients]


def verify(share: shamir.Share, commitments, backend: Backend = None, generator=None) -> bool:
    backend = backend or get_backend()
    generator = _resolve_generator(backend, generator)

    if not commitments:
        raise InvalidThreshold('cannot verify against an empty commitment vector')

    util.validate_identifier(share.identifier, backend.order)
    for commitment in commitments:
        backend.validate_point(commitment)

    try:
        backend.validate_scalar(share.value)
    except BackendArithmeticError:
        logging.debug('share {} does not hold a scalar'.format(share.identifier))
        return False

    lhs = backend.point_mul(generator, share.value)
    rhs = evaluate_in_group(commitments, share.identifier, backend)

    if backend.point_eq(lhs, rhs):
        return True

    logging.debug('share {} does not match Feldman commitments'.format(share.identifier))
    return False


def validate(share: shamir.Share, commitments, backend: Backend = None, generator=None):
    if not verify(share, commitments, backend, generator):
        logging.warning('Feldman verification failed for share {}'.format(share.identifier))
        raise VerificationFailed('share {} is inconsistent with the commitments'.format(share.identifier))


class FeldmanVerifier(object):
    def __init__(self, commitments, backend: Backend = None, generator=None):
        self.backend = backend or get_backend()
        self.generator = _resolve_generator(self.backend, generator)
        self.commitments = list(commitments)
        if not self.commitments:
            raise InvalidThreshold('a verifier needs at least one commitment')

    def __repr__(self):
        return '<{}.{} {} commitments={}>'.format(
            __name__, self.__class__.__name__, self.backend.name, len(self.commitments))

    def __eq__(self, other):
        if not isinstance(other, FeldmanVerifier):
            return NotImplemented
        return (
            self.backend.name == other.backend.name and
            len(self.commitments) == len(other.commitments) and
            self.backend.point_eq(self.generator, other.generator) and
            all(self.backend.point_eq(a, b) for a, b in zip(self.commitments, other.commitments))
        )

    __hash__ = None

    @property
    def threshold(self) -> int:
        return len(self.commitments)

    @property
    def public_commitment(self):
        return self.commitments[0]

    def verify(self, share: shamir.Share) -> bool:
        return verify(share, self.commitments, self.backend, self.generator)

    def validate(self, share: shamir.Share):
        validate(share, self.commitments, self.backend, self.generator)


def split(secret: int, threshold: int, identifiers, backend: Backend = None, rng=None, generator=None):
    shares, polynomial = shamir.split_with_polynomial(secret, threshold, identifiers, backend, rng)
    with polynomial:
        verifier = FeldmanVerifier(commit(polynomial, generator=generator), polynomial.backend, generator)
    return shares, verifier

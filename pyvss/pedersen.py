"""
Pedersen verifiable secret sharing.

Every coefficient a_i of the value polynomial is paired with a coefficient b_i
of an independent blinding polynomial and committed to as C_i = G·a_i + H·b_i,
where nobody knows log_G(H). The commitments hide the secret and bind the
dealer; in exchange every participant receives a blinding share alongside
their secret share, and must guard it as carefully. A leaked blinding share
reduces that participant's protection to the Feldman level.
"""
import collections
import contextlib
import logging

from . import feldman, shamir, util
from .backends import Backend, get_backend
from .errors import BackendArithmeticError, InvalidThreshold, VerificationFailed
from .polynomial import Polynomial, evaluate_in_group

PedersenResult = collections.namedtuple('PedersenResult', (
    'blinding',
    'blind_shares',
    'secret_shares',
    'verifier',
))


def _resolve_generators(backend: Backend, generator, blind_generator):
    if generator is None:
        generator = backend.generator
    if blind_generator is None:
        blind_generator = backend.blinding_generator

    backend.validate_point(generator)
    backend.validate_point(blind_generator)
    if backend.is_identity(generator) or backend.is_identity(blind_generator):
        raise BackendArithmeticError('the identity cannot serve as a Pedersen generator')
    if backend.point_eq(generator, blind_generator):
        raise BackendArithmeticError('Pedersen generators must be independent')

    return generator, blind_generator


def commit(value_polynomial: Polynomial,
           blind_polynomial: Polynomial,
           backend: Backend = None,
           generator=None,
           blind_generator=None) -> list:
    if len(value_polynomial) != len(blind_polynomial):
        raise InvalidThreshold('polynomial lengths must match ({} != {})'.format(
            len(value_polynomial), len(blind_polynomial)))

    backend = backend or value_polynomial.backend
    g, h = _resolve_generators(backend, generator, blind_generator)

    return [
        backend.point_add(backend.point_mul(g, a), backend.point_mul(h, b))
        for a, b in zip(value_polynomial.coefficients, blind_polynomial.coefficients)
    ]


def verify(share: shamir.Share,
           blind_share: shamir.Share,
           commitments,
           backend: Backend = None,
           generator=None,
           blind_generator=None) -> bool:
    backend = backend or get_backend()
    g, h = _resolve_generators(backend, generator, blind_generator)

    if not commitments:
        raise InvalidThreshold('cannot verify against an empty commitment vector')

    util.validate_identifier(share.identifier, backend.order)
    for commitment in commitments:
        backend.validate_point(commitment)

    if share.identifier != blind_share.identifier:
        logging.debug('blinding share {} paired with share {}'.format(blind_share.identifier, share.identifier))
        return False

    try:
        backend.validate_scalar(share.value)
        backend.validate_scalar(blind_share.value)
    except BackendArithmeticError:
        logging.debug('share {} does not hold scalars'.format(share.identifier))
        return False

    lhs = backend.point_add(backend.point_mul(g, share.value), backend.point_mul(h, blind_share.value))
    rhs = evaluate_in_group(commitments, share.identifier, backend)

    if backend.point_eq(lhs, rhs):
        return True

    logging.debug('share {} does not match Pedersen commitments'.format(share.identifier))
    return False


def validate(share: shamir.Share,
             blind_share: shamir.Share,
             commitments,
             backend: Backend = None,
             generator=None,
             blind_generator=None):
    if not verify(share, blind_share, commitments, backend, generator, blind_generator):
        logging.warning('Pedersen verification failed for share {}'.format(share.identifier))
        raise VerificationFailed('share {} is inconsistent with the commitments'.format(share.identifier))


class PedersenVerifier(object):
    def __init__(self, commitments, feldman_verifier: feldman.FeldmanVerifier = None,
                 backend: Backend = None, generator=None, blind_generator=None):
        self.backend = backend or get_backend()
        self.generator, self.blind_generator = _resolve_generators(self.backend, generator, blind_generator)
        self.commitments = list(commitments)
        if not self.commitments:
            raise InvalidThreshold('a verifier needs at least one commitment')

        if feldman_verifier is not None:
            if len(feldman_verifier.commitments) != len(self.commitments):
                raise InvalidThreshold('Feldman and Pedersen commitment counts differ ({} != {})'.format(
                    len(feldman_verifier.commitments), len(self.commitments)))
            if not self.backend.point_eq(feldman_verifier.generator, self.generator):
                raise BackendArithmeticError('Feldman and Pedersen verifiers must share the generator G')
        self.feldman_verifier = feldman_verifier

    def __repr__(self):
        return '<{}.{} {} commitments={}>'.format(
            __name__, self.__class__.__name__, self.backend.name, len(self.commitments))

    def __eq__(self, other):
        if not isinstance(other, PedersenVerifier):
            return NotImplemented
        point_eq = self.backend.point_eq
        return (
            self.backend.name == other.backend.name and
            len(self.commitments) == len(other.commitments) and
            point_eq(self.generator, other.generator) and
            point_eq(self.blind_generator, other.blind_generator) and
            all(point_eq(a, b) for a, b in zip(self.commitments, other.commitments)) and
            self.feldman_verifier == other.feldman_verifier
        )

    __hash__ = None

    @property
    def threshold(self) -> int:
        return len(self.commitments)

    def verify(self, share: shamir.Share, blind_share: shamir.Share) -> bool:
        return verify(share, blind_share, self.commitments, self.backend, self.generator, self.blind_generator)

    def validate(self, share: shamir.Share, blind_share: shamir.Share):
        validate(share, blind_share, self.commitments, self.backend, self.generator, self.blind_generator)


def split(secret: int,
          threshold: int,
          identifiers,
          backend: Backend = None,
          rng=None,
          blinding: int = None,
          generator=None,
          blind_generator=None) -> PedersenResult:
    """
    Split ``secret`` and commit to it with Pedersen commitments.

    ``blinding`` becomes the constant term of the blinding polynomial and is
    drawn from ``rng`` when omitted. ``generator`` and ``blind_generator``
    default to the backend's base point and its hashed blinding generator.

    The returned verifier also carries a Feldman verifier over the value
    polynomial, which protocols such as Gennaro's DKG need in a later round.
    """
    backend = backend or get_backend()
    g, h = _resolve_generators(backend, generator, blind_generator)
    if blinding is None:
        blinding = backend.random_scalar(rng)

    with contextlib.ExitStack() as exitstack:
        secret_shares, secret_polynomial = shamir.split_with_polynomial(
            secret, threshold, identifiers, backend, rng)
        exitstack.enter_context(secret_polynomial)

        blind_shares, blind_polynomial = shamir.split_with_polynomial(
            blinding, threshold, identifiers, backend, rng)
        exitstack.enter_context(blind_polynomial)

        feldman_commitments = feldman.commit(secret_polynomial, backend, g)
        # {(g^a0 h^b0), (g^a1 h^b1), ..., (g^at h^bt)}
        commitments = [
            backend.point_add(g_i, backend.point_mul(h, b))
            for g_i, b in zip(feldman_commitments, blind_polynomial.coefficients)
        ]

    return PedersenResult(
        blinding=blinding,
        blind_shares=blind_shares,
        secret_shares=secret_shares,
        verifier=PedersenVerifier(
            commitments,
            feldman.FeldmanVerifier(feldman_commitments, backend, g),
            backend, g, h),
    )

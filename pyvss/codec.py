"""
Byte encodings for shares, commitment vectors and verifiers.

Every encoding starts with a one byte format version. Identifiers are unsigned
LEB128 varints; scalars and points use the backend's fixed width canonical
encodings. The layouts are::

    share            version | varint(identifier) | scalar
    group share      version | varint(identifier) | point
    commitments      version | varint(count) | point * count
    feldman verifier version | point(G) | varint(count) | point * count
    pedersen verif.  version | point(G) | point(H) | varint(count) | point * count
                             | varint(count or 0) | feldman point * count

Decoding checks the version, exact lengths, identifier range and field or
curve membership and raises :class:`~pyvss.errors.DeserializationError` on
anything malformed.
"""
import contextlib
import re

from . import util
from .backends import Backend, get_backend
from .errors import BackendArithmeticError, DeserializationError, InvalidIdentifier, InvalidThreshold
from .feldman import FeldmanVerifier
from .pedersen import PedersenVerifier
from .shamir import Share

FORMAT_VERSION = 1
HEX_RE = re.compile(r'(?P<optprefix>0x)?(?P<value>([0-9A-Fa-f]{2})*)')


@contextlib.contextmanager
def _decoding(what: str):
    try:
        yield
    except (BackendArithmeticError, InvalidIdentifier) as e:
        raise DeserializationError('invalid {}: {}'.format(what, e)) from e


def _max_varint_bytes(backend: Backend) -> int:
    return -(-8 * backend.scalar_size // 7)


def _check_version(bts: bytes) -> int:
    if not bts:
        raise DeserializationError('empty input')
    if bts[0] != FORMAT_VERSION:
        raise DeserializationError('unsupported format version {}'.format(bts[0]))
    return 1


def _take(bts: bytes, offset: int, size: int) -> (bytes, int):
    if len(bts) - offset < size:
        raise DeserializationError('expected {} more bytes at offset {} but only {} remain'.format(
            size, offset, len(bts) - offset))
    return bts[offset:offset+size], offset + size


def _check_consumed(bts: bytes, offset: int):
    if offset != len(bts):
        raise DeserializationError('{} trailing bytes'.format(len(bts) - offset))


def encode_identifier(identifier: int, backend: Backend = None) -> bytes:
    backend = backend or get_backend()
    util.validate_identifier(identifier, backend.order)
    return util.uint_to_varint(identifier)


def decode_identifier(bts: bytes, offset: int = 0, backend: Backend = None) -> (int, int):
    backend = backend or get_backend()
    identifier, offset = util.varint_to_uint(bts, offset, _max_varint_bytes(backend))
    with _decoding('identifier'):
        util.validate_identifier(identifier, backend.order)
    return identifier, offset


def _encode_points(points, backend: Backend) -> bytes:
    points = list(points)
    return util.uint_to_varint(len(points)) + b''.join(backend.point_to_bytes(pt) for pt in points)


def _decode_points(bts: bytes, offset: int, backend: Backend, allow_empty: bool = False) -> (list, int):
    count, offset = util.varint_to_uint(bts, offset, _max_varint_bytes(backend))
    if count == 0 and not allow_empty:
        raise DeserializationError('commitment vector must not be empty')

    if count * backend.point_size > len(bts) - offset:
        raise DeserializationError('{} points do not fit in {} remaining bytes'.format(count, len(bts) - offset))

    points = []
    for _ in range(count):
        chunk, offset = _take(bts, offset, backend.point_size)
        with _decoding('point'):
            points.append(backend.bytes_to_point(chunk))
    return points, offset


def _decode_point(bts: bytes, offset: int, backend: Backend):
    chunk, offset = _take(bts, offset, backend.point_size)
    with _decoding('point'):
        return backend.bytes_to_point(chunk), offset


def _decode_generator(bts: bytes, offset: int, backend: Backend):
    generator, offset = _decode_point(bts, offset, backend)
    if backend.is_identity(generator):
        raise DeserializationError('the identity cannot serve as a generator')
    return generator, offset


def encode_share(share: Share, backend: Backend = None) -> bytes:
    backend = backend or get_backend()
    with util.erasing(bytearray((FORMAT_VERSION,))) as buf:
        buf += encode_identifier(share.identifier, backend)
        buf += backend.scalar_to_bytes(share.value)
        return bytes(buf)


def decode_share(bts: bytes, backend: Backend = None) -> Share:
    backend = backend or get_backend()
    offset = _check_version(bts)
    identifier, offset = decode_identifier(bts, offset, backend)
    chunk, offset = _take(bts, offset, backend.scalar_size)
    _check_consumed(bts, offset)
    return Share(identifier, backend.bytes_to_scalar(chunk))


def encode_group_share(share: Share, backend: Backend = None) -> bytes:
    backend = backend or get_backend()
    return (
        bytes((FORMAT_VERSION,)) +
        encode_identifier(share.identifier, backend) +
        backend.point_to_bytes(share.value)
    )


def decode_group_share(bts: bytes, backend: Backend = None) -> Share:
    backend = backend or get_backend()
    offset = _check_version(bts)
    identifier, offset = decode_identifier(bts, offset, backend)
    point, offset = _decode_point(bts, offset, backend)
    _check_consumed(bts, offset)
    return Share(identifier, point)


def encode_commitments(commitments, backend: Backend = None) -> bytes:
    backend = backend or get_backend()
    commitments = list(commitments)
    if not commitments:
        raise InvalidThreshold('cannot encode an empty commitment vector')
    return bytes((FORMAT_VERSION,)) + _encode_points(commitments, backend)


def decode_commitments(bts: bytes, backend: Backend = None) -> list:
    backend = backend or get_backend()
    offset = _check_version(bts)
    commitments, offset = _decode_points(bts, offset, backend)
    _check_consumed(bts, offset)
    return commitments


def encode_feldman_verifier(verifier: FeldmanVerifier) -> bytes:
    backend = verifier.backend
    return (
        bytes((FORMAT_VERSION,)) +
        backend.point_to_bytes(verifier.generator) +
        _encode_points(verifier.commitments, backend)
    )


def decode_feldman_verifier(bts: bytes, backend: Backend = None) -> FeldmanVerifier:
    backend = backend or get_backend()
    offset = _check_version(bts)
    generator, offset = _decode_generator(bts, offset, backend)
    commitments, offset = _decode_points(bts, offset, backend)
    _check_consumed(bts, offset)
    with _decoding('Feldman generator'):
        return FeldmanVerifier(commitments, backend, generator)


def encode_pedersen_verifier(verifier: PedersenVerifier) -> bytes:
    backend = verifier.backend
    feldman_commitments = verifier.feldman_verifier.commitments if verifier.feldman_verifier else ()
    return (
        bytes((FORMAT_VERSION,)) +
        backend.point_to_bytes(verifier.generator) +
        backend.point_to_bytes(verifier.blind_generator) +
        _encode_points(verifier.commitments, backend) +
        _encode_points(feldman_commitments, backend)
    )


def decode_pedersen_verifier(bts: bytes, backend: Backend = None) -> PedersenVerifier:
    backend = backend or get_backend()
    offset = _check_version(bts)
    generator, offset = _decode_generator(bts, offset, backend)
    blind_generator, offset = _decode_generator(bts, offset, backend)
    commitments, offset = _decode_points(bts, offset, backend)
    feldman_commitments, offset = _decode_points(bts, offset, backend, allow_empty=True)
    _check_consumed(bts, offset)

    if feldman_commitments and len(feldman_commitments) != len(commitments):
        raise DeserializationError('Feldman and Pedersen commitment counts differ ({} != {})'.format(
            len(feldman_commitments), len(commitments)))

    # the Feldman verifier always shares G with its Pedersen counterpart
    with _decoding('Pedersen generators'):
        feldman_verifier = None
        if feldman_commitments:
            feldman_verifier = FeldmanVerifier(feldman_commitments, backend, generator)
        return PedersenVerifier(commitments, feldman_verifier, backend, generator, blind_generator)


def to_hex(bts: bytes) -> str:
    return bts.hex()


def from_hex(text: str) -> bytes:
    match = HEX_RE.fullmatch(text.strip())
    if not match:
        raise DeserializationError('invalid hex string {!r}'.format(text))
    return bytes.fromhex(match.group('value'))

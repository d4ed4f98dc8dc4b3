import contextlib

from secrets import SystemRandom

from Crypto.Hash import keccak

from .errors import (
    DeserializationError,
    DuplicateIdentifier,
    InvalidIdentifier,
    InvalidThreshold,
    ZeroIdentifier,
)

random = SystemRandom()


########################
# Validation utilities #
########################


def validate_threshold(threshold: int, num_shares: int = None):
    if not isinstance(threshold, int) or threshold < 1:
        raise InvalidThreshold('threshold must be a positive integer but got {}'.format(threshold))

    if num_shares is not None and threshold > num_shares:
        raise InvalidThreshold('threshold {} exceeds number of shares {}'.format(threshold, num_shares))


def validate_identifier(identifier: int, order: int):
    if not isinstance(identifier, int):
        raise InvalidIdentifier('identifier must be an integer but got {!r}'.format(identifier))

    if identifier == 0:
        raise ZeroIdentifier('identifier 0 would reveal the secret')

    if identifier < 0 or identifier >= order:
        raise InvalidIdentifier('identifier {:x} is not a nonzero field element'.format(identifier))


def validate_identifiers(identifiers, order: int):
    seen = set()
    for identifier in identifiers:
        validate_identifier(identifier, order)
        if identifier in seen:
            raise DuplicateIdentifier('identifier {:x} appears more than once'.format(identifier))
        seen.add(identifier)


########################
# Conversion utilities #
########################


def uint_to_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError('varint value must be non-negative but got {}'.format(value))

    out = bytearray()
    while True:
        byte = value & 0x7f
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def varint_to_uint(bts: bytes, offset: int = 0, max_bytes: int = None) -> (int, int):
    value = 0
    shift = 0
    start = offset
    while True:
        if offset >= len(bts):
            raise DeserializationError('truncated varint at offset {}'.format(start))

        if max_bytes is not None and offset - start >= max_bytes:
            raise DeserializationError('varint at offset {} longer than {} bytes'.format(start, max_bytes))

        byte = bts[offset]
        offset += 1
        value |= (byte & 0x7f) << shift
        shift += 7

        if not byte & 0x80:
            # a trailing zero group means the encoding is not the shortest one
            if byte == 0 and offset - start > 1:
                raise DeserializationError('non-canonical varint at offset {}'.format(start))
            return value, offset


def keccak_256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


#####################
# Erasure utilities #
#####################


def erase_buffer(buf: bytearray):
    for i in range(len(buf)):
        buf[i] = 0


def erase(obj):
    if isinstance(obj, bytearray):
        erase_buffer(obj)
    elif isinstance(obj, list):
        for i in range(len(obj)):
            obj[i] = 0
        obj.clear()
    elif obj is not None:
        obj.erase()


@contextlib.contextmanager
def erasing(*objs):
    try:
        yield objs[0] if len(objs) == 1 else objs
    finally:
        for obj in objs:
            erase(obj)

import pytest

from pyvss import backends
from pyvss.errors import BackendArithmeticError, DeserializationError


def test_get_backend_rejects_unknown_names():
    with pytest.raises(ValueError):
        backends.get_backend('curve448')


def test_default_backend_is_secp256k1():
    assert isinstance(backends.get_backend(), backends.Secp256k1Backend)


def test_generator_and_identity_are_valid_points(backend):
    backend.validate_point(backend.generator)
    backend.validate_point(backend.identity)
    assert backend.is_identity(backend.identity)
    assert not backend.is_identity(backend.generator)


def test_group_law(backend):
    g = backend.generator
    assert backend.point_eq(backend.point_add(g, backend.identity), g)
    assert backend.point_eq(backend.point_add(g, g), backend.point_mul(g, 2))
    assert backend.is_identity(backend.point_add(g, backend.point_neg(g)))
    assert backend.is_identity(backend.point_mul(g, 0))
    assert backend.is_identity(backend.point_mul(g, backend.order))
    assert backend.point_eq(backend.point_mul(g, -1), backend.point_neg(g))
    assert backend.point_eq(
        backend.sum_points([g, g, g]),
        backend.base_mul(3))


def test_scalar_field(backend, rng):
    a = backend.random_scalar(rng)
    b = backend.random_scalar(rng)
    assert backend.scalar_add(a, backend.scalar_neg(a)) == 0
    assert backend.scalar_sub(backend.scalar_add(a, b), b) == a
    assert backend.scalar_mul(a, backend.scalar_inv(a)) == 1
    assert backend.scalar_eq(a, a + backend.order)
    assert not backend.scalar_eq(a, backend.scalar_add(a, 1))


def test_zero_has_no_inverse(backend):
    with pytest.raises(BackendArithmeticError):
        backend.scalar_inv(0)


@pytest.mark.parametrize('value', [-1, 'x', 1.5, True])
def test_validate_scalar_rejects_non_field_elements(secp256k1, value):
    with pytest.raises(BackendArithmeticError):
        secp256k1.validate_scalar(value)


def test_validate_scalar_rejects_order(backend):
    with pytest.raises(BackendArithmeticError):
        backend.validate_scalar(backend.order)


def test_scalar_bytes(backend):
    value = backend.order - 1
    bts = backend.scalar_to_bytes(value)
    assert len(bts) == backend.scalar_size
    assert backend.bytes_to_scalar(bts) == value

    with pytest.raises(DeserializationError):
        backend.bytes_to_scalar(backend.order.to_bytes(backend.scalar_size, 'big'))

    with pytest.raises(DeserializationError):
        backend.bytes_to_scalar(bts[1:])


def test_point_bytes(backend):
    point = backend.base_mul(12345)
    bts = backend.point_to_bytes(point)
    assert len(bts) == backend.point_size
    assert backend.point_eq(backend.bytes_to_point(bts), point)

    identity_bytes = backend.point_to_bytes(backend.identity)
    assert backend.is_identity(backend.bytes_to_point(identity_bytes))

    with pytest.raises(DeserializationError):
        backend.bytes_to_point(bts + b'\0')


def test_off_curve_points_are_rejected(backend):
    bts = bytearray(backend.point_to_bytes(backend.generator))
    bts[-1] ^= 1
    with pytest.raises(BackendArithmeticError):
        backend.bytes_to_point(bytes(bts))


def test_secp256k1_validate_point_rejects_garbage(secp256k1):
    for point in ((1, 2), (secp256k1.field_modulus, 0), 'G', (1, 2, 3)):
        with pytest.raises(BackendArithmeticError):
            secp256k1.validate_point(point)


def test_hash_to_point_is_deterministic_and_on_curve(backend):
    a = backend.hash_to_point(b'some tag')
    backend.validate_point(a)
    assert backend.point_eq(a, backend.hash_to_point(b'some tag'))
    assert not backend.point_eq(a, backend.hash_to_point(b'other tag'))


def test_blinding_generator_differs_from_generator(backend):
    h = backend.blinding_generator
    backend.validate_point(h)
    assert not backend.point_eq(h, backend.generator)
    assert not backend.is_identity(h)
    assert backend.blinding_generator is h


def test_lift_x_returns_even_ordinate(secp256k1):
    x, y = secp256k1.generator
    lifted = secp256k1.lift_x(x)
    assert lifted[0] == x
    assert lifted[1] % 2 == 0
    assert lifted[1] in (y, secp256k1.field_modulus - y)

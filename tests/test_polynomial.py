import pytest

from pyvss.errors import BackendArithmeticError, InvalidThreshold
from pyvss.polynomial import Polynomial, evaluate_in_group


def naive_eval(coefficients, x, order):
    return sum(c * pow(x, k, order) for k, c in enumerate(coefficients)) % order


def test_random_polynomial_embeds_secret(secp256k1, rng, threshold):
    poly = Polynomial.random(42, threshold, secp256k1, rng)
    assert len(poly) == threshold
    assert poly.degree == threshold - 1
    assert poly.constant == 42
    assert all(0 <= c < secp256k1.order for c in poly.coefficients)


def test_threshold_one_is_constant(secp256k1, rng):
    poly = Polynomial.random(7, 1, secp256k1, rng)
    assert poly.coefficients == [7]
    assert poly.evaluate(12345) == 7


@pytest.mark.parametrize('threshold', [0, -1])
def test_invalid_threshold(secp256k1, rng, threshold):
    with pytest.raises(InvalidThreshold):
        Polynomial.random(42, threshold, secp256k1, rng)


def test_secret_must_be_a_field_element(secp256k1, rng):
    with pytest.raises(BackendArithmeticError):
        Polynomial.random(secp256k1.order, 2, secp256k1, rng)


def test_horner_matches_naive_evaluation(backend, rng):
    poly = Polynomial.random(backend.random_scalar(rng), 6, backend, rng)
    for x in (1, 2, 3, 255, 2**64 + 13, backend.order - 1):
        assert poly.evaluate(x) == naive_eval(poly.coefficients, x, backend.order)


def test_evaluate_in_group_matches_commitments(secp256k1, rng):
    poly = Polynomial.random(99, 4, secp256k1, rng)
    commitments = [secp256k1.base_mul(c) for c in poly.coefficients]
    for x in (1, 5, 1000):
        assert secp256k1.point_eq(
            evaluate_in_group(commitments, x, secp256k1),
            secp256k1.base_mul(poly.evaluate(x)))


def test_erase(secp256k1, rng):
    poly = Polynomial.random(42, 3, secp256k1, rng)
    coefficients = poly.coefficients
    poly.erase()
    assert coefficients == []
    assert len(poly) == 0


def test_context_manager_erases_on_error(secp256k1, rng):
    poly = Polynomial.random(42, 3, secp256k1, rng)
    with pytest.raises(RuntimeError):
        with poly:
            assert len(poly) == 3
            raise RuntimeError('boom')
    assert poly.coefficients == []


def test_repr_hides_coefficients(secp256k1):
    poly = Polynomial([123456789, 987654321], secp256k1)
    assert '123456789' not in repr(poly)
    assert 'degree=1' in repr(poly)


def test_erasing_clears_everything_on_error(secp256k1, rng):
    from pyvss import util
    from pyvss.shamir import Share

    poly = Polynomial.random(42, 2, secp256k1, rng)
    share = Share(1, poly.evaluate(1))
    buf = bytearray(b'secret')
    with pytest.raises(RuntimeError):
        with util.erasing(poly, share, buf) as (p, s, b):
            assert p is poly and s is share and b is buf
            raise RuntimeError('boom')
    assert poly.coefficients == []
    assert share.value == 0
    assert buf == bytearray(6)

from . import util
from .backends import Backend


class Polynomial(object):
    """
    Secret-embedding polynomial a_0 + a_1 x + ... + a_{t-1} x^{t-1} over the
    scalar field of ``backend``.

    Coefficients live in a mutable list so that :meth:`erase` can overwrite
    them. Use the polynomial as a context manager to guarantee erasure on every
    exit path.
    """
    __slots__ = ('coefficients', 'backend')

    def __init__(self, coefficients: list, backend: Backend):
        self.coefficients = list(coefficients)
        self.backend = backend

    @classmethod
    def random(cls, secret: int, threshold: int, backend: Backend, rng=None) -> 'Polynomial':
        util.validate_threshold(threshold)
        backend.validate_scalar(secret)
        coefficients = [secret]
        coefficients.extend(backend.random_scalar(rng) for _ in range(threshold - 1))
        return cls(coefficients, backend)

    def __len__(self):
        return len(self.coefficients)

    def __repr__(self):
        return '<{}.{} degree={}>'.format(__name__, self.__class__.__name__, self.degree)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.erase()

    def __del__(self):
        if hasattr(self, 'coefficients'):
            self.erase()

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    @property
    def constant(self) -> int:
        return self.coefficients[0]

    def evaluate(self, x: int) -> int:
        backend = self.backend
        result = 0
        for coeff in reversed(self.coefficients):
            result = backend.scalar_add(backend.scalar_mul(result, x), coeff)
        return result

    def erase(self):
        util.erase(self.coefficients)


def evaluate_in_group(commitments, x: int, backend: Backend):
    # Horner in the exponent: (((C_{t-1} x) + C_{t-2}) x + ...) + C_0
    result = backend.identity
    for commitment in reversed(commitments):
        result = backend.point_add(backend.point_mul(result, x), commitment)
    return result

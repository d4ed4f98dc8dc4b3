import abc
import functools
import hmac

from py_ecc import bn128
from py_ecc.secp256k1 import secp256k1

from . import util
from .errors import BackendArithmeticError, DeserializationError

BLINDING_GENERATOR_TAG = b'pyvss/pedersen/blinding-generator/'
MAX_HASH_TO_POINT_ATTEMPTS = 1000


def sqrt_mod_3mod4(value: int, modulus: int) -> int:
    root = pow(value, (modulus + 1) // 4, modulus)
    if root * root % modulus != value % modulus:
        return None
    return root


class Backend(abc.ABC):
    """
    Field and group operations the sharing schemes are written against.

    Scalars are plain ints in [0, order). Points use whatever representation the
    concrete backend prefers; the schemes only ever touch them through the
    methods below.
    """
    name = None
    order = None
    field_modulus = None
    scalar_size = 32
    point_size = 64

    def __init__(self):
        self._blinding_generator = None

    def __repr__(self):
        return '<{}.{} {}>'.format(__name__, self.__class__.__name__, self.name)

    #################
    # Scalar field  #
    #################

    def validate_scalar(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value >= self.order:
            raise BackendArithmeticError('value is not an element of the {} scalar field'.format(self.name))

    def scalar_add(self, a: int, b: int) -> int:
        return (a + b) % self.order

    def scalar_sub(self, a: int, b: int) -> int:
        return (a - b) % self.order

    def scalar_mul(self, a: int, b: int) -> int:
        return a * b % self.order

    def scalar_neg(self, a: int) -> int:
        return -a % self.order

    def scalar_inv(self, a: int) -> int:
        if a % self.order == 0:
            raise BackendArithmeticError('zero has no multiplicative inverse')
        return pow(a, self.order - 2, self.order)

    def random_scalar(self, rng=None) -> int:
        return (rng or util.random).randrange(self.order)

    def scalar_eq(self, a: int, b: int) -> bool:
        return hmac.compare_digest(
            (a % self.order).to_bytes(self.scalar_size, byteorder='big'),
            (b % self.order).to_bytes(self.scalar_size, byteorder='big'))

    def scalar_to_bytes(self, value: int) -> bytes:
        self.validate_scalar(value)
        return value.to_bytes(self.scalar_size, byteorder='big')

    def bytes_to_scalar(self, bts: bytes) -> int:
        if len(bts) != self.scalar_size:
            raise DeserializationError('unexpected scalar length {} bytes'.format(len(bts)))
        value = int.from_bytes(bts, byteorder='big')
        if value >= self.order:
            raise DeserializationError('encoded scalar exceeds {} group order'.format(self.name))
        return value

    #########
    # Group #
    #########

    @property
    @abc.abstractmethod
    def generator(self):
        pass

    @property
    @abc.abstractmethod
    def identity(self):
        pass

    @abc.abstractmethod
    def validate_point(self, point):
        pass

    @abc.abstractmethod
    def point_add(self, a, b):
        pass

    @abc.abstractmethod
    def point_neg(self, point):
        pass

    @abc.abstractmethod
    def point_mul(self, point, scalar: int):
        pass

    @abc.abstractmethod
    def point_to_bytes(self, point) -> bytes:
        pass

    @abc.abstractmethod
    def bytes_to_point(self, bts: bytes):
        pass

    @abc.abstractmethod
    def lift_x(self, x: int):
        """Return the curve point with abscissa ``x`` and even ordinate, or None."""

    def is_identity(self, point) -> bool:
        return self.point_eq(point, self.identity)

    def point_eq(self, a, b) -> bool:
        return hmac.compare_digest(self.point_to_bytes(a), self.point_to_bytes(b))

    def base_mul(self, scalar: int):
        return self.point_mul(self.generator, scalar)

    def sum_points(self, points):
        return functools.reduce(self.point_add, points, self.identity)

    def hash_to_point(self, tag: bytes):
        # try-and-increment; nobody learns the discrete log of the result
        for counter in range(MAX_HASH_TO_POINT_ATTEMPTS):
            digest = util.keccak_256(tag + counter.to_bytes(4, byteorder='big'))
            point = self.lift_x(int.from_bytes(digest, byteorder='big') % self.field_modulus)
            if point is not None:
                return point

        raise BackendArithmeticError('could not hash {!r} onto {}'.format(tag, self.name))

    @property
    def blinding_generator(self):
        if self._blinding_generator is None:
            self._blinding_generator = self.hash_to_point(BLINDING_GENERATOR_TAG + self.name.encode())
        return self._blinding_generator


class Secp256k1Backend(Backend):
    name = 'secp256k1'
    order = secp256k1.N
    field_modulus = secp256k1.P

    @property
    def generator(self):
        return secp256k1.G

    @property
    def identity(self):
        # (0, 0) is used to represent group identity element
        return (0, 0)

    def validate_point(self, point):
        if (
            not isinstance(point, tuple) or len(point) != 2 or
            not all(isinstance(coord, int) for coord in point)
        ):
            raise BackendArithmeticError('invalid EC point {!r}'.format(point))

        if (
            any(coord < 0 or coord >= self.field_modulus for coord in point) or
            pow(point[1], 2, self.field_modulus) != (pow(point[0], 3, self.field_modulus) + 7) % self.field_modulus
        ) and point != self.identity:
            raise BackendArithmeticError('invalid EC point {}'.format(point))

    def point_add(self, a, b):
        return secp256k1.add(a, b)

    def point_neg(self, point):
        if point == self.identity:
            return point
        return (point[0], -point[1] % self.field_modulus)

    def point_mul(self, point, scalar: int):
        return secp256k1.multiply(point, scalar % self.order)

    def point_to_bytes(self, point) -> bytes:
        self.validate_point(point)
        return b''.join(coord.to_bytes(32, byteorder='big') for coord in point)

    def bytes_to_point(self, bts: bytes):
        if len(bts) != self.point_size:
            raise DeserializationError('unexpected length {} bytes'.format(len(bts)))
        point = tuple(int.from_bytes(bts[i:i+32], byteorder='big') for i in (0, 32))
        self.validate_point(point)
        return point

    def lift_x(self, x: int):
        y = sqrt_mod_3mod4((pow(x, 3, self.field_modulus) + 7) % self.field_modulus, self.field_modulus)
        if y is None:
            return None
        if y % 2:
            y = self.field_modulus - y
        return (x, y)


class BN128Backend(Backend):
    name = 'bn128'
    order = bn128.curve_order
    field_modulus = bn128.field_modulus

    @property
    def generator(self):
        return bn128.G1

    @property
    def identity(self):
        return None

    def validate_point(self, point):
        if point is None:
            return

        if (
            not isinstance(point, tuple) or len(point) != 2 or
            not all(isinstance(coord, bn128.FQ) for coord in point)
        ):
            raise BackendArithmeticError('invalid bn128 G1 point {!r}'.format(point))

        if not bn128.is_on_curve(point, bn128.b):
            raise BackendArithmeticError('bn128 point {} is not on the curve'.format(point))

    def point_add(self, a, b):
        return bn128.add(a, b)

    def point_neg(self, point):
        if point is None:
            return None
        return bn128.neg(point)

    def point_mul(self, point, scalar: int):
        scalar %= self.order
        if point is None or scalar == 0:
            return None
        return bn128.multiply(point, scalar)

    def point_to_bytes(self, point) -> bytes:
        self.validate_point(point)
        if point is None:
            return bytes(self.point_size)
        return b''.join(coord.n.to_bytes(32, byteorder='big') for coord in point)

    def bytes_to_point(self, bts: bytes):
        if len(bts) != self.point_size:
            raise DeserializationError('unexpected length {} bytes'.format(len(bts)))

        if not any(bts):
            return None

        coords = tuple(int.from_bytes(bts[i:i+32], byteorder='big') for i in (0, 32))
        if any(coord >= self.field_modulus for coord in coords):
            raise BackendArithmeticError('bn128 coordinate exceeds field modulus')

        point = tuple(bn128.FQ(coord) for coord in coords)
        self.validate_point(point)
        return point

    def lift_x(self, x: int):
        y = sqrt_mod_3mod4((pow(x, 3, self.field_modulus) + 3) % self.field_modulus, self.field_modulus)
        if y is None:
            return None
        if y % 2:
            y = self.field_modulus - y
        return (bn128.FQ(x), bn128.FQ(y))


BACKENDS = {
    Secp256k1Backend.name: Secp256k1Backend,
    BN128Backend.name: BN128Backend,
}
DEFAULT_BACKEND = Secp256k1Backend.name


def get_backend(name: str = DEFAULT_BACKEND) -> Backend:
    try:
        return BACKENDS[name]()
    except KeyError:
        raise ValueError('unknown backend {!r}; choose one of {}'.format(name, ', '.join(sorted(BACKENDS))))

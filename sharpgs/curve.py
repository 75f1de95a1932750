"""The G1 group of the BN254 pairing curve and its scalar field.

Scalars (elements of Fr) are plain ints reduced modulo ``GROUP_ORDER``.
"""

from __future__ import annotations

import hashlib
import operator
import secrets
from dataclasses import dataclass
from itertools import count

FIELD_MODULUS = 21888242871839275222246405745257275088696311157297823662689037894645226208583
GROUP_ORDER = 21888242871839275222246405745257275088548364400416034343698204186575808495617
CURVE_B = 3

_P = FIELD_MODULUS
_JacobianPoint = tuple[int, int, int]
_JACOBIAN_INFINITY: _JacobianPoint = (1, 1, 0)


def _jacobian_double(point: _JacobianPoint) -> _JacobianPoint:
    x, y, z = point
    if z == 0 or y == 0:
        return _JACOBIAN_INFINITY
    a = x * x % _P
    b = y * y % _P
    c = b * b % _P
    d = 2 * ((x + b) * (x + b) - a - c) % _P
    e = 3 * a % _P
    f = e * e % _P
    x3 = (f - 2 * d) % _P
    y3 = (e * (d - x3) - 8 * c) % _P
    z3 = 2 * y * z % _P
    return x3, y3, z3


def _jacobian_add(first: _JacobianPoint, second: _JacobianPoint) -> _JacobianPoint:
    x1, y1, z1 = first
    x2, y2, z2 = second
    if z1 == 0:
        return second
    if z2 == 0:
        return first
    z1z1 = z1 * z1 % _P
    z2z2 = z2 * z2 % _P
    u1 = x1 * z2z2 % _P
    u2 = x2 * z1z1 % _P
    s1 = y1 * z2 * z2z2 % _P
    s2 = y2 * z1 * z1z1 % _P
    if u1 == u2:
        if s1 != s2:
            return _JACOBIAN_INFINITY
        return _jacobian_double(first)
    h = (u2 - u1) % _P
    r = (s2 - s1) % _P
    h2 = h * h % _P
    h3 = h * h2 % _P
    u1h2 = u1 * h2 % _P
    x3 = (r * r - h3 - 2 * u1h2) % _P
    y3 = (r * (u1h2 - x3) - s1 * h3) % _P
    z3 = h * z1 * z2 % _P
    return x3, y3, z3


@dataclass(frozen=True)
class G1Point:
    """A point of G1 in affine coordinates; ``x is None`` marks the identity."""

    x: int | None = None
    y: int | None = None

    @classmethod
    def identity(cls) -> G1Point:
        return cls()

    def is_zero(self) -> bool:
        return self.x is None

    def is_valid(self) -> bool:
        """Whether the point lies on the curve (G1 has cofactor one)."""
        if self.is_zero():
            return True
        if self.y is None:
            return False
        x, y = self.x, self.y
        if not (0 <= x < _P and 0 <= y < _P):
            return False
        return (y * y - x * x * x - CURVE_B) % _P == 0

    def _to_jacobian(self) -> _JacobianPoint:
        if self.is_zero():
            return _JACOBIAN_INFINITY
        return self.x % _P, self.y % _P, 1

    @classmethod
    def _from_jacobian(cls, point: _JacobianPoint) -> G1Point:
        x, y, z = point
        if z == 0:
            return cls()
        z_inv = pow(z, -1, _P)
        z_inv2 = z_inv * z_inv % _P
        return cls(x * z_inv2 % _P, y * z_inv2 * z_inv % _P)

    def __add__(self, other: object) -> G1Point:
        if not isinstance(other, G1Point):
            return NotImplemented
        return G1Point._from_jacobian(_jacobian_add(self._to_jacobian(), other._to_jacobian()))

    def __neg__(self) -> G1Point:
        if self.is_zero():
            return self
        return G1Point(self.x, (-self.y) % _P)

    def __sub__(self, other: object) -> G1Point:
        if not isinstance(other, G1Point):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: object) -> G1Point:
        if not isinstance(scalar, int) or isinstance(scalar, bool):
            return NotImplemented
        k = scalar % GROUP_ORDER
        result = _JACOBIAN_INFINITY
        addend = self._to_jacobian()
        while k:
            if k & 1:
                result = _jacobian_add(result, addend)
            addend = _jacobian_double(addend)
            k >>= 1
        return G1Point._from_jacobian(result)

    __rmul__ = __mul__

    def serialize(self) -> bytes:
        """Compressed 32-byte form: big-endian x, top bit set when y is odd.

        The identity serializes to 32 zero bytes.
        """
        if self.is_zero():
            return bytes(32)
        encoded = bytearray((self.x % _P).to_bytes(32, "big"))
        if self.y % _P & 1:
            encoded[0] |= 0x80
        return bytes(encoded)


GENERATOR = G1Point(1, 2)


def hash_to_g1(message: bytes | str) -> G1Point:
    """Deterministically map a message to a non-identity point of G1."""
    data = message.encode() if isinstance(message, str) else bytes(message)
    for counter in count():
        digest = hashlib.sha512(data + counter.to_bytes(4, "big")).digest()
        x = int.from_bytes(digest, "big") % _P
        rhs = (x * x * x + CURVE_B) % _P
        y = pow(rhs, (_P + 1) // 4, _P)
        if y * y % _P != rhs:
            continue
        if (y & 1) != (digest[0] & 1):
            y = (_P - y) % _P
        return G1Point(x, y)
    raise AssertionError("unreachable")


def fr(value: int) -> int:
    """Reduce an integer into the scalar field."""
    return operator.index(value) % GROUP_ORDER


def random_scalar() -> int:
    """A uniformly random scalar drawn from a cryptographic source."""
    return secrets.randbelow(GROUP_ORDER)
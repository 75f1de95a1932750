"""Sums of three squares over the scalar field, as used for range proofs."""

from __future__ import annotations

from dataclasses import dataclass
from math import isqrt

from sharpgs.curve import GROUP_ORDER, fr

_LONG_MAX = 2**63 - 1
_MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)
_TRIAL_LIMIT = 2000


def _primes_below(limit: int) -> tuple[int, ...]:
    sieve = bytearray([1]) * limit
    sieve[0:2] = b"\x00\x00"
    for p in range(2, isqrt(limit - 1) + 1):
        if sieve[p]:
            sieve[p * p :: p] = bytearray(len(sieve[p * p :: p]))
    return tuple(i for i, flag in enumerate(sieve) if flag)


_SMALL_PRIMES = _primes_below(_TRIAL_LIMIT)


@dataclass(frozen=True)
class Decomposition:
    x: int
    y: int
    z: int
    valid: bool = True


def _is_probable_prime(n: int) -> bool:
    if n < 2:
        return False
    for p in _MILLER_RABIN_BASES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _MILLER_RABIN_BASES:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def _factor(m: int) -> dict[int, int] | None:
    """Factor ``m`` by trial division plus at most one large prime, else None."""
    factors: dict[int, int] = {}
    for p in _SMALL_PRIMES:
        if p * p > m:
            break
        while m % p == 0:
            factors[p] = factors.get(p, 0) + 1
            m //= p
    if m == 1:
        return factors
    if _is_probable_prime(m):
        factors[m] = factors.get(m, 0) + 1
        return factors
    return None


def _prime_as_two_squares(p: int) -> tuple[int, int]:
    if p == 2:
        return 1, 1
    c = 2
    while pow(c, (p - 1) // 2, p) != p - 1:
        c += 1
    a, b = p, pow(c, (p - 1) // 4, p)
    while b * b > p:
        a, b = b, a % b
    return b, isqrt(p - b * b)


def _gauss_mul(u: tuple[int, int], v: tuple[int, int]) -> tuple[int, int]:
    return u[0] * v[0] - u[1] * v[1], u[0] * v[1] + u[1] * v[0]


def _two_squares(m: int) -> tuple[int, int] | None:
    factors = _factor(m)
    if factors is None:
        return None
    result = (1, 0)
    for p, exponent in factors.items():
        if p % 4 == 3:
            if exponent % 2:
                return None
            scale = p ** (exponent // 2)
            result = (result[0] * scale, result[1] * scale)
            continue
        base = _prime_as_two_squares(p)
        for _ in range(exponent):
            result = _gauss_mul(result, base)
    return abs(result[0]), abs(result[1])


def _three_squares(n: int) -> tuple[int, int, int] | None:
    if n == 0:
        return 0, 0, 0
    if n < 0:
        return None
    core = n
    while core % 4 == 0:
        core //= 4
    if core % 8 == 7:
        return None
    for z in range(isqrt(n) + 1):
        m = n - z * z
        if m == 0:
            return 0, 0, z
        pair = _two_squares(m)
        if pair is not None:
            return pair[0], pair[1], z
    return None


def decompose(n: int) -> Decomposition | None:
    """Write ``n`` as x² + y² + z², or return None when that is impossible."""
    value = fr(n)
    triple = _three_squares(value)
    if triple is None:
        return None
    decomposition = Decomposition(*(fr(c) for c in triple))
    return decomposition if verify(decomposition, value) else None


def verify(decomposition: Decomposition, n: int) -> bool:
    if not decomposition.valid:
        return False
    total = decomposition.x**2 + decomposition.y**2 + decomposition.z**2
    return total % GROUP_ORDER == fr(n)


def compute_range_value(x: int, b: int) -> int:
    """Compute 4x(B - x) + 1 in the scalar field."""
    return fr(4 * x * (b - x) + 1)


def string_to_fr(text: str) -> int:
    """Parse a decimal (or 0x/0b prefixed) integer into the scalar field."""
    body = text.strip()
    negative = body.startswith("-")
    if negative:
        body = body[1:]
    lowered = body.lower()
    try:
        if lowered.startswith("0x"):
            magnitude = int(body[2:], 16)
        elif lowered.startswith("0b"):
            magnitude = int(body[2:], 2)
        else:
            magnitude = int(body, 10)
    except ValueError as exc:
        raise ValueError(f"Invalid field element: {text!r}") from exc
    if magnitude >= GROUP_ORDER:
        raise ValueError(f"Field element out of range: {text!r}")
    return fr(-magnitude if negative else magnitude)


def fr_to_string(value: int) -> str:
    return str(fr(value))


def long_to_fr(value: int) -> int:
    """Convert a non-negative integer, narrowed to a 32-bit signed int."""
    if value < 0:
        raise ValueError("Cannot convert negative value to Fr")
    narrowed = value & 0xFFFFFFFF
    if narrowed >= 2**31:
        narrowed -= 2**32
    return fr(narrowed)


def fr_to_long(value: int) -> int:
    """Convert a field element to an int that fits a signed 64-bit long."""
    result = fr(value)
    if result > _LONG_MAX:
        raise OverflowError(f"Fr value too large to convert to long: {result}")
    return result
"""Pedersen multi-commitments over G1."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sharpgs.curve import G1Point, fr, hash_to_g1, random_scalar


@dataclass(frozen=True)
class CommitmentKey:
    """Generators G0 (for randomness) followed by the value generators."""

    generators: tuple[G1Point, ...]
    max_values: int


@dataclass(frozen=True)
class Commitment:
    value: G1Point
    randomness: int


def _generator(seed: str, error: str) -> G1Point:
    point = hash_to_g1(seed)
    if point.is_zero() or not point.is_valid():
        raise RuntimeError(error)
    return point


def setup(n: int) -> CommitmentKey:
    """Commitment key for ``n`` values."""
    generators = tuple(
        _generator(f"SharpGS_generator_{i}", f"Failed to generate valid generator {i}")
        for i in range(n + 1)
    )
    return CommitmentKey(generators, n)


def setup_combined(n: int) -> CommitmentKey:
    """Key G0, G1..Gn, then G(i,j) for i in 1..n and j in 1..3."""
    g0 = hash_to_g1("SharpGS_combined_G0")
    value_generators = [hash_to_g1(f"SharpGS_combined_G{i}") for i in range(1, n + 1)]
    square_generators = [
        _generator(
            f"SharpGS_combined_G{i}_{j}",
            f"Failed to generate valid Gi,j generator {i},{j}",
        )
        for i in range(1, n + 1)
        for j in range(1, 4)
    ]
    if g0.is_zero() or not g0.is_valid():
        raise RuntimeError("Failed to generate valid G0 generator")
    return CommitmentKey((g0, *value_generators, *square_generators), n + 3 * n)


def setup_independent(n: int, seed_prefix: str = "Independent") -> CommitmentKey:
    """Commitment key whose generators derive from ``seed_prefix``."""
    generators = tuple(
        _generator(f"{seed_prefix}_H{i}", f"Failed to generate valid H{i} generator")
        for i in range(n + 1)
    )
    return CommitmentKey(generators, n)


def _combine(
    ck: CommitmentKey, values: Sequence[int], randomness: int, offset: int
) -> Commitment:
    value = ck.generators[0] * randomness
    for generator, v in zip(ck.generators[offset + 1 :], values):
        value = value + generator * v
    return Commitment(value, randomness)


def commit(
    ck: CommitmentKey, values: Iterable[int], randomness: int | None = None
) -> Commitment:
    """Commit to ``values``; fresh randomness is drawn when none is given."""
    values = list(values)
    if len(values) > ck.max_values:
        raise ValueError("Too many values for commitment key")
    r = random_scalar() if randomness is None else fr(randomness)
    return _combine(ck, values, r, 0)


def commit_with_offset(
    ck: CommitmentKey, values: Iterable[int], randomness: int, generator_offset: int
) -> Commitment:
    """Commit to ``values`` using the generators after ``generator_offset``."""
    values = list(values)
    if generator_offset + len(values) >= len(ck.generators):
        raise ValueError("Generator offset too large for commitment key")
    return _combine(ck, values, fr(randomness), generator_offset)


def verify(
    ck: CommitmentKey, commitment: Commitment, values: Iterable[int], randomness: int
) -> bool:
    """Whether ``commitment`` opens to ``values`` with ``randomness``."""
    return commit(ck, values, randomness).value == commitment.value


def add(c1: Commitment, c2: Commitment) -> Commitment:
    return Commitment(c1.value + c2.value, fr(c1.randomness + c2.randomness))


def multiply(c: Commitment, scalar: int) -> Commitment:
    return Commitment(c.value * fr(scalar), fr(c.randomness * scalar))
"""The SharpGS batched range proof: prove that committed values lie in [0, B]."""

from __future__ import annotations

import secrets
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from functools import reduce

from sharpgs import pedersen, three_squares
from sharpgs.curve import G1Point, fr, random_scalar
from sharpgs.pedersen import CommitmentKey

_CHALLENGE_BITS = 20
_MAX_MASK_BITS = 30


@dataclass
class PublicParameters:
    num_values: int
    b: int
    repetitions: int
    gamma_max: int
    security_bits: int
    ck_com: CommitmentKey
    ck_3sq: CommitmentKey


@dataclass
class Witness:
    values: list[int]
    randomness: int


@dataclass
class Statement:
    commitment: G1Point
    b: int


@dataclass
class FirstMessage:
    commitment_y: G1Point
    ry: int
    mask_commitments_x: list[G1Point] = field(default_factory=list)
    mask_commitments_y: list[G1Point] = field(default_factory=list)
    poly_commitments_star: list[G1Point] = field(default_factory=list)
    mask_poly_commitments: list[G1Point] = field(default_factory=list)
    re_k_x: list[int] = field(default_factory=list)
    re_k_y: list[int] = field(default_factory=list)
    re_star_k: list[int] = field(default_factory=list)
    x_tildes: list[list[int]] = field(default_factory=list)
    y_tildes: list[list[int]] = field(default_factory=list)
    r_star_values: list[int] = field(default_factory=list)


@dataclass
class Challenge:
    gammas: list[int]


@dataclass
class Response:
    z_values: list[list[int]] = field(default_factory=list)
    z_squares: list[list[list[int]]] = field(default_factory=list)
    t_x: list[int] = field(default_factory=list)
    t_y: list[int] = field(default_factory=list)
    t_star: list[int] = field(default_factory=list)


@dataclass
class Proof:
    first_msg: FirstMessage
    response: Response


def _triples(values: Sequence[int]) -> list[list[int]]:
    it = iter(values)
    return [list(t) for t in zip(it, it, it)]


def _linear_combination(generators: Iterable[G1Point], scalars: Iterable[int]) -> G1Point:
    return reduce(
        lambda acc, pair: acc + pair[0] * pair[1],
        zip(generators, scalars),
        G1Point.identity(),
    )


def setup(num_values: int, b: int, security_bits: int = 128) -> PublicParameters:
    """Public parameters for proving ``num_values`` values lie in [0, b]."""
    return PublicParameters(
        num_values=num_values,
        b=fr(b),
        repetitions=(security_bits + 19) // 20,
        gamma_max=(1 << _CHALLENGE_BITS) - 1,
        security_bits=security_bits,
        ck_com=pedersen.setup_combined(num_values),
        ck_3sq=pedersen.setup_independent(num_values, "SharpGS_H"),
    )


def prove_first(pp: PublicParameters, statement: Statement, witness: Witness) -> FirstMessage:
    """The prover's first flow: commitments to decompositions, masks and polynomials."""
    squares = compute_square_decomposition_values(witness.values, pp.b)
    ry = random_scalar()
    flat_y = [y for triple in squares for y in triple]
    commitment_y = pedersen.commit_with_offset(pp.ck_com, flat_y, ry, pp.num_values).value
    msg = FirstMessage(commitment_y=commitment_y, ry=ry)

    for _ in range(pp.repetitions):
        re_x = random_scalar()
        re_y = random_scalar()
        x_tildes = generate_mask_values(pp.num_values)
        y_tildes = generate_mask_values(pp.num_values * 3)

        mask_x = pedersen.commit_with_offset(pp.ck_com, x_tildes, re_x, 0).value
        mask_y = pedersen.commit_with_offset(pp.ck_com, y_tildes, re_y, pp.num_values).value

        r_star = random_scalar()
        re_star = random_scalar()

        per_value = list(zip(x_tildes, witness.values, squares, _triples(y_tildes)))
        alpha_1 = [
            compute_alpha_star_1(xt, x, pp.b, ys, yts) for xt, x, ys, yts in per_value
        ]
        alpha_0 = [compute_alpha_star_0(xt, yts) for xt, _, _, yts in per_value]

        msg.re_k_x.append(re_x)
        msg.re_k_y.append(re_y)
        msg.x_tildes.append(x_tildes)
        msg.y_tildes.append(y_tildes)
        msg.mask_commitments_x.append(mask_x)
        msg.mask_commitments_y.append(mask_y)
        msg.r_star_values.append(r_star)
        msg.re_star_k.append(re_star)
        msg.poly_commitments_star.append(pedersen.commit(pp.ck_3sq, alpha_1, r_star).value)
        msg.mask_poly_commitments.append(pedersen.commit(pp.ck_3sq, alpha_0, re_star).value)

    return msg


def generate_challenge(pp: PublicParameters) -> Challenge:
    """One uniformly random challenge in [0, gamma_max] per repetition."""
    return Challenge([secrets.randbelow(pp.gamma_max + 1) for _ in range(pp.repetitions)])


def prove_response(
    pp: PublicParameters,
    statement: Statement,
    witness: Witness,
    first_msg: FirstMessage,
    challenge: Challenge,
) -> Response:
    """The prover's response to ``challenge``."""
    squares = compute_square_decomposition_values(witness.values, pp.b)
    response = Response()
    rounds = zip(
        challenge.gammas[: pp.repetitions],
        first_msg.x_tildes,
        first_msg.y_tildes,
        first_msg.re_k_x,
        first_msg.re_k_y,
        first_msg.r_star_values,
        first_msg.re_star_k,
    )
    for gamma, x_tildes, y_tildes, re_x, re_y, r_star, re_star in rounds:
        response.z_values.append(
            [fr(gamma * x + xt) for x, xt in zip(witness.values[: pp.num_values], x_tildes)]
        )
        response.z_squares.append(
            [
                [fr(gamma * y + yt) for y, yt in zip(ys, yts)]
                for ys, yts in zip(squares[: pp.num_values], _triples(y_tildes))
            ]
        )
        response.t_x.append(fr(gamma * witness.randomness + re_x))
        response.t_y.append(fr(gamma * first_msg.ry + re_y))
        response.t_star.append(fr(gamma * r_star + re_star))
    return response


def _well_formed(pp: PublicParameters, proof: Proof, challenge: Challenge) -> bool:
    msg, resp = proof.first_msg, proof.response
    per_round = (
        challenge.gammas,
        msg.mask_commitments_x,
        msg.mask_commitments_y,
        msg.poly_commitments_star,
        msg.mask_poly_commitments,
        resp.z_values,
        resp.z_squares,
        resp.t_x,
        resp.t_y,
        resp.t_star,
    )
    if any(len(items) < pp.repetitions for items in per_round):
        return False
    n = pp.num_values
    return all(len(z) == n for z in resp.z_values[: pp.repetitions]) and all(
        len(zs) == n and all(len(t) == 3 for t in zs)
        for zs in resp.z_squares[: pp.repetitions]
    )


def verify(
    pp: PublicParameters, statement: Statement, proof: Proof, challenge: Challenge
) -> bool:
    """Check every repetition of the proof against ``challenge``."""
    if not _well_formed(pp, proof, challenge):
        return False
    msg, resp = proof.first_msg, proof.response
    n = pp.num_values
    com_gens = pp.ck_com.generators
    sq_gens = pp.ck_3sq.generators
    rounds = zip(
        challenge.gammas,
        msg.mask_commitments_x,
        msg.mask_commitments_y,
        msg.poly_commitments_star,
        msg.mask_poly_commitments,
        resp.z_values,
        resp.z_squares,
        resp.t_x,
        resp.t_y,
        resp.t_star,
    )
    for _, round_data in zip(range(pp.repetitions), rounds):
        gamma, d_x, d_y, c_star, d_star, z_vals, z_sqs, t_x, t_y, t_star = round_data

        left_x = d_x + statement.commitment * gamma
        right_x = com_gens[0] * t_x + _linear_combination(com_gens[1 : 1 + n], z_vals)
        if left_x != right_x:
            return False

        left_y = d_y + msg.commitment_y * gamma
        flat_z = [z for triple in z_sqs for z in triple]
        right_y = com_gens[0] * t_y + _linear_combination(com_gens[n + 1 :], flat_z)
        if left_y != right_y:
            return False

        f_star = [compute_f_star(z, gamma, pp.b, zs) for z, zs in zip(z_vals, z_sqs)]
        left_star = d_star + c_star * gamma
        right_star = sq_gens[0] * t_star + _linear_combination(sq_gens[1 : 1 + n], f_star)
        if left_star != right_star:
            return False
    return True


def generate_mask_values(count: int, max_bits: int = 128) -> list[int]:
    """``count`` random masks below 2**min(max_bits, 30)."""
    bound = 1 << min(max_bits, _MAX_MASK_BITS)
    return [secrets.randbelow(bound) for _ in range(count)]


def compute_alpha_star_1(
    x_tilde: int, x: int, b: int, y_vals: Sequence[int], y_tildes: Sequence[int]
) -> int:
    """Linear coefficient: 4·x̃·B − 8·x·x̃ − 2·Σ yⱼ·ỹⱼ."""
    cross = sum(y * yt for y, yt in zip(y_vals[:3], y_tildes[:3]))
    return fr(4 * x_tilde * b - 8 * x * x_tilde - 2 * cross)


def compute_alpha_star_0(x_tilde: int, y_tildes: Sequence[int]) -> int:
    """Constant coefficient: −(4·x̃² + Σ ỹⱼ²)."""
    return fr(-(4 * x_tilde * x_tilde + sum(yt * yt for yt in y_tildes[:3])))


def compute_f_star(z_val: int, gamma: int, b: int, z_squares: Iterable[int]) -> int:
    """Verifier polynomial: 4·z·(γ·B − z) + γ² − Σ zⱼ²."""
    return fr(4 * z_val * (gamma * b - z_val) + gamma * gamma - sum(z * z for z in z_squares))


def compute_square_decomposition_values(values: Iterable[int], b: int) -> list[list[int]]:
    """Three squares summing to 4x(B − x) + 1 for each value x."""
    result = []
    for x in values:
        decomposition = three_squares.decompose(three_squares.compute_range_value(x, b))
        if decomposition is None or not decomposition.valid:
            raise RuntimeError("Failed to decompose value into three squares")
        result.append([decomposition.x, decomposition.y, decomposition.z])
    return result
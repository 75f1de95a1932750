from dataclasses import replace

import pytest

from sharpgs import pedersen, sharp_gs
from sharpgs.curve import GROUP_ORDER, random_scalar

B = 100


def _run(pp, values):
    witness = sharp_gs.Witness(values=list(values), randomness=random_scalar())
    commitment = pedersen.commit(pp.ck_com, witness.values, witness.randomness)
    statement = sharp_gs.Statement(commitment=commitment.value, b=B)
    first_msg = sharp_gs.prove_first(pp, statement, witness)
    challenge = sharp_gs.generate_challenge(pp)
    response = sharp_gs.prove_response(pp, statement, witness, first_msg, challenge)
    return statement, sharp_gs.Proof(first_msg, response), challenge


@pytest.fixture(scope="module")
def pp1():
    return sharp_gs.setup(1, B, 128)


@pytest.fixture(scope="module")
def pp2():
    return sharp_gs.setup(2, B, 128)


def test_gcom_generator_structure():
    pp = sharp_gs.setup(3, B, 128)
    assert len(pp.ck_com.generators) == 1 + 3 + 3 * 3
    encoded = {g.serialize() for g in pp.ck_com.generators}
    assert len(encoded) == len(pp.ck_com.generators)


def test_g3sq_generator_structure():
    pp = sharp_gs.setup(3, B, 128)
    assert len(pp.ck_3sq.generators) == 1 + 3


def test_generator_independence(pp2):
    com = {g.serialize() for g in pp2.ck_com.generators}
    sq = {g.serialize() for g in pp2.ck_3sq.generators}
    assert com.isdisjoint(sq)


def test_dual_group_usage(pp1):
    assert pp1.ck_com.generators[0] != pp1.ck_3sq.generators[0]


@pytest.mark.parametrize("bits,expected", [(128, 7), (40, 2), (41, 3), (20, 1)])
def test_repetitions(bits, expected):
    pp = sharp_gs.setup(1, B, bits)
    assert pp.repetitions == expected
    assert pp.gamma_max == (1 << 20) - 1


def test_line1_decomposition():
    squares = sharp_gs.compute_square_decomposition_values([25, 42], B)
    assert len(squares) == 2
    for x, triple in zip([25, 42], squares):
        assert len(triple) == 3
        assert sum(v * v for v in triple) % GROUP_ORDER == 4 * x * (B - x) + 1


@pytest.mark.parametrize("x", [0, 25, 50, 99])
def test_decomposition_polynomial_consistency(x):
    (triple,) = sharp_gs.compute_square_decomposition_values([x], B)
    assert sum(v * v for v in triple) % GROUP_ORDER == 4 * x * (B - x) + 1


def test_line2_cy_commitment(pp2):
    _, proof, _ = _run(pp2, [25, 42])
    assert not proof.first_msg.commitment_y.is_zero()


def test_first_flow_sizes(pp2):
    _, proof, _ = _run(pp2, [25, 42])
    msg = proof.first_msg
    assert len(msg.mask_commitments_x) == pp2.repetitions
    assert len(msg.mask_commitments_y) == pp2.repetitions
    assert len(msg.poly_commitments_star) == pp2.repetitions
    assert len(msg.mask_poly_commitments) == pp2.repetitions
    assert all(len(xt) == 2 for xt in msg.x_tildes)
    assert all(len(yt) == 6 for yt in msg.y_tildes)


def test_response_dimensions(pp2):
    _, proof, _ = _run(pp2, [25, 42])
    resp = proof.response
    assert len(resp.z_values) == pp2.repetitions
    assert all(len(z) == 2 for z in resp.z_values)
    assert len(resp.z_squares) == pp2.repetitions
    assert all(len(zs) == 2 and all(len(t) == 3 for t in zs) for zs in resp.z_squares)
    assert len(resp.t_x) == len(resp.t_y) == len(resp.t_star) == pp2.repetitions


def test_valid_proof_verifies(pp1):
    statement, proof, challenge = _run(pp1, [42])
    assert sharp_gs.verify(pp1, statement, proof, challenge) is True


@pytest.mark.parametrize("value", [0, 1, 99])
def test_boundary_values(pp1, value):
    statement, proof, challenge = _run(pp1, [value])
    assert sharp_gs.verify(pp1, statement, proof, challenge) is True


def test_batch_of_three_verifies():
    pp = sharp_gs.setup(3, B, 128)
    statement, proof, challenge = _run(pp, [25, 42, 75])
    assert sharp_gs.verify(pp, statement, proof, challenge) is True


def test_tampered_response_rejected(pp1):
    statement, proof, challenge = _run(pp1, [42])
    t_x = list(proof.response.t_x)
    t_x[0] = (t_x[0] + 1) % GROUP_ORDER
    bad = replace(proof, response=replace(proof.response, t_x=t_x))
    assert sharp_gs.verify(pp1, statement, bad, challenge) is False


def test_tampered_square_rejected(pp1):
    statement, proof, challenge = _run(pp1, [42])
    z_squares = [[list(t) for t in zs] for zs in proof.response.z_squares]
    z_squares[-1][0][2] = (z_squares[-1][0][2] + 1) % GROUP_ORDER
    bad = replace(proof, response=replace(proof.response, z_squares=z_squares))
    assert sharp_gs.verify(pp1, statement, bad, challenge) is False


def test_wrong_statement_rejected(pp1):
    statement, proof, challenge = _run(pp1, [42])
    other = pedersen.commit(pp1.ck_com, [43], random_scalar()).value
    assert sharp_gs.verify(pp1, replace(statement, commitment=other), proof, challenge) is False


def test_wrong_challenge_rejected(pp1):
    statement, proof, challenge = _run(pp1, [42])
    gammas = list(challenge.gammas)
    gammas[0] = (gammas[0] + 1) % (pp1.gamma_max + 1)
    assert sharp_gs.verify(pp1, statement, proof, sharp_gs.Challenge(gammas)) is False


def test_short_challenge_rejected(pp1):
    statement, proof, challenge = _run(pp1, [42])
    short = sharp_gs.Challenge(challenge.gammas[:-1])
    assert sharp_gs.verify(pp1, statement, proof, short) is False


def test_challenge_space_bounds(pp1):
    challenge = sharp_gs.generate_challenge(pp1)
    assert len(challenge.gammas) == pp1.repetitions
    assert all(0 <= g <= pp1.gamma_max for g in challenge.gammas)


def test_alpha_star_1_value():
    assert sharp_gs.compute_alpha_star_1(10, 25, 100, [3, 4, 5], [1, 2, 3]) == 1948


def test_alpha_star_0_value():
    assert sharp_gs.compute_alpha_star_0(10, [1, 2, 3]) == GROUP_ORDER - 414


def test_f_star_value():
    assert sharp_gs.compute_f_star(30, 7, 100, [2, 3, 5]) == 80411


def test_mask_values_bounds():
    masks = sharp_gs.generate_mask_values(50)
    assert len(masks) == 50
    assert all(0 <= m < 1 << 30 for m in masks)
    small = sharp_gs.generate_mask_values(40, 8)
    assert len(small) == 40
    assert all(0 <= m < 256 for m in small)


def test_mask_values_empty():
    assert sharp_gs.generate_mask_values(0) == []


def test_parameter_edge_cases():
    assert sharp_gs.setup(1, 0, 128).b == 0
    empty = sharp_gs.setup(0, B, 128)
    assert len(empty.ck_com.generators) == 1
    assert len(empty.ck_3sq.generators) == 1
    large = sharp_gs.setup(1, 10**33, 128)
    assert large.b == 10**33
    assert large.num_values == 1
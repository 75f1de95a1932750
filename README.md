# sharpgs

An implementation of the SharpGS range proof. A prover shows that every
value held in a Pedersen multi-commitment lies in the range `[0, B]`,
and does not reveal the values themselves.

For each committed `x`, the proof writes `4x(B - x) + 1` as a sum of
three squares. It then uses a batched sigma protocol, repeated over
several rounds, to prove that the committed squares agree with the
committed values.

Everything is written in pure Python. The group is G1 of the BN254
pairing curve, and scalars are plain `int`s reduced modulo its order.

## Requirements

- Python 3.10 or later.
- No third-party libraries.

## Modules

- `sharpgs.curve`
  - `G1Point`: a curve point. It supports `+`, `-`, negation and
    multiplication by an `int`. It also has `is_zero()`, `is_valid()`,
    `serialize()` (a 32-byte compressed form) and `G1Point.identity()`.
  - `hash_to_g1`: maps a message deterministically to a point.
  - `fr`: reduces an integer into the scalar field.
  - `random_scalar`: returns a random scalar.
  - The constants `FIELD_MODULUS`, `GROUP_ORDER` and `GENERATOR`.
- `sharpgs.pedersen`
  - `CommitmentKey` and `Commitment`.
  - The key generators:
    - `setup(n)`
    - `setup_combined(n)`, which gives G0, G1..Gn and then Gi,j for
      j = 1..3.
    - `setup_independent(n, seed_prefix)`
  - `commit(ck, values, randomness=None)`. It draws fresh randomness when
    none is given. It raises `ValueError` when there are too many values.
  - `commit_with_offset(ck, values, randomness, generator_offset)`
  - `verify`, `add` and `multiply`.
- `sharpgs.three_squares`
  - `decompose(n)` returns a `Decomposition` with `x² + y² + z² = n`. It
    returns `None` when `n` is of the form `4^a(8b + 7)`, or when no
    decomposition is found.
  - `verify`.
  - `compute_range_value(x, b)`, which computes `4x(b - x) + 1`.
  - Conversion helpers: `string_to_fr`, `fr_to_string`, `long_to_fr` and
    `fr_to_long`.
- `sharpgs.sharp_gs`
  - The protocol data classes: `PublicParameters`, `Witness`,
    `Statement`, `FirstMessage`, `Challenge`, `Response` and `Proof`.
  - The protocol steps: `setup`, `prove_first`, `generate_challenge`,
    `prove_response` and `verify`.
  - The polynomial helpers: `compute_alpha_star_1`,
    `compute_alpha_star_0`, `compute_f_star`,
    `compute_square_decomposition_values` and `generate_mask_values`.

## Usage

```python
from sharpgs import curve, pedersen, sharp_gs

bound = curve.fr(100)
pp = sharp_gs.setup(2, bound, 128)

values = [curve.fr(25), curve.fr(42)]
randomness = curve.random_scalar()
commitment = pedersen.commit(pp.ck_com, values, randomness)

witness = sharp_gs.Witness(values, randomness)
statement = sharp_gs.Statement(commitment.value, bound)

first_msg = sharp_gs.prove_first(pp, statement, witness)
challenge = sharp_gs.generate_challenge(pp)
response = sharp_gs.prove_response(pp, statement, witness, first_msg, challenge)

proof = sharp_gs.Proof(first_msg, response)
assert sharp_gs.verify(pp, statement, proof, challenge)
```

The protocol parameters are:

- Rounds: `ceil(security_bits / 20)`.
- Challenges: each is drawn uniformly from `[0, 2^20 - 1]`.
- Masks: each is drawn below `2^30`.

`verify` returns `False` in two cases:

- the proof does not have the expected number of rounds or entries, or
- any of the three check equations fails in any round.

If a value cannot be decomposed into three squares, `prove_first` and
`prove_response` raise `RuntimeError`. This happens, for example, when
the value lies outside the range.

## Limits

- **Search time.** The decomposition search factors `n - z²` for
  successive `z`. It uses trial division by small primes and a primality
  test, so for very large inputs the search can be slow.
- **Interactivity.** The protocol is interactive. Challenges come from
  `generate_challenge`, and no Fiat–Shamir transform is provided.
- **Serialization.** There is no encoding of proofs or parameters, apart
  from `G1Point.serialize`.
- **Command line.** The package provides no command-line tool.
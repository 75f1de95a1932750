"""SharpGS range proofs over Pedersen multi-commitments on BN254 G1."""

__version__ = "0.1.0"
__all__ = ["curve", "pedersen", "three_squares", "sharp_gs"]
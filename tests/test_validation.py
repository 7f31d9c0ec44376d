"""
Tests for the same-ratio pairing check.

Covers:
- Genuine powers pass (seeded and system randomness)
- Tampered g, swapped points, wrong s_g2 fail
- Any single shifted point fails across several seeds
- Trivial lengths pass
"""

import pytest

from kzg_srs.curve import BN254
from kzg_srs.validation import SeededRandomness, SystemRandomness, same_ratio

from ceremony_files import TAU, powers


@pytest.fixture(scope="module")
def g():
    return powers(BN254.g1, TAU, 8)


@pytest.fixture(scope="module")
def g2s():
    return powers(BN254.g2, TAU, 2)


def shifted(point):
    """point + G1."""
    group = BN254.g1
    return group.to_affine(BN254.add(group.to_projective(point), group.to_projective(group.generator)))


class TestRandomness:
    def test_seeded_is_reproducible(self):
        a = SeededRandomness(7)
        b = SeededRandomness(7)
        r = BN254.curve_order
        assert [a.scalar(r) for _ in range(4)] == [b.scalar(r) for _ in range(4)]

    def test_range(self):
        rng = SystemRandomness()
        assert all(0 <= rng.scalar(11) < 11 for _ in range(50))


class TestSameRatio:
    """same_ratio 테스트."""

    def test_genuine(self, g, g2s):
        g2, s_g2 = g2s
        assert same_ratio(BN254, g, g2, s_g2, rng=SeededRandomness(1))

    def test_genuine_system_rng(self, g, g2s):
        g2, s_g2 = g2s
        assert same_ratio(BN254, g, g2, s_g2)

    def test_trivial_lengths(self, g2s):
        g2, s_g2 = g2s
        assert same_ratio(BN254, [], g2, s_g2)
        assert same_ratio(BN254, [BN254.g1.generator], g2, s_g2)

    def test_tampered_point(self, g, g2s):
        g2, s_g2 = g2s
        tampered = list(g)
        tampered[5] = BN254.g1.neg(tampered[5])
        assert not same_ratio(BN254, tampered, g2, s_g2, rng=SeededRandomness(2))

    def test_swapped_points(self, g, g2s):
        g2, s_g2 = g2s
        swapped = list(g)
        swapped[2], swapped[3] = swapped[3], swapped[2]
        assert not same_ratio(BN254, swapped, g2, s_g2, rng=SeededRandomness(3))

    def test_wrong_s_g2(self, g, g2s):
        g2, _ = g2s
        other = powers(BN254.g2, TAU + 1, 2)[1]
        assert not same_ratio(BN254, g, g2, other, rng=SeededRandomness(4))

    def test_different_tau_consistent(self):
        tau = 0xC0FFEE
        g = powers(BN254.g1, tau, 4)
        g2, s_g2 = powers(BN254.g2, tau, 2)
        assert same_ratio(BN254, g, g2, s_g2, num_workers=2)

    @pytest.mark.parametrize("seed", [11, 12, 13, 14])
    @pytest.mark.parametrize("index", [0, 1, 4, 7])
    def test_any_single_perturbation_fails(self, g, g2s, seed, index):
        g2, s_g2 = g2s
        tampered = list(g)
        tampered[index] = shifted(tampered[index])
        assert not same_ratio(BN254, tampered, g2, s_g2, rng=SeededRandomness(seed))

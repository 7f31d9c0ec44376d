"""
Tests for multi-scalar multiplication.

Covers:
- Known small sums against direct scalar multiplication
- Serial and bucket strategies agree (threshold monkeypatched)
- Zero scalars / infinity bases / empty input
- G2 bases
"""

import pytest

from kzg_srs import config
from kzg_srs.curve import BN254
from kzg_srs.msm import best_multiexp

from ceremony_files import TAU, powers


def mul(group, scalar):
    curve = group.curve
    return group.to_affine(curve.multiply(group.to_projective(group.generator), scalar))


def naive(group, coeffs, bases):
    curve = group.curve
    acc = group.zero()
    for c, b in zip(coeffs, bases):
        acc = curve.add(acc, curve.multiply(group.to_projective(b), c))
    return group.to_affine(acc)


class TestBestMultiexp:
    """best_multiexp 테스트."""

    def test_two_terms(self):
        g = BN254.g1.generator
        assert best_multiexp([2, 3], [g, g], BN254.g1) == mul(BN254.g1, 5)

    def test_scalars_reduced_mod_r(self):
        g = BN254.g1.generator
        r = BN254.curve_order
        assert best_multiexp([r + 4], [g], BN254.g1) == mul(BN254.g1, 4)

    def test_empty_is_infinity(self):
        assert best_multiexp([], [], BN254.g1) is None

    def test_zero_scalars_and_infinity_bases(self):
        g = BN254.g1.generator
        assert best_multiexp([0, 7, 5], [g, None, g], BN254.g1) == mul(BN254.g1, 5)

    def test_cancellation_is_infinity(self):
        g = BN254.g1.generator
        r = BN254.curve_order
        assert best_multiexp([1, r - 1], [g, g], BN254.g1) is None

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            best_multiexp([1, 2], [BN254.g1.generator], BN254.g1)

    def test_g2(self):
        bases = powers(BN254.g2, TAU, 3)
        coeffs = [5, 6, 7]
        assert best_multiexp(coeffs, bases, BN254.g2) == naive(BN254.g2, coeffs, bases)


class TestBucketStrategy:
    """버킷(Pippenger) 전략이 직접 누적과 같은 결과를 내는지."""

    @pytest.fixture
    def inputs(self):
        bases = powers(BN254.g1, TAU, 12)
        r = BN254.curve_order
        coeffs = [(i * 0x9E3779B97F4A7C15 + 1) ** 5 % r for i in range(12)]
        coeffs[3] = 0
        bases[7] = None
        return coeffs, bases

    @pytest.mark.parametrize("num_workers", [1, 4])
    def test_matches_serial(self, monkeypatch, inputs, num_workers):
        coeffs, bases = inputs
        expected = naive(BN254.g1, coeffs, bases)

        monkeypatch.setattr(config, "MSM_BUCKET_THRESHOLD", 1)
        assert best_multiexp(coeffs, bases, BN254.g1, num_workers) == expected

    def test_serial_path(self, monkeypatch, inputs):
        coeffs, bases = inputs
        monkeypatch.setattr(config, "MSM_BUCKET_THRESHOLD", 1000)
        assert best_multiexp(coeffs, bases, BN254.g1) == naive(BN254.g1, coeffs, bases)

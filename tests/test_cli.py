"""
Tests for the conversion command line tools.
"""

import pytest

from kzg_srs.cli import convert_from_perpetual_powers_of_tau, convert_ppot_to_barretenberg
from kzg_srs.formats import SrsFormat
from kzg_srs.points import decode_montgomery_point
from kzg_srs.srs import Srs
from kzg_srs.validation import SeededRandomness

from ceremony_files import TAU, expected_lagrange, powers, ppot_file
from conftest import TEST_K


@pytest.fixture
def ppot_path(tmp_path, ppot_bytes):
    path = tmp_path / "response"
    path.write_bytes(ppot_bytes)
    return path


def read_native(path, curve):
    with open(path, "rb") as f:
        return Srs.read(f, SrsFormat.NATIVE, curve, rng=SeededRandomness(0))


class TestConvertToNative:
    """convert-from-perpetual-powers-of-tau 테스트."""

    def test_writes_every_degree(self, tmp_path, ppot_path, curve, genuine):
        prefix = str(tmp_path / "srs-")
        code = convert_from_perpetual_powers_of_tau(
            [str(ppot_path), prefix, str(TEST_K), "--max-degree", str(TEST_K)]
        )
        assert code == 0

        assert read_native(f"{prefix}{TEST_K}", curve) == genuine
        for k in range(1, TEST_K):
            srs = read_native(f"{prefix}{k}", curve)
            assert srs.k == k
            assert srs.g_lagrange == expected_lagrange(curve, k, TAU)
        assert not (tmp_path / "srs-0").exists()

    def test_k_below_max_degree(self, tmp_path, ppot_path, curve):
        prefix = str(tmp_path / "out")
        code = convert_from_perpetual_powers_of_tau(
            [str(ppot_path), prefix, "2", "--max-degree", str(TEST_K)]
        )
        assert code == 0
        assert read_native(f"{prefix}2", curve).g == powers(curve.g1, TAU, 4)
        assert not (tmp_path / f"out{TEST_K}").exists()

    def test_degree_too_large(self, tmp_path, ppot_path, capsys):
        code = convert_from_perpetual_powers_of_tau(
            [str(ppot_path), str(tmp_path / "x"), str(TEST_K + 1), "--max-degree", str(TEST_K)]
        )
        assert code == 1
        assert "error:" in capsys.readouterr().err

    def test_full_size_degree_on_small_file(self, tmp_path, ppot_path, capsys):
        code = convert_from_perpetual_powers_of_tau(
            [str(ppot_path), str(tmp_path / "x"), "28", "--max-degree", "28"]
        )
        assert code == 1
        assert "error:" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [
        ["-1"],
        ["2", "--max-degree", "-3"],
        ["two"],
    ])
    def test_invalid_degree_exits(self, tmp_path, ppot_path, argv):
        with pytest.raises(SystemExit) as e:
            convert_from_perpetual_powers_of_tau([str(ppot_path), str(tmp_path / "x")] + argv)
        assert e.value.code == 2

    def test_missing_source(self, tmp_path, capsys):
        code = convert_from_perpetual_powers_of_tau(
            [str(tmp_path / "missing"), str(tmp_path / "x"), "1", "--max-degree", "1"]
        )
        assert code == 1
        assert "error:" in capsys.readouterr().err

    def test_tampered_source(self, tmp_path, curve):
        data = bytearray(ppot_file(curve, TEST_K))
        data[64 + 3 * curve.g1.size] ^= 0x80
        src = tmp_path / "bad"
        src.write_bytes(bytes(data))
        code = convert_from_perpetual_powers_of_tau(
            [str(src), str(tmp_path / "x"), str(TEST_K), "--max-degree", str(TEST_K)]
        )
        assert code == 1
        assert not (tmp_path / f"x{TEST_K}").exists()


class TestConvertToBarretenberg:
    """convert-ppot-to-barretenberg 테스트."""

    def test_writes_raw_arrays(self, tmp_path, ppot_path, curve, genuine):
        prefix = str(tmp_path / "bb")
        code = convert_ppot_to_barretenberg(
            [str(ppot_path), prefix, "2", "--max-degree", str(TEST_K), "--workers", "2"]
        )
        assert code == 0

        g1_data = (tmp_path / "bb-2.g1").read_bytes()
        g2_data = (tmp_path / "bb-2.g2").read_bytes()
        assert len(g1_data) == 4 * curve.g1.raw_size
        assert len(g2_data) == 2 * curve.g2.raw_size

        size = curve.g1.raw_size
        g = [decode_montgomery_point(curve.g1, g1_data[i:i + size]) for i in range(0, len(g1_data), size)]
        assert g == genuine.g[:4]
        assert decode_montgomery_point(curve.g2, g2_data[curve.g2.raw_size:]) == genuine.s_g2

    def test_degree_above_max(self, tmp_path, ppot_path, capsys):
        code = convert_ppot_to_barretenberg(
            [str(ppot_path), str(tmp_path / "bb"), "9", "--max-degree", str(TEST_K)]
        )
        assert code == 1
        assert "error:" in capsys.readouterr().err

    def test_wrong_s_g2(self, tmp_path, curve):
        good = ppot_file(curve, TEST_K)
        other = ppot_file(curve, TEST_K, TAU + 1)
        src = tmp_path / "mixed"
        src.write_bytes(good[:-64] + other[-64:])
        code = convert_ppot_to_barretenberg(
            [str(src), str(tmp_path / "bb"), str(TEST_K), "--max-degree", str(TEST_K)]
        )
        assert code == 1
        assert not (tmp_path / f"bb-{TEST_K}.g1").exists()

    def test_bad_arguments_exit(self):
        with pytest.raises(SystemExit):
            convert_ppot_to_barretenberg(["only-one-arg", "--curve", "secp256k1"])

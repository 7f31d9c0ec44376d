"""
Tests for the SRS web service (Flask test client).
"""

import io

import pytest

from app import app
from kzg_srs.formats import SrsFormat
from kzg_srs.srs import Srs
from kzg_srs.validation import SeededRandomness

from srs_serializers import serialize_g1, serialize_g2
from conftest import TEST_K


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def upload(data, **fields):
    form = {key: str(value) for key, value in fields.items()}
    form["file"] = (io.BytesIO(data), "ceremony.bin")
    return form


class TestIndex:
    def test_index(self, client):
        body = client.get("/").get_json()
        assert "/srs/inspect" in body["endpoints"]

    def test_formats(self, client):
        body = client.get("/srs/formats").get_json()
        assert "snarkjs" in body["formats"]
        assert body["curves"] == ["bls12-381", "bn254"]


class TestInspect:
    """POST /srs/inspect 테스트."""

    def test_native(self, client, genuine, native_bytes):
        resp = client.post("/srs/inspect", data=upload(native_bytes, format="native"))
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["valid"] is True
        assert body["k"] == TEST_K
        assert body["n"] == 1 << TEST_K
        assert body["g"][1] == serialize_g1(genuine.g[1])
        assert body["s_g2"] == serialize_g2(genuine.s_g2)
        assert len(body["g_short"]) == 4

    def test_ppot_partial(self, client, genuine, ppot_bytes):
        resp = client.post(
            "/srs/inspect",
            data=upload(ppot_bytes, format="ppot", max_k=TEST_K, k=2),
        )
        assert resp.status_code == 200
        assert resp.get_json()["k"] == 2

    def test_snarkjs(self, client, snarkjs_bytes):
        resp = client.post("/srs/inspect", data=upload(snarkjs_bytes, format="snarkjs"))
        assert resp.status_code == 200

    def test_missing_file(self, client):
        resp = client.post("/srs/inspect", data={"format": "native"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "ValueError"

    def test_degree_too_large(self, client, native_bytes):
        resp = client.post(
            "/srs/inspect", data=upload(native_bytes, format="native", k=TEST_K + 1)
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "DegreeTooLarge"

    def test_truncated(self, client, native_bytes):
        resp = client.post("/srs/inspect", data=upload(native_bytes[:50], format="native"))
        assert resp.status_code == 422
        assert resp.get_json()["error"] == "SrsIOError"

    def test_tampered(self, client, genuine):
        bad = genuine.copy()
        bad.g[2] = bad.g[3]
        buf = io.BytesIO()
        bad.write(buf)
        resp = client.post("/srs/inspect", data=upload(buf.getvalue(), format="native"))
        assert resp.status_code == 422
        assert resp.get_json()["error"] == "ValidationFailure"

    def test_bad_integer_field(self, client, native_bytes):
        resp = client.post("/srs/inspect", data=upload(native_bytes, format="native", k="x"))
        assert resp.status_code == 400

    def test_unknown_format(self, client, native_bytes):
        resp = client.post("/srs/inspect", data=upload(native_bytes, format="bellman"))
        assert resp.status_code == 400


class TestConvert:
    """POST /srs/convert 테스트."""

    def test_convert_ppot_to_native(self, client, curve, ppot_bytes):
        resp = client.post(
            "/srs/convert",
            data=upload(ppot_bytes, format="perpetual_powers_of_tau", max_k=TEST_K, target_k=2),
        )
        assert resp.status_code == 200
        assert "srs-bn254-2" in resp.headers["Content-Disposition"]

        srs = Srs.read(io.BytesIO(resp.data), SrsFormat.NATIVE, curve, rng=SeededRandomness(0))
        assert srs.k == 2

    def test_target_k_too_large(self, client, native_bytes):
        resp = client.post(
            "/srs/convert", data=upload(native_bytes, format="native", target_k=TEST_K + 1)
        )
        assert resp.status_code == 400


class TestSerializers:
    def test_g1_decimal_strings(self, curve):
        assert serialize_g1(curve.g1.generator) == ["1", "2"]
        assert serialize_g1(None) is None

    def test_g2_coefficients(self, genuine):
        data = serialize_g2(genuine.s_g2)
        x, y = genuine.s_g2
        assert data[0] == [str(int(c)) for c in x.coeffs]
        assert data[1] == [str(int(c)) for c in y.coeffs]
        assert serialize_g2(None) is None

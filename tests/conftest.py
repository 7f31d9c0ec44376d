import sys
import os
import io
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from kzg_srs.curve import BN254

from ceremony_files import TAU, genuine_srs, ppot_file, snarkjs_file


# ── 테스트 상수 ──
TEST_K = 3


@pytest.fixture(scope="session")
def curve():
    return BN254


@pytest.fixture(scope="session")
def genuine(curve):
    """tau로 직접 만든 k=3 Srs (g_lagrange도 스칼라 필드에서 계산)."""
    return genuine_srs(curve, TEST_K, TAU)


@pytest.fixture(scope="session")
def native_bytes(genuine):
    buf = io.BytesIO()
    genuine.write(buf)
    return buf.getvalue()


@pytest.fixture(scope="session")
def native_raw_bytes(genuine):
    buf = io.BytesIO()
    genuine.write_raw(buf)
    return buf.getvalue()


@pytest.fixture(scope="session")
def ppot_bytes(curve):
    return ppot_file(curve, TEST_K, TAU)


@pytest.fixture(scope="session")
def snarkjs_bytes(curve):
    return snarkjs_file(curve, TEST_K, TAU)


@pytest.fixture
def single_worker(monkeypatch):
    """병렬 분배기를 단일 작업자로 고정한다."""
    from kzg_srs import config
    monkeypatch.setattr(config, "MAX_WORKERS", 1)

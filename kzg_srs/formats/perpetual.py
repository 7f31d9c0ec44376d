"""
Perpetual Powers of Tau 세레모니 형식
=====================================

커뮤니티 "perpetual" 세레모니의 응답(response) 파일 배치:

  오프셋 0     64 바이트 해시
  오프셋 64    τ^i·G1, i ∈ [0, 2·2^K - 1)   압축 G1 (빅 엔디언)
  이어서       τ^i·G2, i ∈ [0, 2^K)         압축 G2 (빅 엔디언)
  ...          α, β 거듭제곱 (사용하지 않음)

세레모니는 고정된 최대 차수 K를 공개하며, 파일 안에는 K가 기록되어 있지 않다.
따라서 호출자가 K를 알려 주어야 한다.

점은 라이브러리 압축 인코딩과 바이트 순서가 반대이고,
첫 바이트(뒤집은 뒤 마지막 바이트) bit 7이 "y > -y" 플래그이다.
부호 결정은 kzg_srs.points.decode_ppot_point 참고.
"""

import logging

from kzg_srs.errors import DegreeTooLarge
from kzg_srs.points import decode_ppot_point, decode_points
from kzg_srs.stream import read_exact, seek

logger = logging.getLogger(__name__)

G1_OFFSET = 64


def g2_offset(curve, k):
    return G1_OFFSET + curve.g1.size * (2 * (1 << k) - 1)


def read_points(stream, group, n, num_workers=None):
    blob = read_exact(stream, group.size * n)
    return decode_points(
        blob, group.size, lambda data: decode_ppot_point(group, data), num_workers
    )


def read_g1s(stream, curve, n, in_place=False, num_workers=None):
    if not in_place:
        seek(stream, G1_OFFSET)
    return read_points(stream, curve.g1, n, num_workers)


def read_g2s(stream, curve, k, n, in_place=False, num_workers=None):
    if not in_place:
        seek(stream, g2_offset(curve, k))
    return read_points(stream, curve.g2, n, num_workers)


def read(stream, curve, k, desired_k, num_workers=None):
    """Perpetual powers of tau 파일에서 SRS 구성 요소를 읽는다.

    Args:
        k: 세레모니가 공개한 최대 차수
        desired_k: 읽을 차수

    Returns:
        tuple: (g, None, g2, s_g2) — Lagrange 기저는 항상 다시 계산한다.

    Raises:
        DegreeTooLarge: desired_k > k
    """
    if desired_k > k:
        raise DegreeTooLarge(desired_k, k)
    logger.debug("perpetual powers of tau 형식: 최대 k=%d, 요청 k=%d", k, desired_k)

    g = read_g1s(stream, curve, 1 << desired_k, num_workers=num_workers)
    g2, s_g2 = read_g2s(stream, curve, k, 2, num_workers=num_workers)
    return g, None, g2, s_g2

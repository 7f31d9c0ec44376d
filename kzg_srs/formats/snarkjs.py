"""
snarkjs .ptau 세레모니 형식
===========================

널리 쓰이는 세레모니 파일 형식 (섹션 기반):

  오프셋 0    "ptau" 매직 (4) · 버전 u32 · 섹션 수 u32
  오프셋 12   섹션 1 헤더: 타입 u32 · 크기 u64 (오프셋 16)
  오프셋 24   헤더 본문: n8 u32 · q (n8 바이트) · power u32 · ceremonyPower u32
              → power(= k)는 헤더 끝에서 8 바이트 앞에 있다
  헤더 끝     섹션 2 헤더 (12 바이트) 뒤에 τ^i·G1, i ∈ [0, 2·2^k - 1)
  이어서      섹션 3 헤더 (12 바이트) 뒤에 τ^i·G2, i ∈ [0, 2^k)

모든 좌표는 리틀 엔디언 몽고메리 잉여이다.
G1 점 = x ‖ y, G2 점 = x.c0 ‖ x.c1 ‖ y.c0 ‖ y.c1.
"""

import logging

from kzg_srs.errors import DegreeTooLarge
from kzg_srs.points import decode_montgomery_point, decode_points
from kzg_srs.stream import read_exact, read_u32, read_u64, seek

logger = logging.getLogger(__name__)

HEADER_SIZE_OFFSET = 16
HEADER_OFFSET = HEADER_SIZE_OFFSET + 8
SECTION_HEADER_SIZE = 12


def read_header_size(stream):
    seek(stream, HEADER_SIZE_OFFSET)
    return read_u64(stream)


def read_k(stream):
    seek(stream, HEADER_OFFSET + read_header_size(stream) - 8)
    return read_u32(stream)


def g1_offset(stream):
    return HEADER_OFFSET + read_header_size(stream) + SECTION_HEADER_SIZE


def g2_offset(stream, curve):
    field_size = curve.field_size
    k = read_k(stream)
    return g1_offset(stream) + 2 * field_size * (2 * (1 << k) - 1) + SECTION_HEADER_SIZE


def read_points(stream, group, n, num_workers=None):
    blob = read_exact(stream, group.raw_size * n)
    return decode_points(
        blob, group.raw_size, lambda data: decode_montgomery_point(group, data), num_workers
    )


def read_g1s(stream, curve, n, in_place=False, num_workers=None):
    if not in_place:
        seek(stream, g1_offset(stream))
    return read_points(stream, curve.g1, n, num_workers)


def read_g2s(stream, curve, n, in_place=False, num_workers=None):
    if not in_place:
        seek(stream, g2_offset(stream, curve))
    return read_points(stream, curve.g2, n, num_workers)


def read(stream, curve, desired_k, num_workers=None):
    """snarkjs .ptau 파일에서 SRS 구성 요소를 읽는다.

    Returns:
        tuple: (g, None, g2, s_g2) — Lagrange 기저는 항상 다시 계산한다.

    Raises:
        DegreeTooLarge: desired_k > 파일의 power
    """
    k = read_k(stream)
    if desired_k > k:
        raise DegreeTooLarge(desired_k, k)
    logger.debug("snarkjs 형식: 파일 k=%d, 요청 k=%d", k, desired_k)

    g = read_g1s(stream, curve, 1 << desired_k, num_workers=num_workers)
    g2, s_g2 = read_g2s(stream, curve, 2, num_workers=num_workers)
    return g, None, g2, s_g2

"""
네이티브(canonical) SRS 형식
============================

Srs.write가 만들어 내는 표준 교환 형식이다.

  오프셋 0            k (u32, 리틀 엔디언)
  오프셋 4            g[0..2^k)          압축 G1 점
  이어서              g_lagrange[0..2^k) 압축 G1 점
  4 + g1·2·2^k        g2, s_g2           압축 G2 점

raw 하위 형식은 같은 배치에 점마다 몽고메리 잉여 (x ‖ y)를 그대로 기록한다.
파일은 두 배 커지지만 제곱근 계산 없이 읽을 수 있어 큰 차수에 쓰인다.

Lagrange 점은 파일의 k와 요청한 k가 같을 때만 읽고, 다르면 다시 계산한다
(저장된 Lagrange 기저는 파일의 도메인 크기에 묶여 있다).
"""

import logging

from kzg_srs.errors import DegreeTooLarge
from kzg_srs.points import decode_montgomery_point, decode_points
from kzg_srs.stream import read_exact, read_u32, seek

logger = logging.getLogger(__name__)

G1_OFFSET = 4


def point_size(group, raw=False):
    return group.raw_size if raw else group.size


def _decoder(group, raw):
    if raw:
        return lambda data: decode_montgomery_point(group, data)
    return group.decompress


def read_k(stream):
    seek(stream, 0)
    return read_u32(stream)


def g2_offset(curve, k, raw=False):
    return G1_OFFSET + point_size(curve.g1, raw) * 2 * (1 << k)


def read_points(stream, group, n, raw=False, num_workers=None):
    """현재 위치에서 n개의 점을 읽는다."""
    size = point_size(group, raw)
    blob = read_exact(stream, size * n)
    return decode_points(blob, size, _decoder(group, raw), num_workers)


def read_g1s(stream, curve, n, in_place=False, raw=False, num_workers=None):
    """단항식 G1 점 n개를 읽는다. in_place면 현재 위치에서 읽는다."""
    if not in_place:
        seek(stream, G1_OFFSET)
    return read_points(stream, curve.g1, n, raw, num_workers)


def read_g2s(stream, curve, n, in_place=False, raw=False, num_workers=None):
    """G2 점 n개 (g2, s_g2)를 읽는다. in_place가 아니면 파일의 k로 오프셋을 계산한다."""
    if not in_place:
        seek(stream, g2_offset(curve, read_k(stream), raw))
    return read_points(stream, curve.g2, n, raw, num_workers)


def read(stream, curve, desired_k, raw=False, num_workers=None):
    """네이티브 형식에서 SRS 구성 요소를 읽는다.

    Returns:
        tuple: (g, g_lagrange 또는 None, g2, s_g2)
               g_lagrange가 None이면 호출자가 다시 계산해야 한다.

    Raises:
        DegreeTooLarge: desired_k > 파일의 k
    """
    k = read_k(stream)
    if desired_k > k:
        raise DegreeTooLarge(desired_k, k)
    n = 1 << desired_k
    logger.debug("네이티브%s 형식: 파일 k=%d, 요청 k=%d", " raw" if raw else "", k, desired_k)

    g = read_points(stream, curve.g1, n, raw, num_workers)
    g_lagrange = None
    if k == desired_k:
        g_lagrange = read_points(stream, curve.g1, n, raw, num_workers)

    seek(stream, g2_offset(curve, k, raw))
    g2, s_g2 = read_points(stream, curve.g2, 2, raw, num_workers)
    return g, g_lagrange, g2, s_g2

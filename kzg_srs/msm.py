"""
다중 스칼라 곱셈 (Multi-Scalar Multiplication, multiexp)
========================================================

Σᵢ cᵢ · Pᵢ 를 계산한다. 기저 변환과 same-ratio 검증이 공유하는 기본 연산이다.

**전략**:
  - 점 개수가 적으면 직접 누적: 각 항을 double-and-add로 곱한 뒤 더한다.
  - 점 개수가 많으면 윈도우 버킷(Pippenger) 방식:
      스칼라를 c비트 윈도우로 나누고, 윈도우마다 같은 값을 가진 점을
      버킷에 모아 더한 뒤 러닝 합(running sum)으로 Σ j·B_j 를 구한다.
      윈도우 결과는 최상위부터 c번 두 배씩 하며 합친다.
  - 버킷 방식은 점 구간(segment)별로 병렬 실행한 뒤 부분합을 더한다.

어떤 전략을 고르든 결과는 같다 (성능만 달라진다).

사용 예시:
    >>> best_multiexp([FR(2), FR(3)], [G1, G1], BN254.g1)  # 5·G1
"""

import math

from kzg_srs import config
from kzg_srs.parallel import chunk_ranges, parallelize


def _window_size(n):
    if n < 32:
        return 3
    return max(1, int(math.ceil(math.log(n))))


def _multiexp_serial(curve, scalars, points, zero):
    """직접 누적 방식."""
    acc = zero
    for scalar, point in zip(scalars, points):
        if scalar == 0:
            continue
        acc = curve.add(acc, curve.ecc.multiply(point, scalar))
    return acc


def _multiexp_buckets(curve, scalars, points, zero):
    """윈도우 버킷(Pippenger) 방식."""
    c = _window_size(len(points))
    num_bits = curve.curve_order.bit_length()
    segments = (num_bits + c - 1) // c
    mask = (1 << c) - 1

    acc = zero
    for segment in reversed(range(segments)):
        for _ in range(c):
            acc = curve.double(acc)

        shift = segment * c
        buckets = [zero] * mask
        for scalar, point in zip(scalars, points):
            index = (scalar >> shift) & mask
            if index:
                buckets[index - 1] = curve.add(buckets[index - 1], point)

        # Σ j·B_j = B_max + (B_max + B_{max-1}) + ...
        running_sum = zero
        for bucket in reversed(buckets):
            running_sum = curve.add(running_sum, bucket)
            acc = curve.add(acc, running_sum)
    return acc


def multiexp_projective(scalars, points, group, num_workers=None):
    """사영 좌표 점들에 대한 MSM. 결과도 사영 좌표로 반환한다."""
    curve = group.curve
    zero = group.zero()
    scalars = [int(s) % curve.curve_order for s in scalars]
    if len(scalars) < config.MSM_BUCKET_THRESHOLD:
        return _multiexp_serial(curve, scalars, points, zero)

    if num_workers is None:
        num_workers = config.MAX_WORKERS
    ranges = chunk_ranges(len(points), num_workers)
    partials = [None] * len(ranges)

    def run(chunk, start):
        results = []
        for begin, end in ranges[start:start + len(chunk)]:
            results.append(
                _multiexp_buckets(curve, scalars[begin:end], points[begin:end], zero)
            )
        return results

    parallelize(partials, run, num_workers)

    acc = zero
    for partial in partials:
        acc = curve.add(acc, partial)
    return acc


def best_multiexp(coeffs, bases, group, num_workers=None):
    """Σ coeffs[i] · bases[i] 를 계산한다.

    Args:
        coeffs: 스칼라 리스트 (int 또는 int로 변환 가능한 값)
        bases: 아핀 점 리스트 (None은 무한원점)
        group: 점들이 속한 CurveGroup (G1 또는 G2)
        num_workers: 병렬 작업자 수

    Returns:
        아핀 점 (결과가 무한원점이면 None)

    Raises:
        ValueError: coeffs와 bases의 길이가 다를 때
    """
    if len(coeffs) != len(bases):
        raise ValueError(
            f"스칼라 개수 {len(coeffs)}와 점 개수 {len(bases)}가 다릅니다"
        )
    points = [group.to_projective(base) for base in bases]
    return group.to_affine(multiexp_projective(coeffs, points, group, num_workers))

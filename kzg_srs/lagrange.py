"""
단항식 기저 → Lagrange 기저 변환
=================================

단항식(monomial) 기저 SRS g[i] = sⁱ·G1 으로부터, 크기 n = 2^k 인
곱셈 도메인 H = {1, ω, ..., ω^(n-1)} 의 Lagrange 기저 다항식 Lᵢ(X)에 대한
커밋먼트 Lᵢ(s)·G1 을 계산한다.

**원리**:
  Lᵢ(X) = (1/n) Σⱼ ω^(-ij) Xʲ 이므로

      g_lagrange[i] = Σⱼ (ω^(-ij) / n) · g[j]

  즉 스칼라 필드 위의 역 DFT와 같은 선형 결합이다. 스칼라 곱셈은
  이 선형 구조 위로 분배되므로, 역 FFT의 버터플라이 구조를 그대로
  군(group) 원소에 적용할 수 있다:

      u, t = a[j], ωᵏ · a[j + m/2]
      a[j], a[j + m/2] = u + t, u - t

  마지막으로 각 원소에 n⁻¹을 곱한다. O(n²) 대신 O(n log n) 스칼라 곱셈.

**병렬화**:
  각 단계의 버터플라이들은 서로 독립이므로 병렬 분배기로 나누어 실행한다.
  어떤 크기로 나누어도 원소마다 같은 연산을 같은 순서로 하므로 결과는 결정적이다.

사용 예시:
    >>> g_lagrange = g_to_lagrange(BN254, g, k=3)
    >>> len(g_lagrange)  # 8
"""

import logging

from kzg_srs.parallel import parallelize

logger = logging.getLogger(__name__)


def bit_reverse(index, bits):
    """bits 비트 정수의 비트 순서를 뒤집는다."""
    result = 0
    for _ in range(bits):
        result = (result << 1) | (index & 1)
        index >>= 1
    return result


def ifft_points(curve, values, k, num_workers=None):
    """사영 좌표 G1 점 리스트에 대한 역 FFT (n⁻¹ 스케일링 제외).

    반복형 radix-2 Cooley-Tukey: 비트 역순 정렬 후 단계별 버터플라이.
    """
    n = 1 << k
    r = curve.curve_order
    omega_inv = curve.scalar_inverse(curve.root_of_unity(k))

    values = [values[bit_reverse(i, k)] for i in range(n)]

    m = 2
    while m <= n:
        half = m // 2
        w_m = pow(omega_inv, n // m, r)
        twiddles = [pow(w_m, j, r) for j in range(half)]

        # 버터플라이 b는 (블록 시작 + j, 블록 시작 + j + half) 쌍을 담당한다
        butterflies = [None] * (n // 2)

        def butterfly(chunk, start):
            results = []
            for b in range(start, start + len(chunk)):
                block, j = divmod(b, half)
                top = block * m + j
                u = values[top]
                t = values[top + half]
                if twiddles[j] != 1:
                    t = curve.multiply(t, twiddles[j])
                results.append((curve.add(u, t), curve.add(u, curve.neg(t))))
            return results

        parallelize(butterflies, butterfly, num_workers)

        for b, (low, high) in enumerate(butterflies):
            block, j = divmod(b, half)
            top = block * m + j
            values[top] = low
            values[top + half] = high
        m *= 2

    return values


def g_to_lagrange(curve, g, k, num_workers=None):
    """단항식 기저 G1 점들을 크기 2^k 도메인의 Lagrange 기저로 변환한다.

    Args:
        curve: PairingCurve
        g: 아핀 G1 점 리스트, 앞의 2^k개만 사용한다
        k: 도메인 크기의 로그
        num_workers: 병렬 작업자 수

    Returns:
        list: 2^k개의 아핀 G1 점 g_lagrange

    Raises:
        ValueError: g의 길이가 2^k보다 짧을 때
    """
    n = 1 << k
    if len(g) < n:
        raise ValueError(f"단항식 점이 {len(g)}개뿐입니다. 2^{k} = {n}개가 필요합니다")
    logger.debug("Lagrange 기저 변환 시작: k=%d, n=%d", k, n)

    group = curve.g1
    values = ifft_points(curve, [group.to_projective(p) for p in g[:n]], k, num_workers)

    n_inv = curve.scalar_inverse(n)

    def scale(chunk, start):
        return [group.to_affine(curve.multiply(p, n_inv)) for p in chunk]

    parallelize(values, scale, num_workers)
    logger.debug("Lagrange 기저 변환 완료: k=%d", k)
    return values

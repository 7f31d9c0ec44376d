"""
검증 엔진: same-ratio 페어링 검사
=================================

디코딩된 점들이 하나의 비밀 값 s의 연속된 거듭제곱인지 확률적으로 확인한다.

**프로토콜**:
  g[0..n), g2, s_g2 가 주어지면 n-1개의 독립적인 균등 난수 스칼라
  c₁..c_{n-1}을 뽑고

      L = Σ cᵢ · g[i]        (i ∈ [0, n-1))
      R = Σ cᵢ · g[i+1]      (같은 선형 결합을 한 칸 민 수열에 적용)

  e(L, s_g2) · e(R, -g2) 가 최종 지수승 후 GT의 항등원이면 통과한다.

**정당성**:
  모든 인접 쌍이 g[i+1] = s · g[i] 이고 s_g2 = s · g2 이면 쌍선형성에 의해
  난수와 무관하게 곱이 1이 된다. 어느 한 쌍이라도 어긋나면 스칼라 필드
  크기의 역수 정도 확률(Schwartz–Zippel)을 제외하고 검사가 실패한다.

**난수 제공자**:
  기본은 secrets 기반의 암호학적 난수. 테스트에서는 SeededRandomness로
  결정적인 난수를 주입한다 (전역 상태에 의존하지 않는다).

사용 예시:
    >>> same_ratio(BN254, g, g2, s_g2)                             # True / False
    >>> same_ratio(BN254, g, g2, s_g2, rng=SeededRandomness(42))
"""

import logging
import random
import secrets

from kzg_srs.msm import best_multiexp

logger = logging.getLogger(__name__)


class SystemRandomness:
    """프로세스 전역의 암호학적으로 안전한 난수원 (secrets)."""

    def scalar(self, order):
        return secrets.randbelow(order)


class SeededRandomness:
    """시드로 재현 가능한 난수원. 테스트 전용이다."""

    def __init__(self, seed):
        self._random = random.Random(seed)

    def scalar(self, order):
        return self._random.randrange(order)


def same_ratio(curve, g, g2, s_g2, rng=None, num_workers=None):
    """g의 인접한 점들이 모두 같은 비율 s를 갖는지 페어링으로 확인한다.

    Args:
        curve: PairingCurve
        g: 아핀 G1 점 리스트 (단항식 기저)
        g2: G2 생성자
        s_g2: s · g2
        rng: 난수 제공자 (scalar(order) 메서드). None이면 SystemRandomness.
        num_workers: MSM 병렬 작업자 수

    Returns:
        bool: 검사 통과 여부
    """
    if rng is None:
        rng = SystemRandomness()
    n = len(g)
    if n <= 1:
        return True

    coeffs = [rng.scalar(curve.curve_order) for _ in range(n - 1)]
    lhs = best_multiexp(coeffs, g[:n - 1], curve.g1, num_workers)
    rhs = best_multiexp(coeffs, g[1:n], curve.g1, num_workers)

    result = curve.pairing_check([
        (lhs, s_g2),
        (rhs, curve.g2.neg(g2)),
    ])
    logger.debug("same-ratio 검사: n=%d, 결과=%s", n, result)
    return result

"""
세레모니 파일 형식 디코더
=========================

호출자가 고른 형식에 따라 탐색 가능한 바이트 스트림에서 SRS 구성 요소
(g, g_lagrange, g2, s_g2)를 읽는다.

  - NATIVE                    네이티브 압축 형식 (Srs.write)
  - NATIVE_RAW                네이티브 비압축 형식 (Srs.write_raw)
  - perpetual_powers_of_tau(K) 커뮤니티 perpetual 세레모니 (최대 차수 K)
  - SNARKJS                   snarkjs .ptau 파일

모든 디코더의 계약:
  desired_k ≤ 파일의 차수여야 하며 (아니면 DegreeTooLarge),
  정확히 2^desired_k개의 단항식 점과 G2 두 점을 읽는다.
"""

from dataclasses import dataclass
from typing import Optional

from kzg_srs.formats import native, perpetual, snarkjs

NATIVE_KIND = "native"
NATIVE_RAW_KIND = "native_raw"
PERPETUAL_KIND = "perpetual_powers_of_tau"
SNARKJS_KIND = "snarkjs"


@dataclass(frozen=True)
class SrsFormat:
    """세레모니 파일 형식.

    속성:
        kind: 형식 종류
        k: perpetual 세레모니의 공개 최대 차수 (다른 형식은 None)
    """

    kind: str
    k: Optional[int] = None

    @classmethod
    def perpetual_powers_of_tau(cls, k):
        return cls(PERPETUAL_KIND, k)

    @classmethod
    def parse(cls, name, k=None):
        """이름 문자열로 형식을 만든다 (CLI / 웹 서비스용).

        Raises:
            ValueError: 알 수 없는 이름이거나 perpetual 형식에 k가 없을 때
        """
        if name in (NATIVE_KIND, NATIVE_RAW_KIND, SNARKJS_KIND):
            return cls(name)
        if name in (PERPETUAL_KIND, "perpetual", "ppot"):
            if k is None:
                raise ValueError("perpetual powers of tau 형식에는 최대 차수 k가 필요합니다")
            return cls.perpetual_powers_of_tau(k)
        raise ValueError(f"알 수 없는 SRS 형식입니다: {name}")

    def __str__(self):
        if self.kind == PERPETUAL_KIND:
            return f"{self.kind}({self.k})"
        return self.kind


SrsFormat.NATIVE = SrsFormat(NATIVE_KIND)
SrsFormat.NATIVE_RAW = SrsFormat(NATIVE_RAW_KIND)
SrsFormat.SNARKJS = SrsFormat(SNARKJS_KIND)

FORMAT_NAMES = [NATIVE_KIND, NATIVE_RAW_KIND, PERPETUAL_KIND, SNARKJS_KIND]


def read_k(stream, fmt):
    """파일에 저장된 (또는 형식이 공개한) 최대 차수 k."""
    if fmt.kind in (NATIVE_KIND, NATIVE_RAW_KIND):
        return native.read_k(stream)
    if fmt.kind == PERPETUAL_KIND:
        return fmt.k
    if fmt.kind == SNARKJS_KIND:
        return snarkjs.read_k(stream)
    raise ValueError(f"알 수 없는 SRS 형식입니다: {fmt}")


def read_parts(stream, fmt, curve, desired_k, num_workers=None):
    """형식별 디코더를 골라 (g, g_lagrange 또는 None, g2, s_g2)를 읽는다."""
    if fmt.kind == NATIVE_KIND:
        return native.read(stream, curve, desired_k, num_workers=num_workers)
    if fmt.kind == NATIVE_RAW_KIND:
        return native.read(stream, curve, desired_k, raw=True, num_workers=num_workers)
    if fmt.kind == PERPETUAL_KIND:
        return perpetual.read(stream, curve, fmt.k, desired_k, num_workers=num_workers)
    if fmt.kind == SNARKJS_KIND:
        return snarkjs.read(stream, curve, desired_k, num_workers=num_workers)
    raise ValueError(f"알 수 없는 SRS 형식입니다: {fmt}")

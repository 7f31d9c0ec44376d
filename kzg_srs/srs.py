"""
KZG Structured Reference String (SRS) 컨테이너
===============================================

세레모니 파일에서 가져온 SRS를 하나의 메모리 표현으로 보관한다.

**SRS란?**
  KZG 다항식 커밋먼트 스킴의 공개 파라미터이다.
  신뢰 설정 세레모니에서 비밀 값 s ("toxic waste")로 생성되며,
  생성 후 s는 폐기된다.

  Srs = {
      k:          도메인 크기 2^k
      g:          [G1, s·G1, s²·G1, ..., s^(2^k-1)·G1]   (단항식 기저)
      g_lagrange: [L₀(s)·G1, ..., L_{2^k-1}(s)·G1]       (Lagrange 기저)
      g2:         G2 생성자
      s_g2:       s·G2
  }

**수명 주기**:
  Srs는 디코딩 + 검증 파이프라인(read / read_partial) 또는 유효한 Srs의
  downsize로만 만들어진다. 디코딩은 항상 same-ratio 검사를 거친 뒤에만
  Srs를 돌려준다. downsize는 잘라내기와 결정적인 기저 재계산뿐이므로
  다시 검증하지 않는다.

**직렬화**:
  write:     k (u32 LE) ‖ 압축 g ‖ 압축 g_lagrange ‖ 압축 g2 ‖ 압축 s_g2
  write_raw: 같은 순서, 점마다 몽고메리 잉여 비압축 인코딩

사용 예시:
    >>> with open("response_0071", "rb") as f:
    ...     srs = Srs.read_partial(f, SrsFormat.perpetual_powers_of_tau(28), 10)
    >>> srs.downsize(8)
    >>> with open("srs-8", "wb") as f:
    ...     srs.write(f)
"""

import logging
import struct

from kzg_srs import formats
from kzg_srs.curve import BN254
from kzg_srs.errors import ValidationFailure
from kzg_srs.lagrange import g_to_lagrange
from kzg_srs.points import encode_montgomery_point
from kzg_srs.stream import write_all
from kzg_srs.validation import same_ratio

logger = logging.getLogger(__name__)


class Srs:
    """KZG SRS.

    속성:
        curve: PairingCurve
        k: 도메인 크기의 로그
        g: 단항식 기저 G1 점 리스트 (길이 2^k)
        g_lagrange: Lagrange 기저 G1 점 리스트 (길이 2^k)
        g2: G2 생성자
        s_g2: s · g2
    """

    def __init__(self, curve, k, g, g_lagrange, g2, s_g2):
        n = 1 << k
        if len(g) != n or len(g_lagrange) != n:
            raise ValueError(
                f"점 개수가 2^{k} = {n}와 맞지 않습니다: g={len(g)}, g_lagrange={len(g_lagrange)}"
            )
        self.curve = curve
        self.k = k
        self.g = g
        self.g_lagrange = g_lagrange
        self.g2 = g2
        self.s_g2 = s_g2

    def __eq__(self, other):
        if not isinstance(other, Srs):
            return NotImplemented
        return (
            self.curve is other.curve
            and (self.k, self.g, self.g_lagrange, self.g2, self.s_g2)
            == (other.k, other.g, other.g_lagrange, other.g2, other.s_g2)
        )

    def __repr__(self):
        return f"Srs(curve={self.curve.name}, k={self.k})"

    @property
    def n(self):
        return 1 << self.k

    def copy(self):
        """점 리스트를 복사한 새 Srs (점 자체는 불변 튜플이므로 공유한다)."""
        return Srs(self.curve, self.k, list(self.g), list(self.g_lagrange), self.g2, self.s_g2)

    # ─────────────────────────────────────────────────────────────
    # 디코딩
    # ─────────────────────────────────────────────────────────────

    @classmethod
    def read(cls, stream, fmt, curve=BN254, rng=None, num_workers=None):
        """파일에 저장된 차수 전체를 읽는다.

        네이티브 / snarkjs 형식은 파일 헤더에서, perpetual 형식은
        형식이 공개한 최대 차수에서 k를 정한다.
        """
        desired_k = formats.read_k(stream, fmt)
        stream.seek(0)
        return cls.read_partial(stream, fmt, desired_k, curve, rng, num_workers)

    @classmethod
    def read_partial(cls, stream, fmt, desired_k, curve=BN254, rng=None, num_workers=None):
        """차수 desired_k까지 읽고, 검증을 통과한 Srs를 반환한다.

        Args:
            stream: 읽기와 절대 위치 seek를 지원하는 바이너리 스트림
            fmt: SrsFormat
            desired_k: 읽을 차수 (파일의 차수 이하)
            curve: 곡선 제공자 (기본 BN254)
            rng: same-ratio 검사용 난수 제공자 (기본: 시스템 난수)
            num_workers: 병렬 작업자 수

        Returns:
            Srs

        Raises:
            DegreeTooLarge: desired_k가 파일의 차수보다 클 때
            MalformedPoint: 바이트가 곡선 위의 점이 아닐 때
            SrsIOError: 읽기/탐색 실패
            ValidationFailure: same-ratio 검사 실패
        """
        logger.info("%s 형식에서 k=%d SRS를 읽습니다 (%s)", fmt, desired_k, curve.name)
        g, g_lagrange, g2, s_g2 = formats.read_parts(
            stream, fmt, curve, desired_k, num_workers
        )
        if g_lagrange is None:
            g_lagrange = g_to_lagrange(curve, g, desired_k, num_workers)

        srs = cls(curve, desired_k, g, g_lagrange, g2, s_g2)
        srs.validate(rng, num_workers)
        logger.info("SRS 디코딩 및 검증 완료: k=%d", desired_k)
        return srs

    # ─────────────────────────────────────────────────────────────
    # 검증
    # ─────────────────────────────────────────────────────────────

    def is_valid(self, rng=None, num_workers=None):
        """same-ratio 페어링 검사 결과 (bool)."""
        return same_ratio(self.curve, self.g, self.g2, self.s_g2, rng, num_workers)

    def validate(self, rng=None, num_workers=None):
        """same-ratio 검사를 수행하고, 실패하면 예외를 던진다.

        Raises:
            ValidationFailure: 인접한 점들의 비율이 하나의 s로 일치하지 않을 때
        """
        if not self.is_valid(rng, num_workers):
            logger.error("same-ratio 검사 실패: k=%d", self.k)
            raise ValidationFailure(
                f"same-ratio 페어링 검사에 실패했습니다 (k={self.k}). "
                "파일이 손상되었거나 정상적인 SRS가 아닙니다"
            )

    # ─────────────────────────────────────────────────────────────
    # 축소 (downsize)
    # ─────────────────────────────────────────────────────────────

    def downsize(self, k):
        """차수를 k로 줄인다.

        g[i] = sⁱ·G1 은 도메인 크기와 무관하므로 앞의 2^k개만 남기고,
        g_lagrange는 새 도메인에 대해 다시 계산한다.

        Raises:
            ValueError: k가 현재 차수보다 클 때
        """
        if k > self.k:
            raise ValueError(f"현재 차수 k={self.k}보다 큰 k={k}로 줄일 수 없습니다")
        if k == self.k:
            return
        logger.info("SRS 축소: k=%d → k=%d", self.k, k)
        n = 1 << k
        g = self.g[:n]
        self.g_lagrange = g_to_lagrange(self.curve, g, k)
        self.g = g
        self.k = k

    # ─────────────────────────────────────────────────────────────
    # 직렬화
    # ─────────────────────────────────────────────────────────────

    def write(self, stream):
        """네이티브 압축 형식으로 기록한다."""
        g1, g2 = self.curve.g1, self.curve.g2
        write_all(stream, struct.pack("<I", self.k))
        for point in self.g:
            write_all(stream, g1.compress(point))
        for point in self.g_lagrange:
            write_all(stream, g1.compress(point))
        write_all(stream, g2.compress(self.g2))
        write_all(stream, g2.compress(self.s_g2))

    def write_raw(self, stream):
        """네이티브 raw 형식 (몽고메리 잉여 비압축)으로 기록한다."""
        g1, g2 = self.curve.g1, self.curve.g2
        write_all(stream, struct.pack("<I", self.k))
        for point in self.g:
            write_all(stream, encode_montgomery_point(g1, point))
        for point in self.g_lagrange:
            write_all(stream, encode_montgomery_point(g1, point))
        write_all(stream, encode_montgomery_point(g2, self.g2))
        write_all(stream, encode_montgomery_point(g2, self.s_g2))


def write_raw_split(curve, g, g2, s_g2, g1_stream, g2_stream):
    """G1 / G2 raw 점 배열을 별도 파일로 내보낸다 (외부 prover용)."""
    for point in g:
        write_all(g1_stream, encode_montgomery_point(curve.g1, point))
    write_all(g2_stream, encode_montgomery_point(curve.g2, g2))
    write_all(g2_stream, encode_montgomery_point(curve.g2, s_g2))

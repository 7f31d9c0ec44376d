"""
점 디코더 (Point Decoder)
=========================

세레모니 파일의 원시 바이트를 곡선 위의 점으로 복원한다.
인코딩 방식에 따라 두 가지 복원 절차가 필요하다.

**1. 명시적 부호 플래그가 있는 압축 점 (perpetual powers of tau)**:
  세레모니 도구는 x를 빅 엔디언으로 기록하고, 첫 바이트의 최상위 비트에
  "y > -y" 여부를 기록한다. 바이트를 뒤집으면 라이브러리의 압축 인코딩과
  같은 배치가 되므로 그대로 압축 해제하여 후보 점 P를 얻는다.
  압축 해제는 규약에 따라 P 또는 -P를 돌려줄 수 있으므로 둘 다 계산하고

      (P.y < (-P).y) XOR (뒤집은 바이트의 마지막 바이트 bit 7)

  이 참이면 P, 거짓이면 -P를 고른다. 다른 선택 규칙을 쓰면
  절반가량의 점의 부호가 조용히 뒤바뀐다.

**2. 몽고메리 형식 필드 원소 (snarkjs, raw 네이티브 형식)**:
  좌표는 몽고메리 잉여 x·R mod p 로 저장되어 있다.
  R = 2^(8·field_size) mod p 이므로 R⁻¹을 곱하면 실제 값이 복원된다.
  G2 좌표는 FQ 잉여 두 개 (c0, c1)가 한 덩어리로 묶여 있어,
  잉여를 먼저 분리한 뒤 각각에 R⁻¹을 곱한다.

사용 예시:
    >>> point = decode_ppot_point(BN254.g1, data)      # 32 바이트
    >>> point = decode_montgomery_point(BN254.g1, data)  # 64 바이트
"""

from kzg_srs.curve import SIGN_FLAG
from kzg_srs.errors import MalformedPoint
from kzg_srs.parallel import parallelize


# ─────────────────────────────────────────────────────────────────────
# 부호 결정 (perpetual powers of tau)
# ─────────────────────────────────────────────────────────────────────

def select_sign(group, candidate, flag):
    """후보 점과 명시적 부호 플래그로 최종 점을 고른다.

    세레모니 도구 고유의 부호 규약을 그대로 재현하는 순수 함수이다.

    Args:
        group: CurveGroup
        candidate: 압축 해제로 얻은 후보 점 P (아핀)
        flag: 뒤집은 바이트의 마지막 바이트 bit 7 (bool)

    Returns:
        P 또는 -P
    """
    minus_candidate = group.neg(candidate)
    if group.y_less(candidate, minus_candidate) ^ bool(flag):
        return candidate
    return minus_candidate


def decode_ppot_point(group, data):
    """perpetual powers of tau 압축 점 하나를 복원한다.

    Raises:
        MalformedPoint: 길이가 틀렸거나 곡선 위의 점이 아닐 때
    """
    if len(data) != group.size:
        raise MalformedPoint(
            f"{group.name} 점의 길이가 잘못되었습니다: {len(data)} != {group.size}"
        )
    reprs = bytes(reversed(data))
    candidate = group.decompress(reprs)
    if candidate is None:
        raise MalformedPoint(f"{group.name} 세레모니 점이 무한원점입니다")
    return select_sign(group, candidate, reprs[-1] & SIGN_FLAG)


# ─────────────────────────────────────────────────────────────────────
# 몽고메리 형식
# ─────────────────────────────────────────────────────────────────────

def mont_r(curve):
    """몽고메리 기수 R = 2^(8·field_size) mod p."""
    return (1 << (8 * curve.field_size)) % curve.field_modulus


def mont_r_inv(curve):
    return pow(mont_r(curve), -1, curve.field_modulus)


def decode_montgomery_point(group, data):
    """몽고메리 잉여로 저장된 비압축 점 (x ‖ y)을 복원한다.

    G1: x, y 각각 field_size 바이트.
    G2: x = (c0 ‖ c1), y = (c0 ‖ c1), 각 잉여가 field_size 바이트.
    모든 바이트가 0이면 무한원점으로 본다.

    Raises:
        MalformedPoint: 잉여가 p 이상이거나 곡선 위의 점이 아닐 때
    """
    if len(data) != group.raw_size:
        raise MalformedPoint(
            f"{group.name} 비압축 점의 길이가 잘못되었습니다: {len(data)} != {group.raw_size}"
        )
    if not any(data):
        return None
    curve = group.curve
    p = curve.field_modulus
    r_inv = mont_r_inv(curve)
    residues = curve.split_field_elements(data, 2 * group.degree)
    values = [residue * r_inv % p for residue in residues]
    x = group.element(values[:group.degree])
    y = group.element(values[group.degree:])
    return group.from_xy(x, y)


def encode_montgomery_point(group, point):
    """점을 몽고메리 잉여 비압축 인코딩으로 직렬화한다 (decode_montgomery_point의 역)."""
    if point is None:
        return bytes(group.raw_size)
    curve = group.curve
    r = mont_r(curve)
    x, y = point
    values = group.coeffs(x) + group.coeffs(y)
    return b"".join(
        (value * r % curve.field_modulus).to_bytes(curve.field_size, "little")
        for value in values
    )


# ─────────────────────────────────────────────────────────────────────
# 병렬 일괄 디코딩
# ─────────────────────────────────────────────────────────────────────

def decode_points(blob, size, decode, num_workers=None):
    """연속된 고정 길이 인코딩을 병렬로 디코딩한다.

    Args:
        blob: size 바이트 인코딩이 이어진 바이트열
        size: 점 하나의 인코딩 길이
        decode: bytes → 점
        num_workers: 병렬 작업자 수

    Returns:
        list: 디코딩된 점 리스트 (blob 순서)
    """
    n = len(blob) // size
    points = [None] * n

    def fill(chunk, start):
        return [
            decode(blob[(start + i) * size:(start + i + 1) * size])
            for i in range(len(chunk))
        ]

    return parallelize(points, fill, num_workers)

"""
곡선 제공자(Curve Provider): 페어링 친화 곡선 연산
====================================================

SRS 모듈 전체가 사용하는 "곡선 제공자" 능력(capability)을 정의한다.

**제공하는 것**:
  - G1 / G2 그룹 (좌표 필드, 생성자, 곡선 방정식 상수 b)
  - 스칼라 필드 위수 r, 기저 필드 위수 p, 필드 원소 바이트 크기
  - 점 덧셈 / 스칼라 곱셈 / 부호 반전 (py_ecc optimized 모듈 위임)
  - 다중 밀러 루프 + 최종 지수승(final exponentiation) 페어링 검사
  - 2의 거듭제곱 크기 평가 도메인을 위한 단위근(root of unity)
  - 라이브러리 고유의 압축 점 인코딩 (compress / decompress)

**점 표현**:
  아핀(affine) 좌표 튜플 (x, y)로 저장하고, 무한원점은 None으로 표현한다.
  산술 연산은 py_ecc의 사영(projective) 좌표 (x, y, z)에서 수행한 뒤
  normalize로 되돌린다.

**압축 인코딩**:
  x를 리틀 엔디언으로 기록 (G2는 x.c0 ‖ x.c1).
  마지막 바이트의 bit 7 = y의 홀짝(G2는 y.c0, y.c0 == 0 이면 y.c1의 홀짝),
  bit 6 = 무한원점 플래그.

사용 예시:
    >>> from kzg_srs.curve import BN254
    >>> P = BN254.g1.generator
    >>> data = BN254.g1.compress(P)
    >>> BN254.g1.decompress(data) == P  # True
"""

from py_ecc import optimized_bls12_381, optimized_bn128

from kzg_srs.errors import MalformedPoint


# 압축 인코딩 플래그 (마지막 바이트)
SIGN_FLAG = 0b1000_0000
INFINITY_FLAG = 0b0100_0000


# ─────────────────────────────────────────────────────────────────────
# 곡선 위의 그룹 (G1 / G2)
# ─────────────────────────────────────────────────────────────────────

class CurveGroup:
    """페어링 곡선의 한 그룹(G1 또는 G2).

    속성:
        name: "G1" 또는 "G2"
        degree: 좌표 필드의 확장 차수 (G1: 1, G2: 2)
        size: 압축 인코딩 바이트 수 (degree * field_size)
        raw_size: 비압축(raw) 인코딩 바이트 수 (2 * size)
        generator: 아핀 생성자 점
    """

    def __init__(self, curve, name, field, degree, b, generator):
        self.curve = curve
        self.name = name
        self.field = field
        self.degree = degree
        self.b = b
        self.size = degree * curve.field_size
        self.raw_size = 2 * self.size
        self.generator = self.to_affine(generator)

    def __repr__(self):
        return f"<{self.curve.name} {self.name}>"

    # ── 좌표 변환 ──

    def zero(self):
        """사영 좌표의 무한원점."""
        one = self.field.one()
        return (one, one, self.field.zero())

    def to_projective(self, point):
        if point is None:
            return self.zero()
        x, y = point
        return (x, y, self.field.one())

    def to_affine(self, point):
        if self.curve.ecc.is_inf(point):
            return None
        return self.curve.ecc.normalize(point)

    # ── 필드 원소 ↔ 정수 ──

    def coeffs(self, element):
        """필드 원소를 정수 계수 리스트로 분해한다 (FQ: [n], FQ2: [c0, c1])."""
        if self.degree == 1:
            return [element.n]
        return [int(c) for c in element.coeffs]

    def element(self, coeffs):
        """정수 계수 리스트로부터 필드 원소를 만든다."""
        if self.degree == 1:
            return self.field(coeffs[0])
        return self.field(list(coeffs))

    # ── 곡선 성질 ──

    def is_on_curve(self, point):
        if point is None:
            return True
        x, y = point
        return y * y == x * x * x + self.b

    def from_xy(self, x, y):
        """좌표 (x, y)가 곡선 위에 있는지 확인한 뒤 아핀 점을 반환한다.

        Raises:
            MalformedPoint: 점이 곡선 위에 있지 않을 때
        """
        point = (x, y)
        if not self.is_on_curve(point):
            raise MalformedPoint(f"{self.name} 점이 곡선 위에 있지 않습니다: x={x}")
        return point

    def neg(self, point):
        if point is None:
            return None
        x, y = point
        return (x, -y)

    def y_less(self, a, b):
        """두 점의 y 좌표 크기 비교: a.y < b.y.

        FQ는 정규(canonical) 정수로, FQ2는 (c1, c0) 사전식 순서로 비교한다.
        """
        ya = self.coeffs(a[1])
        yb = self.coeffs(b[1])
        return list(reversed(ya)) < list(reversed(yb))

    def sign(self, y):
        """압축 인코딩의 부호 비트: y의 홀짝.

        G2는 y.c0의 홀짝을 쓰고, y.c0 == 0 이면 y.c1의 홀짝을 쓴다.
        """
        coeffs = self.coeffs(y)
        if coeffs[0] == 0 and len(coeffs) > 1:
            return coeffs[1] & 1
        return coeffs[0] & 1

    # ── 제곱근 ──

    def sqrt(self, value):
        """필드 원소의 제곱근. 제곱잉여가 아니면 None을 반환한다.

        p ≡ 3 (mod 4) 인 기저 필드와 그 위의 FQ2 = FQ[u]/(u²+1)을 가정한다
        (bn254, bls12-381 모두 해당).
        """
        p = self.curve.field_modulus
        if self.degree == 1:
            root = self.field(pow(value.n, (p + 1) // 4, p))
            return root if root * root == value else None

        # Adj–Rodríguez-Henríquez 알고리즘 9 (p ≡ 3 mod 4)
        minus_one = -self.field.one()
        a1 = value ** ((p - 3) // 4)
        alpha = a1 * a1 * value
        c0, c1 = self.coeffs(alpha)
        a0 = self.field([c0, -c1]) * alpha  # alpha^p · alpha
        if a0 == minus_one:
            return None
        x0 = a1 * value
        if alpha == minus_one:
            root = self.field([0, 1]) * x0
        else:
            root = (self.field.one() + alpha) ** ((p - 1) // 2) * x0
        return root if root * root == value else None

    # ── 압축 인코딩 ──

    def compress(self, point):
        """점을 라이브러리 고유의 압축 인코딩으로 직렬화한다."""
        if point is None:
            data = bytearray(self.size)
            data[-1] |= INFINITY_FLAG
            return bytes(data)
        x, y = point
        field_size = self.curve.field_size
        data = bytearray(b"".join(c.to_bytes(field_size, "little") for c in self.coeffs(x)))
        if self.sign(y):
            data[-1] |= SIGN_FLAG
        return bytes(data)

    def decompress(self, data):
        """압축 인코딩에서 점을 복원한다.

        x로부터 y² = x³ + b 의 제곱근을 구하고, 부호 비트와 홀짝이 맞는 쪽을 고른다.

        Raises:
            MalformedPoint: 길이가 틀렸거나, x가 필드 범위를 벗어났거나,
                            x에 대응하는 곡선 위의 점이 없을 때
        """
        if len(data) != self.size:
            raise MalformedPoint(
                f"{self.name} 압축 인코딩 길이가 잘못되었습니다: {len(data)} != {self.size}"
            )
        data = bytearray(data)
        flags = data[-1] & (SIGN_FLAG | INFINITY_FLAG)
        data[-1] &= ~(SIGN_FLAG | INFINITY_FLAG) & 0xFF

        if flags & INFINITY_FLAG:
            if flags & SIGN_FLAG or any(data):
                raise MalformedPoint(f"{self.name} 무한원점 인코딩이 잘못되었습니다")
            return None

        x = self.element(self.curve.split_field_elements(bytes(data), self.degree))
        y = self.sqrt(x * x * x + self.b)
        if y is None:
            raise MalformedPoint(f"{self.name} x 좌표에 대응하는 점이 없습니다: x={x}")
        if self.sign(y) != bool(flags & SIGN_FLAG):
            y = -y
        return (x, y)


# ─────────────────────────────────────────────────────────────────────
# 페어링 곡선
# ─────────────────────────────────────────────────────────────────────

class PairingCurve:
    """페어링 친화 곡선 제공자.

    py_ecc의 optimized 모듈 하나를 감싸 SRS 모듈이 필요로 하는
    그룹 / 필드 / 페어링 능력을 하나의 객체로 묶는다.

    속성:
        name: 곡선 이름 ("bn254", "bls12-381")
        ecc: py_ecc optimized 모듈
        field_modulus: 기저 필드 위수 p
        curve_order: 스칼라 필드 위수 r
        field_size: 기저 필드 원소의 바이트 수
        g1, g2: CurveGroup
    """

    def __init__(self, name, ecc, field_size, scalar_generator, two_adicity):
        self.name = name
        self.ecc = ecc
        self.field_modulus = ecc.field_modulus
        self.curve_order = ecc.curve_order
        self.field_size = field_size
        self.scalar_generator = scalar_generator
        self.two_adicity = two_adicity
        self.g1 = CurveGroup(self, "G1", ecc.FQ, 1, ecc.b, ecc.G1)
        self.g2 = CurveGroup(self, "G2", ecc.FQ2, 2, ecc.b2, ecc.G2)

    def __repr__(self):
        return f"<PairingCurve {self.name}>"

    # ── 그룹 연산 (사영 좌표) ──

    def add(self, p1, p2):
        return self.ecc.add(p1, p2)

    def double(self, point):
        return self.ecc.double(point)

    def neg(self, point):
        return self.ecc.neg(point)

    def multiply(self, point, scalar):
        """스칼라 곱셈: scalar · point (scalar는 r로 축소된다)."""
        return self.ecc.multiply(point, int(scalar) % self.curve_order)

    # ── 스칼라 필드 ──

    def root_of_unity(self, k):
        """2^k차 원시 단위근 ω.

        ω = g^((r-1)/2^k), g는 스칼라 필드의 곱셈 생성자.

        Raises:
            ValueError: k가 스칼라 필드의 2-adicity를 초과할 때
        """
        if k < 0 or k > self.two_adicity:
            raise ValueError(f"k는 0 이상 {self.two_adicity} 이하여야 합니다: {k}")
        r = self.curve_order
        return pow(self.scalar_generator, (r - 1) >> k, r)

    def scalar_inverse(self, value):
        return pow(int(value) % self.curve_order, -1, self.curve_order)

    # ── 기저 필드 바이트 ──

    def split_field_elements(self, data, count):
        """리틀 엔디언 필드 원소 count개로 바이트열을 분해한다.

        Raises:
            MalformedPoint: 값이 p 이상일 때 (정규 표현이 아님)
        """
        size = self.field_size
        values = []
        for i in range(count):
            value = int.from_bytes(data[i * size:(i + 1) * size], "little")
            if value >= self.field_modulus:
                raise MalformedPoint(f"필드 원소가 위수 p를 벗어났습니다: {value:#x}")
            values.append(value)
        return values

    # ── 페어링 ──

    def pairing_check(self, pairs):
        """Π e(P_i, Q_i) == 1 인지 확인한다.

        각 쌍에 대해 밀러 루프만 수행하고 곱한 뒤,
        최종 지수승은 한 번만 적용한다 (multi-Miller-loop).

        Args:
            pairs: [(G1 아핀 점, G2 아핀 점), ...]

        Returns:
            bool: 곱이 GT의 항등원이면 True
        """
        acc = self.ecc.FQ12.one()
        for p, q in pairs:
            acc = acc * self.ecc.pairing(
                self.g2.to_projective(q),
                self.g1.to_projective(p),
                final_exponentiate=False,
            )
        return self.ecc.final_exponentiate(acc) == self.ecc.FQ12.one()


BN254 = PairingCurve(
    "bn254", optimized_bn128, field_size=32, scalar_generator=7, two_adicity=28
)

BLS12_381 = PairingCurve(
    "bls12-381", optimized_bls12_381, field_size=48, scalar_generator=7, two_adicity=32
)

CURVES = {curve.name: curve for curve in (BN254, BLS12_381)}


def get_curve(name):
    """이름으로 곡선 제공자를 찾는다."""
    try:
        return CURVES[name]
    except KeyError:
        raise ValueError(f"지원하지 않는 곡선입니다: {name}") from None

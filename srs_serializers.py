"""
SRS 데이터 직렬화 헬퍼
=======================

웹 서비스의 JSON 응답에 담을 수 있는 형태로 점과 SRS를 변환한다.
필드 원소는 10진 정수 문자열로 표현한다 (JSON 정수 범위 초과 방지).
"""


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    if point is None:
        return None
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))]
    ]


# ─── Srs ───

def serialize_srs_summary(srs, preview=4):
    """Srs → 요약 dict (앞쪽 몇 개 점만 포함)"""
    return {
        "curve": srs.curve.name,
        "k": srs.k,
        "n": srs.n,
        "g": [serialize_g1(p) for p in srs.g[:preview]],
        "g_lagrange": [serialize_g1(p) for p in srs.g_lagrange[:preview]],
        "g2": serialize_g2(srs.g2),
        "s_g2": serialize_g2(srs.s_g2),
    }


# ─── 축약 표시 ───

def _shorten(s):
    if len(s) <= 8:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열 (로그/표시용)"""
    if point is None:
        return "∞"
    return f"({_shorten(str(int(point[0])))}, {_shorten(str(int(point[1])))})"


def g2_short(point):
    """G2 point → 축약 문자열 (로그/표시용)"""
    if point is None:
        return "∞"
    x0 = str(int(point[0].coeffs[0]))
    x1 = str(int(point[0].coeffs[1]))
    return f"({_shorten(x0)}+{_shorten(x1)}i, ...)"

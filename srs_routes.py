"""
SRS Flask Blueprint — 세레모니 파일 검사/변환 엔드포인트
=========================================================

  GET  /srs/formats   지원하는 형식과 곡선 목록
  POST /srs/inspect   업로드한 세레모니 파일을 디코딩 + 검증하고 요약을 돌려준다
  POST /srs/convert   디코딩 + 검증 + (선택) 축소 후 네이티브 형식 파일을 돌려준다

폼 필드:
  file       세레모니 파일 (multipart)
  format     native | native_raw | perpetual_powers_of_tau | snarkjs
  curve      bn254 (기본) | bls12-381
  k          읽을 차수 (생략하면 파일 전체)
  max_k      perpetual 형식의 최대 차수 (기본: config.PPOT_MAX_K)
  target_k   /convert 전용, 축소할 차수
"""

import io
import logging

from flask import Blueprint, jsonify, request, send_file

from kzg_srs import config
from kzg_srs.curve import CURVES, get_curve
from kzg_srs.errors import DegreeTooLarge, MalformedPoint, SrsError, SrsIOError, ValidationFailure
from kzg_srs.formats import FORMAT_NAMES, SrsFormat
from kzg_srs.srs import Srs

from srs_serializers import serialize_srs_summary, g1_short, g2_short

logger = logging.getLogger(__name__)

srs_bp = Blueprint('srs', __name__, url_prefix='/srs')

ERROR_STATUS = {
    DegreeTooLarge: 400,
    MalformedPoint: 422,
    SrsIOError: 422,
    ValidationFailure: 422,
}


# ─── 요청 헬퍼 ───

def _int_field(name, default=None):
    value = request.form.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name}은(는) 정수여야 합니다: {value!r}") from None


def _decode_upload():
    """업로드한 파일을 디코딩하고 검증된 Srs를 반환한다."""
    upload = request.files.get("file")
    if upload is None:
        raise ValueError("file 필드가 필요합니다")
    curve = get_curve(request.form.get("curve", "bn254"))
    fmt = SrsFormat.parse(
        request.form.get("format", "native"), _int_field("max_k", config.PPOT_MAX_K)
    )
    stream = io.BytesIO(upload.read())
    k = _int_field("k")
    if k is None:
        return Srs.read(stream, fmt, curve)
    return Srs.read_partial(stream, fmt, k, curve)


def _error_response(e):
    status = ERROR_STATUS.get(type(e), 400)
    logger.warning("요청 처리 실패 (%d): %s", status, e)
    return jsonify({"error": type(e).__name__, "message": str(e)}), status


# ──────────────────────────────────────────────────────────────
# 엔드포인트
# ──────────────────────────────────────────────────────────────

@srs_bp.route("/formats")
def list_formats():
    """지원하는 형식과 곡선 목록."""
    return jsonify({"formats": FORMAT_NAMES, "curves": sorted(CURVES)})


@srs_bp.route("/inspect", methods=["POST"])
def inspect_srs():
    """세레모니 파일을 디코딩 + 검증하고 요약을 반환한다."""
    try:
        srs = _decode_upload()
    except (SrsError, ValueError) as e:
        return _error_response(e)

    summary = serialize_srs_summary(srs)
    summary["valid"] = True
    summary["g_short"] = [g1_short(p) for p in srs.g[:4]]
    summary["s_g2_short"] = g2_short(srs.s_g2)
    return jsonify(summary)


@srs_bp.route("/convert", methods=["POST"])
def convert_srs():
    """세레모니 파일을 네이티브 형식으로 변환하여 내려준다."""
    try:
        srs = _decode_upload()
        target_k = _int_field("target_k", srs.k)
        srs.downsize(target_k)
    except (SrsError, ValueError) as e:
        return _error_response(e)

    output = io.BytesIO()
    srs.write(output)
    output.seek(0)
    logger.info("네이티브 형식 SRS 전송: k=%d, %d 바이트", srs.k, output.getbuffer().nbytes)
    return send_file(
        output,
        mimetype="application/octet-stream",
        as_attachment=True,
        download_name=f"srs-{srs.curve.name}-{srs.k}",
    )

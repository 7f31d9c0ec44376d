"""
변환 도구 (CLI)
===============

perpetual powers of tau 세레모니 파일을 다른 형식으로 변환하는 두 도구.

  convert-from-perpetual-powers-of-tau SRC DST_PREFIX [K]
      차수 K로 읽은 뒤 k = K, K-1, ..., 1 각각에 대해
      네이티브 형식 파일 DST_PREFIX{k}를 쓴다.

  convert-ppot-to-barretenberg SRC DST_PREFIX [K]
      Lagrange 기저 없이 단항식 G1 배열과 G2 두 점만 읽어 검증한 뒤
      raw 형식 파일 DST_PREFIX-{K}.g1, DST_PREFIX-{K}.g2를 쓴다.

두 도구 모두 입출력/디코딩 오류가 나면 메시지를 출력하고 0이 아닌 코드로 끝난다.
"""

import argparse
import logging
import sys

from kzg_srs import config
from kzg_srs.curve import CURVES, get_curve
from kzg_srs.errors import DegreeTooLarge, SrsError, ValidationFailure
from kzg_srs.formats import SrsFormat, perpetual
from kzg_srs.srs import Srs, write_raw_split
from kzg_srs.validation import same_ratio

logger = logging.getLogger(__name__)


def _degree(value):
    """argparse 타입: 0 이상의 정수 차수."""
    k = int(value)
    if k < 0:
        raise argparse.ArgumentTypeError(f"차수는 0 이상이어야 합니다: {value}")
    return k


def _parser(description):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("src", help="perpetual powers of tau 세레모니 파일 경로")
    parser.add_argument("dst_prefix", help="출력 파일 경로 접두사")
    parser.add_argument(
        "k",
        nargs="?",
        type=_degree,
        default=config.DEFAULT_K,
        help=f"목표 차수 (기본값: {config.DEFAULT_K})",
    )
    parser.add_argument(
        "--max-degree",
        type=_degree,
        default=config.PPOT_MAX_K,
        help=f"세레모니 파일의 최대 차수 (기본값: {config.PPOT_MAX_K})",
    )
    parser.add_argument("--curve", choices=sorted(CURVES), default="bn254")
    parser.add_argument("--workers", type=int, default=None, help="병렬 작업자 수")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    return parser


def _setup_logging(level):
    logging.basicConfig(level=level.upper(), format=config.LOG_FORMAT)


def _run(action, args):
    try:
        action(args)
    except (SrsError, OSError) as e:
        logger.error("변환 실패: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


# ─────────────────────────────────────────────────────────────────────
# perpetual powers of tau → 네이티브 형식
# ─────────────────────────────────────────────────────────────────────

def convert_to_native(args):
    curve = get_curve(args.curve)
    fmt = SrsFormat.perpetual_powers_of_tau(args.max_degree)
    with open(args.src, "rb") as f:
        srs = Srs.read_partial(f, fmt, args.k, curve, num_workers=args.workers)

    for k in range(srs.k, 0, -1):
        downsized = srs.copy()
        downsized.downsize(k)
        path = f"{args.dst_prefix}{k}"
        with open(path, "wb") as f:
            downsized.write(f)
        logger.info("k=%d SRS를 %s에 기록했습니다", k, path)


def convert_from_perpetual_powers_of_tau(argv=None):
    args = _parser(
        "perpetual powers of tau 세레모니 파일을 차수별 네이티브 SRS 파일로 변환한다"
    ).parse_args(argv)
    _setup_logging(args.log_level)
    return _run(convert_to_native, args)


# ─────────────────────────────────────────────────────────────────────
# perpetual powers of tau → barretenberg raw 점 배열
# ─────────────────────────────────────────────────────────────────────

def convert_to_barretenberg(args):
    curve = get_curve(args.curve)
    if args.k > args.max_degree:
        raise DegreeTooLarge(args.k, args.max_degree)

    with open(args.src, "rb") as f:
        g = perpetual.read_g1s(f, curve, 1 << args.k, num_workers=args.workers)
        g2, s_g2 = perpetual.read_g2s(f, curve, args.max_degree, 2, num_workers=args.workers)

    if not same_ratio(curve, g, g2, s_g2, num_workers=args.workers):
        raise ValidationFailure(f"same-ratio 페어링 검사에 실패했습니다 (k={args.k})")

    g1_path = f"{args.dst_prefix}-{args.k}.g1"
    g2_path = f"{args.dst_prefix}-{args.k}.g2"
    with open(g1_path, "wb") as g1_file, open(g2_path, "wb") as g2_file:
        write_raw_split(curve, g, g2, s_g2, g1_file, g2_file)
    logger.info("G1 점 %d개를 %s, G2 점 2개를 %s에 기록했습니다", len(g), g1_path, g2_path)


def convert_ppot_to_barretenberg(argv=None):
    args = _parser(
        "perpetual powers of tau 세레모니 파일을 raw G1/G2 점 배열 파일로 변환한다"
    ).parse_args(argv)
    _setup_logging(args.log_level)
    return _run(convert_to_barretenberg, args)


def main_native():
    sys.exit(convert_from_perpetual_powers_of_tau())


def main_barretenberg():
    sys.exit(convert_ppot_to_barretenberg())

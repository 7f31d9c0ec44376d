"""
설정 값
=======

환경 변수에서 한 번 읽어 모듈 상수로 노출한다.
다른 모듈은 호출 시점에 `config.MAX_WORKERS`처럼 참조하므로
테스트에서는 monkeypatch로 값을 바꿀 수 있다.

  KZG_SRS_MAX_WORKERS           병렬 작업자 수 (기본: CPU 수)
  KZG_SRS_MSM_BUCKET_THRESHOLD  이 개수 이상이면 버킷(Pippenger) MSM 사용
  KZG_SRS_LOG_LEVEL             CLI / 웹 서비스 로그 레벨
  KZG_SRS_DEFAULT_K             CLI 기본 목표 차수
  KZG_SRS_PPOT_MAX_K            perpetual powers of tau 파일의 최대 차수
  KZG_SRS_MAX_UPLOAD_BYTES      웹 서비스 업로드 최대 크기
"""

import multiprocessing
import os


def _env_int(name, default):
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"환경 변수 {name}는 정수여야 합니다: {value!r}") from None


MAX_WORKERS = max(1, _env_int("KZG_SRS_MAX_WORKERS", multiprocessing.cpu_count()))

MSM_BUCKET_THRESHOLD = _env_int("KZG_SRS_MSM_BUCKET_THRESHOLD", 32)

LOG_LEVEL = os.environ.get("KZG_SRS_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

DEFAULT_K = _env_int("KZG_SRS_DEFAULT_K", 28)

# perpetual powers of tau 세레모니는 고정된 최대 차수를 공개한다
PPOT_MAX_K = _env_int("KZG_SRS_PPOT_MAX_K", 28)

MAX_UPLOAD_BYTES = _env_int("KZG_SRS_MAX_UPLOAD_BYTES", 64 * 1024 * 1024)

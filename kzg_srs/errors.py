"""
SRS 가져오기(import) 파이프라인의 오류 분류
==============================================

모든 오류는 디코딩 파이프라인을 즉시 중단시킨다. 어떤 경우든
해당 SRS를 암호학적 용도로 신뢰할 수 없다는 뜻이므로 복구하지 않는다.

  - SrsIOError:        파일 읽기/쓰기/탐색 실패 (짧은 읽기, 범위를 벗어난 seek)
  - DegreeTooLarge:    요청한 차수 k가 세레모니 파일의 차수를 초과
  - MalformedPoint:    곡선 위의 점이 아니거나 필드 원소가 정규 범위를 벗어남
  - ValidationFailure: 페어링 기반 same-ratio 검사 실패
"""


class SrsError(Exception):
    """SRS 디코딩/검증 오류의 기반 클래스."""


class SrsIOError(SrsError, OSError):
    """스트림 읽기/쓰기/탐색 실패."""


class DegreeTooLarge(SrsError, ValueError):
    """요청한 차수가 파일에 저장된 차수보다 크다."""

    def __init__(self, desired_k, k):
        super().__init__(
            f"요청한 차수 k={desired_k}가 파일의 차수 k={k}를 초과합니다"
        )
        self.desired_k = desired_k
        self.k = k


class MalformedPoint(SrsError, ValueError):
    """바이트열이 유효한 곡선 위의 점을 나타내지 않는다."""


class ValidationFailure(SrsError):
    """same-ratio 페어링 검사가 성립하지 않는다 (파일 손상 또는 비정상 SRS)."""

"""
병렬 청크 분배기 (Parallel Executor)
=====================================

길이 N의 시퀀스를 작업자 수만큼 연속된 구간으로 나누어
각 구간에 변환 함수를 독립적으로 적용한다.

  transform(chunk, start) → 채워진 chunk

구간끼리는 공유하는 가변 상태가 없으므로 잠금이 필요 없다.
결과는 [0, N)을 순차적으로 한 번에 변환한 것과 비트 단위로 같다.

py_ecc의 필드 연산은 순수 파이썬이라 GIL 아래에서 스레드끼리 직렬로 실행된다.
이 분배기가 주는 것은 처리량이 아니라 작업자 수와 무관한 결정적 청크 구조이며,
GIL을 놓는 백엔드로 바꾸더라도 호출부는 그대로 둘 수 있다.

사용 예시:
    >>> values = [None] * 8
    >>> parallelize(values, lambda chunk, start: [start + i for i in range(len(chunk))])
    >>> values  # [0, 1, 2, 3, 4, 5, 6, 7]
"""

from concurrent.futures import ThreadPoolExecutor

from kzg_srs import config


def chunk_ranges(n, num_workers):
    """[0, n)을 최대 num_workers개의 연속 구간 (start, end)로 나눈다."""
    if n == 0:
        return []
    num_workers = max(1, min(num_workers, n))
    chunk_size = (n + num_workers - 1) // num_workers
    return [(start, min(start + chunk_size, n)) for start in range(0, n, chunk_size)]


def parallelize(values, transform, num_workers=None):
    """values를 구간별로 나누어 transform을 적용하고, 결과를 제자리에 기록한다.

    Args:
        values: 가변 시퀀스 (list). 결과가 같은 위치에 기록된다.
        transform: (chunk, start) → 같은 길이의 리스트
        num_workers: 작업자 수. None이면 config.MAX_WORKERS.
                     1이면 스레드 없이 현재 스레드에서 실행한다.

    Returns:
        values (편의를 위해 같은 객체를 반환)

    Raises:
        ValueError: transform이 입력 구간과 다른 길이를 반환할 때
        transform이 던진 예외는 그대로 전파된다.
    """
    if num_workers is None:
        num_workers = config.MAX_WORKERS
    ranges = chunk_ranges(len(values), num_workers)

    def run(bounds):
        start, end = bounds
        result = list(transform(values[start:end], start))
        if len(result) != end - start:
            raise ValueError(
                f"변환 결과 길이 {len(result)}가 구간 길이 {end - start}와 다릅니다"
            )
        return start, end, result

    if len(ranges) <= 1:
        outputs = [run(bounds) for bounds in ranges]
    else:
        with ThreadPoolExecutor(max_workers=len(ranges)) as executor:
            outputs = list(executor.map(run, ranges))

    for start, end, result in outputs:
        values[start:end] = result
    return values

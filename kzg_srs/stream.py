"""
탐색 가능한(seekable) 바이너리 스트림 헬퍼
===========================================

세레모니 파일의 오프셋은 모두 계산으로 구하며 스캔하지 않는다.
범위를 벗어난 seek나 짧은 읽기는 즉시 SrsIOError로 실패한다.
"""

import io
import struct

from kzg_srs.errors import SrsIOError


def stream_size(stream):
    """스트림 전체 길이 (현재 위치는 보존한다)."""
    try:
        position = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(position)
    except (OSError, ValueError) as e:
        raise SrsIOError(f"스트림 길이를 구할 수 없습니다: {e}") from e
    return end


def seek(stream, offset):
    """절대 위치 offset으로 이동한다.

    Raises:
        SrsIOError: offset이 음수이거나 스트림 끝을 넘어설 때
    """
    size = stream_size(stream)
    if offset < 0 or offset > size:
        raise SrsIOError(f"오프셋 {offset}이 스트림 범위 [0, {size}]를 벗어났습니다")
    try:
        stream.seek(offset)
    except (OSError, ValueError) as e:
        raise SrsIOError(f"오프셋 {offset}으로 이동할 수 없습니다: {e}") from e


def read_exact(stream, n):
    """정확히 n 바이트를 읽는다.

    남은 길이보다 큰 요청은 버퍼를 할당하기 전에 실패한다
    (헤더의 차수가 터무니없이 클 때).

    Raises:
        SrsIOError: 남은 바이트가 n보다 적거나 읽기에 실패했을 때
    """
    try:
        remaining = stream_size(stream) - stream.tell()
    except (OSError, ValueError) as e:
        raise SrsIOError(f"스트림 위치를 구할 수 없습니다: {e}") from e
    if n < 0 or n > remaining:
        raise SrsIOError(
            f"짧은 읽기: {n} 바이트를 요청했지만 스트림에 {remaining} 바이트만 남았습니다"
        )
    try:
        data = stream.read(n)
    except (OSError, ValueError) as e:
        raise SrsIOError(f"{n} 바이트를 읽을 수 없습니다: {e}") from e
    if data is None or len(data) != n:
        got = 0 if data is None else len(data)
        raise SrsIOError(f"짧은 읽기: {n} 바이트를 요청했지만 {got} 바이트만 읽었습니다")
    return data


def read_u32(stream):
    """리틀 엔디언 u32."""
    return struct.unpack("<I", read_exact(stream, 4))[0]


def read_u64(stream):
    """리틀 엔디언 u64."""
    return struct.unpack("<Q", read_exact(stream, 8))[0]


def write_all(stream, data):
    try:
        stream.write(data)
    except (OSError, ValueError) as e:
        raise SrsIOError(f"쓰기 실패: {e}") from e

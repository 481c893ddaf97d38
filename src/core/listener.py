"""
리스너 선택/생성.

환경 변수 규칙:
- SOCKET만 설정 → unix://<SOCKET>
- PORT만 설정   → tcp://0.0.0.0:<PORT>
- 둘 다 없음    → tcp://127.0.0.1:5000
- 둘 다 설정    → LISTENER_CONFLICT (어느 쪽을 쓸지 추측하지 않음)

빈 문자열도 "설정됨"으로 본다 (존재 여부 기준).
"""

import logging
import os
import socket
import stat
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from src.domain.constants import (
    ALL_INTERFACES,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_PORT,
    ENV_SOCKET,
)
from src.domain.errors import ErrorCodes, FrontendError

logger = logging.getLogger(__name__)

LISTEN_BACKLOG = 2048  # uvicorn 기본값과 동일


@dataclass(frozen=True)
class ListenerSpec:
    """어디서 listen 할지."""
    family: str  # "unix" | "tcp"
    address: str | tuple[str, int]

    @property
    def url(self) -> str:
        if self.family == "unix":
            return f"unix://{self.address}"
        host, port = self.address
        return f"tcp://{host}:{port}"


def resolve_listener(environ: Mapping[str, str] | None = None) -> ListenerSpec:
    """
    환경 변수에서 리스너 결정.

    Args:
        environ: 환경 변수 (None이면 os.environ)

    Returns:
        ListenerSpec

    Raises:
        FrontendError: LISTENER_CONFLICT, LISTENER_INVALID_PORT
    """
    if environ is None:
        environ = os.environ

    sock_path = environ.get(ENV_SOCKET)
    port = environ.get(ENV_PORT)

    if sock_path is not None and port is not None:
        raise FrontendError(
            ErrorCodes.LISTENER_CONFLICT,
            message=f"found both {ENV_SOCKET}={sock_path!r} and {ENV_PORT}={port!r}",
        )

    if sock_path is not None:
        spec = ListenerSpec("unix", sock_path)
    elif port is not None:
        spec = ListenerSpec("tcp", (ALL_INTERFACES, _parse_port(port)))
    else:
        logger.info(f"unable to locate {ENV_SOCKET} or {ENV_PORT} environment variable")
        spec = ListenerSpec("tcp", (DEFAULT_HOST, DEFAULT_PORT))

    logger.info(f"listening on {spec.url}")
    return spec


def open_listener(spec: ListenerSpec) -> socket.socket:
    """
    바인드 + listen 완료된 소켓 생성.

    unix 경로에 이전 실행의 소켓 파일이 남아 있으면 지우고 바인드한다.
    아직 listen 중인 소켓이면 지우지 않고 실패.
    소켓이 아닌 파일이 있으면 건드리지 않고 실패.

    Raises:
        FrontendError: LISTENER_OPEN_FAILED
    """
    if spec.family == "unix":
        return _open_unix(str(spec.address))
    return _open_tcp(spec.address)  # type: ignore[arg-type]


# =============================================================================
# Internal
# =============================================================================


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise FrontendError(ErrorCodes.LISTENER_INVALID_PORT, port=value) from e

    if not 0 <= port <= 65535:
        raise FrontendError(ErrorCodes.LISTENER_INVALID_PORT, port=value)
    return port


def _open_unix(path: str) -> socket.socket:
    sock_file = Path(path)
    if sock_file.exists() or sock_file.is_symlink():
        if not stat.S_ISSOCK(sock_file.lstat().st_mode):
            raise FrontendError(
                ErrorCodes.LISTENER_OPEN_FAILED,
                address=path,
                reason="path exists and is not a socket",
            )
        if _socket_in_use(path):
            raise FrontendError(
                ErrorCodes.LISTENER_OPEN_FAILED,
                address=path,
                reason="socket in use",
            )
        logger.warning(f"Removing stale socket file {path}")
        sock_file.unlink()

    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(path)
        sock.listen(LISTEN_BACKLOG)
    except OSError as e:
        sock.close()
        raise FrontendError(
            ErrorCodes.LISTENER_OPEN_FAILED,
            address=path,
            reason=str(e),
        ) from e
    return sock


def _open_tcp(address: tuple[str, int]) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(address)
        sock.listen(LISTEN_BACKLOG)
    except OSError as e:
        sock.close()
        raise FrontendError(
            ErrorCodes.LISTENER_OPEN_FAILED,
            address=f"{address[0]}:{address[1]}",
            reason=str(e),
        ) from e
    return sock


def _socket_in_use(path: str) -> bool:
    """다른 프로세스가 아직 listen 중인지 (연결 거부 → 남은 파일)."""
    client = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        client.connect(path)
    except ConnectionRefusedError:
        return False
    except OSError as e:
        raise FrontendError(
            ErrorCodes.LISTENER_OPEN_FAILED,
            address=path,
            reason=str(e),
        ) from e
    finally:
        client.close()
    return True

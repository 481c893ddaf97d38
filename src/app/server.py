"""
서버 실행 루프: uvicorn 워커 스레드 + 메인 스레드 신호 처리.

흐름:
1. 미리 연 리스너 소켓으로 uvicorn을 별도 스레드에서 실행
2. 메인 스레드는 SIGINT / SIGTERM / SIGHUP 대기
   - SIGHUP → 템플릿 재로드 (실패 시 이전 세트 유지, 계속 실행)
   - SIGINT / SIGTERM → 루프 종료
3. graceful shutdown: 새 연결 거부 → 진행 중 요청 대기 → timeout 후 강제 종료

uvicorn은 메인 스레드가 아니면 자체 신호 핸들러를 설치하지 않는다.
"""

import asyncio
import logging
import queue
import signal
import socket
import threading
import time
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from src.core.config import Settings
from src.domain.errors import ErrorCodes, FrontendError
from src.render.templateset import TemplateSet

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)
RELOAD_SIGNAL = signal.SIGHUP

STARTUP_TIMEOUT = 10.0
SIGNAL_POLL_INTERVAL = 0.5
# lifespan shutdown 등 graceful timeout 이후 마무리에 주는 여유
SHUTDOWN_GRACE = 1.0


class ServerRunner:
    """uvicorn 서버 한 개의 수명 관리."""

    def __init__(
        self,
        app: FastAPI,
        listener: socket.socket,
        settings: Settings,
    ) -> None:
        self.app = app
        self.listener = listener
        self.settings = settings

        # 종료 후 정리할 unix 소켓 경로 (close 이후엔 getsockname 불가)
        # host/port/uds는 uvicorn 시작 로그용, 실제 바인드는 listener
        self.socket_path: Path | None = None
        if listener.family == socket.AF_UNIX:
            self.socket_path = Path(listener.getsockname())
            bind = {"uds": str(self.socket_path)}
        else:
            host, port = listener.getsockname()[:2]
            bind = {"host": host, "port": port}

        config = uvicorn.Config(
            app,
            log_config=None,
            timeout_graceful_shutdown=settings.shutdown_timeout,
            **bind,
        )
        self.server = uvicorn.Server(config)
        self.thread: threading.Thread | None = None
        self.error: BaseException | None = None

    # -------------------------------------------------------------------------
    # Start
    # -------------------------------------------------------------------------

    def start(self, startup_timeout: float = STARTUP_TIMEOUT) -> None:
        """
        서버 스레드 시작, 연결 수락 가능할 때까지 대기.

        Raises:
            FrontendError: SERVER_START_FAILED
        """
        self.thread = threading.Thread(target=self._run, name="uvicorn", daemon=True)
        self.thread.start()

        deadline = time.monotonic() + startup_timeout
        while not self.server.started:
            if not self.thread.is_alive():
                raise FrontendError(
                    ErrorCodes.SERVER_START_FAILED,
                    reason=repr(self.error) if self.error else "server exited during startup",
                )
            if time.monotonic() > deadline:
                self.server.should_exit = True
                raise FrontendError(
                    ErrorCodes.SERVER_START_FAILED,
                    reason=f"not ready after {startup_timeout:.1f}s",
                )
            time.sleep(0.01)

    def _run(self) -> None:
        try:
            asyncio.run(self.server.serve(sockets=[self.listener]))
        except (Exception, SystemExit) as e:
            # 메인 스레드가 check_alive()/start()에서 다시 올린다
            self.error = e
            logger.error(f"Server thread failed: {e!r}", exc_info=True)

    @property
    def running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def check_alive(self) -> None:
        """
        서버 스레드가 신호 없이 죽었는지 확인.

        Raises:
            FrontendError: SERVER_CRASHED
        """
        if self.thread is not None and not self.thread.is_alive():
            raise FrontendError(
                ErrorCodes.SERVER_CRASHED,
                reason=repr(self.error) if self.error else "server stopped unexpectedly",
            )

    # -------------------------------------------------------------------------
    # Signals
    # -------------------------------------------------------------------------

    def handle_signal(self, sig: int) -> bool:
        """
        신호 하나 처리.

        Returns:
            True → 계속 실행, False → 종료
        """
        logger.info(f"got signal {signal.Signals(sig).name}")
        if sig == RELOAD_SIGNAL:
            self.reload_templates()
            return True
        return False

    def reload_templates(self) -> bool:
        """
        템플릿 재로드 후 앱 상태 교체.

        Returns:
            성공 여부 (실패 시 이전 세트로 계속 서비스)
        """
        logger.info("reloading templates")
        try:
            template_set = TemplateSet.load(self.settings.templates_dir)
        except FrontendError as e:
            logger.error(f"failed to rebuild templates: {e}")
            return False

        self.app.state.templates = template_set
        logger.info("templates reloaded")
        return True

    def run_until_signal(self) -> None:
        """
        종료 신호가 올 때까지 메인 스레드에서 대기.

        신호 핸들러는 큐에 넣기만 하고, 처리는 루프에서 한다.
        루프를 빠져나오면 이전 핸들러를 복원한다.

        Raises:
            FrontendError: SERVER_CRASHED
        """
        received: queue.SimpleQueue[int] = queue.SimpleQueue()

        def enqueue(signum: int, frame: object) -> None:
            received.put(signum)

        previous = {sig: signal.signal(sig, enqueue) for sig in HANDLED_SIGNALS}
        try:
            while True:
                try:
                    sig = received.get(timeout=SIGNAL_POLL_INTERVAL)
                except queue.Empty:
                    self.check_alive()
                    continue

                if not self.handle_signal(sig):
                    break
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

    # -------------------------------------------------------------------------
    # Shutdown
    # -------------------------------------------------------------------------

    def shutdown(self, timeout: float | None = None) -> None:
        """
        graceful shutdown.

        새 연결은 즉시 거부, 진행 중 요청은 timeout까지 기다린 뒤 취소.

        Args:
            timeout: 대기 시간(초), None이면 settings.shutdown_timeout

        Raises:
            FrontendError: SHUTDOWN_TIMEOUT
        """
        if timeout is None:
            timeout = self.settings.shutdown_timeout

        logger.info("shutting down...")
        self.server.config.timeout_graceful_shutdown = timeout
        self.server.should_exit = True

        if self.thread is not None:
            self.thread.join(timeout + SHUTDOWN_GRACE)
            if self.thread.is_alive():
                self.server.force_exit = True
                self.thread.join(SHUTDOWN_GRACE)
                raise FrontendError(ErrorCodes.SHUTDOWN_TIMEOUT, timeout=timeout)

        # 시작 실패 시 uvicorn이 닫지 못한 리스너도 여기서 정리
        self.listener.close()
        self._remove_socket_file()

    def _remove_socket_file(self) -> None:
        if self.socket_path is None:
            return
        try:
            self.socket_path.unlink()
        except FileNotFoundError:
            pass


def serve(app: FastAPI, listener: socket.socket, settings: Settings) -> None:
    """
    서버 실행 → 종료 신호 대기 → graceful shutdown.

    Raises:
        FrontendError: SERVER_START_FAILED, SERVER_CRASHED, SHUTDOWN_TIMEOUT
    """
    runner = ServerRunner(app, listener, settings)
    try:
        runner.start()
        runner.run_until_signal()
    finally:
        runner.shutdown()
        logger.info("terminating")

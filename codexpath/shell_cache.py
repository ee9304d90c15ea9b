"""Single-flight, lifetime-scoped cache of the login-shell PATH.

Responsibilities:
- Run the login-shell capture at most once per cache instance.
- Serve non-blocking reads of the captured value.
- Notify every registered continuation exactly once with the same result.

One lock guards all mutable state. It is held only for short bookkeeping
sections, never while the shell runs or while callbacks execute.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Mapping

from loguru import logger

from .models import CaptureState, LoginShellPath
from .parsing import parse_positive_seconds
from .shell_capture import DEFAULT_CAPTURE_TIMEOUT_SECONDS, LoginShellPathCapturer
from .telemetry.logger import ResolutionLogger


CaptureCallback = Callable[[LoginShellPath | None], None]

_WORKER_THREAD_NAME = "codexpath-login-shell"


class LoginShellPathCache:
    """Process-lifetime memo of one login-shell PATH capture."""

    def __init__(
        self,
        capturer: LoginShellPathCapturer | None = None,
        thread_factory: Callable[..., Any] = threading.Thread,
        run_logger: ResolutionLogger | None = None,
    ) -> None:
        self._capturer = capturer or LoginShellPathCapturer(run_logger=run_logger)
        self._thread_factory = thread_factory
        self._run_logger = run_logger
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._captured: LoginShellPath | None = None
        self._completed = False
        self._capturing = False
        self._callbacks: list[CaptureCallback] = []

    @property
    def current(self) -> LoginShellPath | None:
        """Return the captured PATH, or `None` if not (successfully) captured yet.

        Never blocks on an in-flight capture and never starts one.
        """

        with self._lock:
            return self._captured

    @property
    def state(self) -> CaptureState:
        """Return the capture lifecycle state for diagnostics."""

        with self._lock:
            if self._capturing:
                return CaptureState.CAPTURING
            if not self._completed:
                return CaptureState.IDLE
            if self._captured is None:
                return CaptureState.FAILED
            return CaptureState.CAPTURED

    def capture_once(
        self,
        shell: str | None = None,
        timeout_seconds: float = DEFAULT_CAPTURE_TIMEOUT_SECONDS,
        on_finish: CaptureCallback | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Ensure the capture has been started exactly once.

        If the capture already finished, `on_finish` runs immediately on the
        calling thread. If it is in flight, `on_finish` is queued. Otherwise the
        callback is queued and a background worker starts the capture. A failed
        capture counts as finished and is not retried.
        """

        timeout = parse_positive_seconds(timeout_seconds, "timeout_seconds")

        with self._lock:
            completed = self._completed
            value = self._captured
            start_worker = False
            if not completed:
                if on_finish is not None:
                    self._callbacks.append(on_finish)
                if not self._capturing:
                    self._capturing = True
                    start_worker = True

        if completed:
            if on_finish is not None:
                self._invoke(on_finish, value)
            return

        if start_worker:
            try:
                worker = self._thread_factory(
                    target=self._run_capture,
                    args=(shell, timeout, env),
                    name=_WORKER_THREAD_NAME,
                    daemon=True,
                )
                worker.start()
            except Exception:
                with self._lock:
                    self._capturing = False
                    self._callbacks = []
                raise

    def wait(self, timeout_seconds: float | None = None) -> LoginShellPath | None:
        """Block until an in-flight capture finishes, then return `current`.

        Returns immediately when no capture was ever requested.
        """

        with self._lock:
            idle = not self._capturing and not self._completed
        if not idle:
            self._finished.wait(timeout_seconds)
        return self.current

    def _run_capture(
        self,
        shell: str | None,
        timeout_seconds: float,
        env: Mapping[str, str] | None,
    ) -> None:
        result: LoginShellPath | None = None
        try:
            result = self._capturer.capture(
                shell=shell,
                timeout_seconds=timeout_seconds,
                env=env,
            )
        except Exception as exc:
            if self._run_logger is not None:
                self._run_logger.log_capture_event("error", error_type=type(exc).__name__)
            else:
                logger.opt(exception=exc).warning("login-shell capture failed")
        finally:
            with self._lock:
                self._captured = result
                self._completed = True
                self._capturing = False
                callbacks = self._callbacks
                self._callbacks = []
            self._finished.set()

            for callback in callbacks:
                self._invoke(callback, result)

    def _invoke(self, callback: CaptureCallback, value: LoginShellPath | None) -> None:
        """Run one continuation, isolating its failure from the others."""

        try:
            callback(value)
        except Exception as exc:
            if self._run_logger is not None:
                self._run_logger.log_callback_failure(type(exc).__name__)
            else:
                logger.opt(exception=exc).warning("login-shell capture callback failed")


def create_login_shell_cache(run_logger: ResolutionLogger | None = None) -> LoginShellPathCache:
    """Create a cache backed by the real login-shell capturer.

    Create one per process and pass it to callers; there is no module-level instance.
    """

    return LoginShellPathCache(run_logger=run_logger)

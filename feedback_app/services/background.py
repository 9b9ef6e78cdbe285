import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait

from flask import current_app

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """
    Fire-and-forget execution for work the request must not wait on.

    Each task runs inside its own application context and a failure boundary:
    an exception is logged and kept on the returned future, never re-raised
    into the caller. The caller may ignore the future entirely.

    Whether tasks run inline is read from the spawning app's
    BACKGROUND_TASKS_EAGER unless ``eager`` is set on the runner itself.
    """

    def __init__(self, app=None):
        self._executor = None
        self.eager = None
        self._pending = set()
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault("BACKGROUND_TASKS_EAGER", False)
        previous = self._executor
        self._executor = ThreadPoolExecutor(
            max_workers=int(app.config.get("BACKGROUND_MAX_WORKERS", 4)),
            thread_name_prefix="feedback-bg",
        )
        # Already-submitted tasks still finish on the old pool.
        if previous is not None:
            previous.shutdown(wait=False)
        app.extensions["background"] = self

    def _is_eager(self, app) -> bool:
        if self.eager is not None:
            return bool(self.eager)
        return bool(app.config.get("BACKGROUND_TASKS_EAGER", False))

    def spawn(self, fn, *args, **kwargs) -> Future:
        app = current_app._get_current_object()
        name = getattr(fn, "__name__", repr(fn))

        def _run():
            with app.app_context():
                try:
                    return fn(*args, **kwargs)
                except Exception:
                    logger.exception("background task %s failed", name)
                    raise

        if self._is_eager(app) or self._executor is None:
            future = Future()
            try:
                future.set_result(_run())
            except Exception as exc:
                future.set_exception(exc)
            return future

        future = self._executor.submit(_run)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future):
        with self._lock:
            self._pending.discard(future)

    def drain(self, timeout=None):
        """Block until every in-flight task settles. Returns the futures still running."""
        with self._lock:
            pending = list(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not_done

    def shutdown(self, wait_for_tasks=True):
        if self._executor is not None:
            self._executor.shutdown(wait=wait_for_tasks)

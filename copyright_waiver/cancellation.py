"""Run-scoped cancellation driven by the operator's interrupt."""

import signal
import threading
from collections.abc import Callable
from typing import Any

from copyright_waiver.logging import get_logger

logger = get_logger()


class CancellationToken:
    """
    A one-way cancellation flag shared by everything in a run.

    Once cancelled it stays cancelled; the in-flight clone aborts and the
    remaining repositories are skipped.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds; return True if cancelled."""
        return self._event.wait(timeout)


def install_interrupt_handler(token: CancellationToken) -> Callable[[], None]:
    """
    Route SIGINT to ``token`` for the duration of a run.

    The first interrupt cancels the token. A second one restores the
    previous handler behaviour and raises KeyboardInterrupt.

    Must be called from the main thread.

    Args:
        token: The run's cancellation token

    Returns:
        A callable that restores the previous SIGINT handler
    """
    previous = signal.getsignal(signal.SIGINT)

    def handle_interrupt(signum: int, frame: Any) -> None:
        if token.cancelled:
            signal.signal(signal.SIGINT, previous)
            raise KeyboardInterrupt
        logger.warning(
            "Interrupt received: aborting the current clone and skipping the "
            "remaining repositories (press Ctrl-C again to exit immediately)"
        )
        token.cancel()

    signal.signal(signal.SIGINT, handle_interrupt)

    def restore() -> None:
        signal.signal(signal.SIGINT, previous)

    return restore

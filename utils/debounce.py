"""Trailing-edge debounce for plain callables."""

import threading
from functools import wraps
from typing import Any, Callable


def debounce(func: Callable[..., Any], wait: float) -> Callable[..., None]:
    """
    Return a wrapper that runs `func` once calls stop for `wait` seconds.
    Each call restarts the timer with its own arguments; `wrapper.cancel()`
    drops a pending call.
    """
    lock = threading.Lock()
    timer: threading.Timer | None = None

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        nonlocal timer
        with lock:
            if timer is not None:
                timer.cancel()
            timer = threading.Timer(wait, func, args=args, kwargs=kwargs)
            timer.daemon = True
            timer.start()

    def cancel() -> None:
        nonlocal timer
        with lock:
            if timer is not None:
                timer.cancel()
                timer = None

    wrapper.cancel = cancel  # type: ignore[attr-defined]
    return wrapper

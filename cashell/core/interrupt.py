"""
Interrupt handling for the interactive loop.

Ctrl+C clears the current input line instead of ending the session. After
enough presses in a short window a hint on how to exit is shown once, then
the counter drops far below zero so the hint is not repeated right away.
"""

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)

EXIT_HINT = '(to quit Cashell, use the "exit" command)'


def wants_interrupt_handling(platform: str) -> bool:
    """True for win32, cygwin and darwin"""
    return "win" in platform


class InterruptHandler:
    """Debounced Ctrl+C responder"""

    def __init__(self, interpreter, threshold: int = 5, interval: float = 3.0, cooldown: int = 10000):
        self.interpreter = interpreter
        self.threshold = threshold
        self.interval = interval
        self.cooldown = cooldown
        self.counter = 0
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._timer: Optional[threading.Thread] = None

    def install(self) -> None:
        self.interpreter.sigint(self.on_interrupt)
        self._stopped.clear()
        self._timer = threading.Thread(target=self._tick, name="cashell-sigint-reset", daemon=True)
        self._timer.start()

    def stop(self) -> None:
        self._stopped.set()
        if self._timer is not None:
            self._timer.join(timeout=self.interval)
            self._timer = None

    def _tick(self) -> None:
        while not self._stopped.wait(self.interval):
            self.reset()

    def reset(self) -> None:
        """Forget positive counts; a cooldown stays in place"""
        with self._lock:
            self.counter = 0 if self.counter > 0 else self.counter

    def on_interrupt(self) -> None:
        with self._lock:
            self.counter += 1
            show_hint = self.counter > self.threshold
            if show_hint:
                self.counter -= self.cooldown
        self.interpreter.submit("")
        if show_hint:
            self.interpreter.log(EXIT_HINT)

"""Tests for debounced interrupt handling."""

import time

import pytest

from cashell.core.interrupt import EXIT_HINT, InterruptHandler, wants_interrupt_handling
from cashell.core.kernel import Kernel


class FakeInterpreter:
    def __init__(self):
        self.submitted = []
        self.logged = []
        self.handler = None

    def sigint(self, handler):
        self.handler = handler

    def submit(self, line):
        self.submitted.append(line)

    def log(self, *parts):
        self.logged.append(" ".join(parts))


@pytest.fixture
def fake():
    return FakeInterpreter()


class TestPlatform:
    @pytest.mark.parametrize("platform,expected", [
        ("win32", True),
        ("cygwin", True),
        ("darwin", True),
        ("linux", False),
    ])
    def test_installed_where_platform_name_has_win(self, platform, expected) -> None:
        assert wants_interrupt_handling(platform) is expected


class TestInterruptHandler:
    """Verify counting, the hint and the cooldown."""

    def test_each_press_clears_the_line(self, fake) -> None:
        """An interrupt submits an empty line instead of exiting."""
        handler = InterruptHandler(fake)
        handler.on_interrupt()
        handler.on_interrupt()
        assert fake.submitted == ["", ""]
        assert fake.logged == []
        assert handler.counter == 2

    def test_hint_after_threshold_then_cooldown(self, fake) -> None:
        """The sixth quick press shows the hint, the seventh does not."""
        handler = InterruptHandler(fake, threshold=5, cooldown=10000)
        for _ in range(6):
            handler.on_interrupt()
        assert fake.logged == [EXIT_HINT]
        assert handler.counter == 6 - 10000

        handler.on_interrupt()
        assert fake.logged == [EXIT_HINT]

    def test_reset_clears_positive_counts_only(self, fake) -> None:
        handler = InterruptHandler(fake)
        handler.counter = 3
        handler.reset()
        assert handler.counter == 0
        handler.counter = -9995
        handler.reset()
        assert handler.counter == -9995

    def test_slow_presses_never_show_hint(self, fake) -> None:
        """A quiet interval between presses starts the count over."""
        handler = InterruptHandler(fake, threshold=5)
        for _ in range(20):
            handler.on_interrupt()
            handler.reset()
        assert fake.logged == []

    def test_install_registers_handler_and_timer(self, fake) -> None:
        """The timer resets the counter after the quiet interval."""
        handler = InterruptHandler(fake, interval=0.01)
        handler.install()
        try:
            assert fake.handler == handler.on_interrupt
            handler.on_interrupt()
            deadline = time.monotonic() + 2
            while handler.counter and time.monotonic() < deadline:
                time.sleep(0.01)
            assert handler.counter == 0
        finally:
            handler.stop()


class TestKernelInstall:
    """Verify the kernel only installs the handler where wanted."""

    def _kernel(self, config, storage, platform):
        return Kernel(config, storage=storage, platform=platform).load()

    def test_not_installed_on_linux(self, config, storage, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        kernel = self._kernel(config, storage, "linux")
        try:
            kernel.prepare_interactive()
            assert kernel.interrupts is None
        finally:
            kernel.close()

    def test_installed_on_windows(self, config, storage, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        kernel = self._kernel(config, storage, "win32")
        try:
            kernel.prepare_interactive()
            assert kernel.interrupts is not None
            assert kernel.interrupts.threshold == config.interrupt_threshold
        finally:
            kernel.close()
        assert kernel.interrupts is None

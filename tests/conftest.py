"""Shared fixtures for the Cashell test suite."""

import pytest

from cashell.config import Config
from cashell.core.environment import LocalEnvironment
from cashell.core.errors import CommandError
from cashell.core.interpreter import Interpreter
from cashell.core.kernel import Kernel, Session
from cashell.core.storage import LocalStorage

ENV_VARS = ("CASHELL_HOME", "CASHELL_CONFIG_DIR", "CASHELL_LOG_LEVEL", "CASHELL_FATAL")


@pytest.fixture(autouse=True)
def clean_cashell_env(monkeypatch):
    """Keep the developer's own settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def config(home):
    return Config(home_dir=home)


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "state" / "storage.json")


@pytest.fixture
def kernel(config, storage, tmp_path, monkeypatch):
    """A loaded kernel rooted in a temporary working directory."""
    monkeypatch.chdir(tmp_path)
    instance = Kernel(config, storage=storage, platform="linux")
    yield instance.load()
    instance.close()


@pytest.fixture
def interpreter():
    instance = Interpreter()
    yield instance
    instance.close()


@pytest.fixture
def session(interpreter):
    env = LocalEnvironment()
    interpreter.local_env = env
    return Session(interpreter=interpreter, env=env)


@pytest.fixture
def calls():
    return []


@pytest.fixture
def recorder(interpreter, calls):
    """Register a command that records its name, logs output and may fail."""

    def add(name, output=None, fail=False, callable=False):
        def action(ctx, args):
            calls.append(name)
            if output is not None:
                ctx.log(output)
            if fail:
                raise CommandError(f"{name} failed")

        return interpreter.command(name, action, f"records {name}", callable=callable)

    return add

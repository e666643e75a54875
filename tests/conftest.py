"""Shared fixtures for tmuxify tests."""

from pathlib import Path

import pytest

from tmuxify.client import SplitDirection


class RecordingClient:
    """Multiplexer client that records operations instead of running tmux.

    Args:
        running: Session names that already exist.
        failing: Operation names that report failure.
    """

    def __init__(self, running: set[str] | None = None, failing: set[str] | None = None) -> None:
        self.running = set(running or ())
        self.failing = set(failing or ())
        self.calls: list[tuple[object, ...]] = []

    def _record(self, *call: object) -> bool:
        self.calls.append(call)
        return call[0] not in self.failing

    def session_exists(self, session_name: str) -> bool:
        return session_name in self.running

    def create_session(self, session_name: str) -> bool:
        ok = self._record("create_session", session_name)
        if ok:
            self.running.add(session_name)
        return ok

    def attach_session(self, session_name: str) -> bool:
        self.calls.append(("attach_session", session_name))
        return session_name in self.running

    def new_window(self, session_name: str) -> bool:
        return self._record("new_window", session_name)

    def rename_window(self, session_name: str, title: str) -> bool:
        return self._record("rename_window", session_name, title)

    def split_window(self, session_name: str, direction: SplitDirection) -> bool:
        return self._record("split_window", session_name, direction)

    def send_keys(self, target: str, command: str) -> bool:
        return self._record("send_keys", target, command)

    def names(self) -> list[object]:
        """Return just the operation names, in order."""
        return [call[0] for call in self.calls]


@pytest.fixture
def client() -> RecordingClient:
    """A recording client with no running sessions."""
    return RecordingClient()


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temp dir and return the tmuxify config dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return tmp_path / "xdg" / "tmuxify"


@pytest.fixture
def make_client() -> type[RecordingClient]:
    """Factory for recording clients with custom running/failing sets."""
    return RecordingClient

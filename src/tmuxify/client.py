"""Tmux client for tmuxify.

The interpreter only talks to a ``MultiplexerClient``. ``TmuxClient`` is the
subprocess-backed implementation used by the CLI; tests supply their own.
"""

import os
import subprocess
from enum import StrEnum
from typing import Protocol

from tmuxify.errors import ClientInvocationError


def is_inside_tmux() -> bool:
    """Check if we're running inside a tmux session."""
    return os.environ.get("TMUX") is not None


class SplitDirection(StrEnum):
    """Direction for a pane split."""

    HORIZONTAL = "h"  # tmux default split, no flag
    VERTICAL = "v"


def pane_target(session_name: str, window_index: int, pane_index: int) -> str:
    """Build the tmux target string for a pane.

    Args:
        session_name: The session name.
        window_index: Zero-based window index.
        pane_index: Zero-based pane index within the window.

    Returns:
        Target in ``session:window.pane`` form.
    """
    return f"{session_name}:{window_index}.{pane_index}"


class MultiplexerClient(Protocol):
    """Operations the layout interpreter issues against a multiplexer.

    Every operation returns whether the multiplexer reported success and
    raises ``ClientInvocationError`` when it could not be invoked at all.
    """

    def session_exists(self, session_name: str) -> bool: ...

    def create_session(self, session_name: str) -> bool: ...

    def attach_session(self, session_name: str) -> bool: ...

    def new_window(self, session_name: str) -> bool: ...

    def rename_window(self, session_name: str, title: str) -> bool: ...

    def split_window(self, session_name: str, direction: SplitDirection) -> bool: ...

    def send_keys(self, target: str, command: str) -> bool: ...


class TmuxClient:
    """Multiplexer client that shells out to the tmux binary.

    Args:
        tmux: The tmux executable to run.
        dry_run: If True, record commands without executing them.
    """

    def __init__(self, tmux: str = "tmux", dry_run: bool = False) -> None:
        self.tmux = tmux
        self.dry_run = dry_run
        self.commands: list[str] = []

    def _run(self, args: list[str], interactive: bool = False) -> bool:
        """Run a tmux subcommand and report success.

        Args:
            args: Arguments after the tmux executable.
            interactive: If True, inherit the terminal instead of capturing output.

        Returns:
            True if tmux exited with status 0 (always True in dry run).

        Raises:
            ClientInvocationError: If tmux could not be executed.
        """
        cmd = [self.tmux, *args]
        self.commands.append(" ".join(cmd))
        if self.dry_run:
            return True
        return self._execute(cmd, interactive=interactive)

    @staticmethod
    def _execute(cmd: list[str], interactive: bool = False) -> bool:
        try:
            result = subprocess.run(cmd, capture_output=not interactive, check=False)
        except OSError as e:
            raise ClientInvocationError(cmd, str(e)) from e
        return result.returncode == 0

    def session_exists(self, session_name: str) -> bool:
        """Check if a tmux session with the given name exists.

        Runs even in dry run since it does not modify anything.
        """
        return self._execute([self.tmux, "has-session", "-t", session_name])

    def create_session(self, session_name: str) -> bool:
        """Create a detached session."""
        return self._run(["new-session", "-d", "-s", session_name])

    def attach_session(self, session_name: str) -> bool:
        """Attach the current terminal to a session.

        In dry run the result mirrors whether the session exists, so a preview
        takes the same branch a real run would.
        """
        if self.dry_run:
            self.commands.append(" ".join([self.tmux, "attach-session", "-t", session_name]))
            return self.session_exists(session_name)
        return self._run(["attach-session", "-t", session_name], interactive=True)

    def new_window(self, session_name: str) -> bool:
        return self._run(["new-window", "-t", session_name])

    def rename_window(self, session_name: str, title: str) -> bool:
        return self._run(["rename-window", "-t", session_name, title])

    def split_window(self, session_name: str, direction: SplitDirection) -> bool:
        if direction == SplitDirection.VERTICAL:
            return self._run(["split-window", "-v", "-t", session_name])
        return self._run(["split-window", "-t", session_name])

    def send_keys(self, target: str, command: str) -> bool:
        # C-m submits the command in the pane
        return self._run(["send-keys", "-t", target, command, "C-m"])

"""Exception types for tmuxify."""

from pathlib import Path


class TmuxifyError(Exception):
    """Base class for all tmuxify errors."""


class DocumentReadError(TmuxifyError):
    """The layout document could not be located or read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read layout document {path}: {reason}")


class DocumentParseError(TmuxifyError):
    """The layout document is not valid YAML."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse layout document {path}: {reason}")


class ClientInvocationError(TmuxifyError):
    """The tmux binary could not be invoked at all."""

    def __init__(self, command: list[str], reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to execute {' '.join(command)!r}: {reason}")


class ClientOperationFailure(TmuxifyError):
    """Tmux ran but reported a failure status (strict mode only)."""

    def __init__(self, operation: str, target: str) -> None:
        self.operation = operation
        self.target = target
        super().__init__(f"tmux {operation} failed for {target!r}")


class EditorLaunchError(TmuxifyError):
    """The editor for a project document could not be started."""

    def __init__(self, editor: str, reason: str) -> None:
        self.editor = editor
        self.reason = reason
        super().__init__(f"Cannot launch editor {editor!r}: {reason}")

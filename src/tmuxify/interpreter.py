"""Layout interpreter: turns a layout document into tmux operations.

Operations are issued strictly one after another. A session is created only
when attaching to it fails; an existing session is attached to as-is and never
reconciled against the document.
"""

from collections.abc import Sequence
from enum import StrEnum

from rich.console import Console

from tmuxify.client import MultiplexerClient, SplitDirection, pane_target
from tmuxify.document import (
    LayoutDocument,
    LayoutKind,
    PaneGroupSpec,
    SimpleWindow,
    SingleCommand,
    WindowSpec,
    resolve_session,
)
from tmuxify.errors import ClientOperationFailure

__all__ = [
    "LAYOUT_SPLITS",
    "SessionOutcome",
    "ensure_session",
    "populate",
    "provision",
    "resolve_session",
]

err_console = Console(stderr=True)

# One split per window; layouts not listed here issue no split
LAYOUT_SPLITS: dict[LayoutKind, SplitDirection] = {
    LayoutKind.MAIN_HORIZONTAL: SplitDirection.HORIZONTAL,
    LayoutKind.MAIN_VERTICAL: SplitDirection.VERTICAL,
}


class SessionOutcome(StrEnum):
    """How the session was acquired."""

    ATTACHED = "attached"
    CREATED = "created"


class _OperationReporter:
    """Decides what happens when a tmux operation reports failure."""

    def __init__(self, strict: bool = False, verbose: bool = False) -> None:
        self.strict = strict
        self.verbose = verbose

    def __call__(self, ok: bool, operation: str, target: str) -> None:
        if ok:
            return
        if self.strict:
            raise ClientOperationFailure(operation, target)
        if self.verbose:
            err_console.print(f"[yellow]Warning:[/] tmux {operation} failed for [bold]{target}[/]")


def ensure_session(client: MultiplexerClient, session_name: str, strict: bool = False) -> SessionOutcome:
    """Attach to a session, creating it detached if attaching fails.

    Only the attach result decides the branch.

    Args:
        client: The multiplexer client.
        session_name: The session name.
        strict: If True, raise when creating the session fails.

    Returns:
        ATTACHED if the session already existed, CREATED otherwise.
    """
    if client.attach_session(session_name):
        return SessionOutcome.ATTACHED
    _OperationReporter(strict=strict)(client.create_session(session_name), "new-session", session_name)
    return SessionOutcome.CREATED


def _populate_panes(
    client: MultiplexerClient,
    session_name: str,
    window_index: int,
    body: PaneGroupSpec,
    report: _OperationReporter,
) -> None:
    if isinstance(body, SingleCommand):
        target = pane_target(session_name, window_index, 0)
        report(client.send_keys(target, body.command), "send-keys", target)
        return

    kind = body.kind
    if kind is not None:
        report(client.split_window(session_name, LAYOUT_SPLITS[kind]), "split-window", session_name)

    # Panes past the first split rely on tmux's own split placement
    for pane_index, command in enumerate(body.panes):
        target = pane_target(session_name, window_index, pane_index)
        report(client.send_keys(target, command), "send-keys", target)


def _populate_window(
    client: MultiplexerClient,
    session_name: str,
    window_index: int,
    window: WindowSpec,
    is_first_window: bool,
    report: _OperationReporter,
) -> None:
    # The first window comes with the session
    if not is_first_window:
        report(client.new_window(session_name), "new-window", session_name)

    if isinstance(window, SimpleWindow):
        body: PaneGroupSpec = SingleCommand(window.command)
    else:
        report(client.rename_window(session_name, window.title), "rename-window", session_name)
        body = window.body

    _populate_panes(client, session_name, window_index, body, report)


def populate(
    client: MultiplexerClient,
    session_name: str,
    windows: Sequence[WindowSpec],
    strict: bool = False,
    verbose: bool = False,
) -> None:
    """Build every window and pane of a freshly created session.

    Args:
        client: The multiplexer client.
        session_name: The session to populate.
        windows: Window specs in document order.
        strict: If True, raise on the first operation tmux reports as failed.
        verbose: If True, print failed operations to stderr.

    Raises:
        ClientOperationFailure: In strict mode, when an operation fails.
        ClientInvocationError: If tmux could not be invoked.
    """
    report = _OperationReporter(strict=strict, verbose=verbose)
    is_first_window = True
    for window_index, window in enumerate(windows):
        _populate_window(client, session_name, window_index, window, is_first_window, report)
        is_first_window = False


def provision(
    client: MultiplexerClient,
    document: LayoutDocument,
    strict: bool = False,
    verbose: bool = False,
) -> SessionOutcome:
    """Provision the session described by a layout document and attach to it.

    Args:
        client: The multiplexer client.
        document: The parsed layout document.
        strict: If True, abort on the first failed operation.
        verbose: If True, print failed operations to stderr.

    Returns:
        Whether an existing session was attached or a new one created.
    """
    session_name = document.name
    outcome = ensure_session(client, session_name, strict=strict)
    if outcome == SessionOutcome.ATTACHED:
        return outcome

    populate(client, session_name, document.windows, strict=strict, verbose=verbose)
    # Best effort, the result is not inspected
    client.attach_session(session_name)
    return outcome


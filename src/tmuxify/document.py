"""Layout document model for tmuxify.

A layout document is a YAML file of the form::

    name: dev
    windows:
      - htop
      - editor: vim
      - server:
          layout: main-vertical
          panes:
            - npm start
            - npm test

The raw YAML tree is converted once into frozen tagged variants so the
interpreter never inspects value shapes itself. Entries with an unexpected
shape are dropped while building the model rather than failing the run.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import yaml

from tmuxify.errors import DocumentParseError, DocumentReadError

DEFAULT_SESSION_NAME = "default"
DEFAULT_WINDOW_TITLE = "shell"


class LayoutKind(StrEnum):
    """Recognized pane layouts."""

    MAIN_HORIZONTAL = "main-horizontal"
    MAIN_VERTICAL = "main-vertical"


@dataclass(frozen=True)
class SingleCommand:
    """A window body with one pane running one command."""

    command: str


@dataclass(frozen=True)
class PaneLayout:
    """A window body with several panes split according to a layout."""

    layout: str | None = None
    panes: tuple[str, ...] = ()

    @property
    def kind(self) -> LayoutKind | None:
        """Return the recognized layout kind, or None for absent/unknown values."""
        if self.layout is None:
            return None
        try:
            return LayoutKind(self.layout)
        except ValueError:
            return None


PaneGroupSpec = SingleCommand | PaneLayout


@dataclass(frozen=True)
class SimpleWindow:
    """A window with one pane running a command and the default tmux title."""

    command: str


@dataclass(frozen=True)
class NamedWindow:
    """A window with an explicit title and a pane group body."""

    title: str
    body: PaneGroupSpec


WindowSpec = SimpleWindow | NamedWindow


@dataclass(frozen=True)
class LayoutDocument:
    """A parsed layout document."""

    name: str = DEFAULT_SESSION_NAME
    windows: tuple[WindowSpec, ...] = ()


def resolve_session(tree: object) -> str:
    """Extract the session name from a raw document tree.

    Args:
        tree: The parsed YAML value.

    Returns:
        The ``name`` field when it is a string, otherwise ``"default"``.
    """
    if isinstance(tree, dict):
        name = tree.get("name")
        if isinstance(name, str):
            return name
    return DEFAULT_SESSION_NAME


def _build_body(value: object) -> PaneGroupSpec:
    if isinstance(value, str):
        return SingleCommand(value)
    if not isinstance(value, dict):
        # Renamed window with no content
        return PaneLayout()

    layout = value.get("layout")
    panes = value.get("panes")
    return PaneLayout(
        layout=layout if isinstance(layout, str) else None,
        panes=tuple(p for p in panes if isinstance(p, str)) if isinstance(panes, list) else (),
    )


def _build_windows(value: object) -> tuple[WindowSpec, ...]:
    if not isinstance(value, list):
        return ()

    windows: list[WindowSpec] = []
    for entry in value:
        if isinstance(entry, str):
            windows.append(SimpleWindow(entry))
        elif isinstance(entry, dict):
            # Each key of a window mapping is a window of its own
            for key, body in entry.items():
                title = key if isinstance(key, str) and key else DEFAULT_WINDOW_TITLE
                windows.append(NamedWindow(title=title, body=_build_body(body)))
    return tuple(windows)


def build_document(tree: object) -> LayoutDocument:
    """Convert a raw YAML tree into a typed layout document.

    Never raises: unrecognized or malformed constructs are skipped.

    Args:
        tree: The parsed YAML value.

    Returns:
        The layout document.
    """
    if not isinstance(tree, dict):
        return LayoutDocument()
    return LayoutDocument(name=resolve_session(tree), windows=_build_windows(tree.get("windows")))


def parse_document(text: str, source: Path | str = "<string>") -> LayoutDocument:
    """Parse YAML text into a layout document.

    Args:
        text: The YAML source.
        source: Where the text came from, for error messages.

    Returns:
        The layout document.

    Raises:
        DocumentParseError: If the text is not valid YAML.
    """
    try:
        tree = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentParseError(source, str(e)) from e
    return build_document(tree)


def load_document(path: Path) -> LayoutDocument:
    """Read and parse a layout document from disk.

    Args:
        path: Path to the YAML document.

    Returns:
        The layout document.

    Raises:
        DocumentReadError: If the file cannot be read.
        DocumentParseError: If the file is not valid YAML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(path, str(e)) from e
    return parse_document(text, source=path)

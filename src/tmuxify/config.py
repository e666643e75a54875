"""Configuration management for tmuxify."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from tmuxify.xdg_paths import get_config_file_path


@dataclass
class ConfigWarning:
    """A config validation warning."""

    file: str
    field_name: str
    message: str
    value: object = field(default=None, repr=False)


class Config(BaseModel):
    """Configuration settings for tmuxify."""

    tmux_binary: str = "tmux"
    # Abort on the first tmux operation that reports failure
    strict: bool = False
    # Document to load when no project name is given
    default_document: Path | None = None
    # Editor for `tmuxify new` / `tmuxify edit`; falls back to $EDITOR
    editor: str | None = None


def _read_config_data(path: Path) -> tuple[dict[str, object], list[ConfigWarning]]:
    """Read the raw config mapping, turning unreadable files into a warning."""
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        return {}, []
    except (OSError, yaml.YAMLError) as e:
        return {}, [ConfigWarning(file=str(path), field_name="(file)", message=f"Cannot load config: {e}")]
    return (cast(dict[str, object], raw) if isinstance(raw, dict) else {}), []


def load_config(config_path: Path | None = None, strict: bool = False) -> tuple[Config, list[ConfigWarning]]:
    """Load configuration from the user config file.

    Args:
        config_path: Optional path to config file. Uses default if None.
        strict: If True, do not attempt partial recovery on validation errors.

    Returns:
        Tuple of (loaded Config, list of ConfigWarnings).
    """
    path = config_path or get_config_file_path()
    data, warnings = _read_config_data(path)

    try:
        return Config.model_validate(data), warnings
    except ValidationError as e:
        for error in e.errors():
            warnings.append(
                ConfigWarning(
                    file=str(path),
                    field_name=".".join(str(loc) for loc in error["loc"]),
                    message=error["msg"],
                    value=error.get("input"),
                )
            )

        if strict:
            return Config(), warnings

        # Partial recovery: drop the offending top-level keys and retry
        for error in e.errors():
            if error["loc"]:
                data.pop(str(error["loc"][0]), None)
        try:
            return Config.model_validate(data), warnings
        except ValidationError:
            return Config(), warnings


def display_config_warnings(warnings: list[ConfigWarning], console: Console) -> None:
    """Print config warnings to a console as one yellow panel."""
    if not warnings:
        return

    lines = []
    for warning in warnings:
        got = f" (got: {warning.value!r})" if warning.value is not None else ""
        lines.append(
            Text.assemble((warning.field_name, "bold"), (f" {warning.message}", "yellow"), (got, "dim"))
        )
    title = f"[yellow]Config Warnings[/] [dim]{escape(warnings[0].file)}[/]"
    console.print(Panel(Text("\n").join(lines), title=title, border_style="yellow"))


"""Project layout document management for tmuxify."""

import re
import subprocess
from pathlib import Path

import yaml

from tmuxify.errors import EditorLaunchError
from tmuxify.xdg_paths import PROJECT_SUFFIX, get_config_dir, get_project_path

_PROJECT_NAME_RE = re.compile(r"^[a-z0-9]([a-z0-9_-]*[a-z0-9])?$")


def validate_project_name(name: str) -> str:
    """Validate that a project name is usable as a document file name.

    Args:
        name: The project name to validate.

    Returns:
        The validated name.

    Raises:
        ValueError: If the name is empty or contains unsupported characters.
    """
    if not name:
        raise ValueError("Project name cannot be empty")
    if not _PROJECT_NAME_RE.match(name):
        raise ValueError(
            f"Project name '{name}' must be lowercase alphanumeric with hyphens or underscores, "
            "no leading/trailing separators"
        )
    return name


def render_template(name: str) -> str:
    """Render a starter layout document for a new project."""
    data = {
        "name": name,
        "windows": [
            {"editor": "vim"},
            {
                "shell": {
                    "layout": "main-vertical",
                    "panes": ["git status", "git log --oneline -10"],
                }
            },
        ],
    }
    header = (
        f"# tmuxify project: {name}\n"
        "# windows: a command, a `title: command` pair, or a title with layout + panes.\n"
        "# layout: main-horizontal | main-vertical\n\n"
    )
    return header + yaml.dump(data, default_flow_style=False, sort_keys=False)


def create_project(name: str, config_dir: Path | None = None) -> Path:
    """Write a starter layout document for a project.

    Args:
        name: The project name.
        config_dir: Optional directory holding project documents. Uses default if None.

    Returns:
        Path to the new document.

    Raises:
        ValueError: If the name is invalid.
        FileExistsError: If the project already exists.
    """
    validate_project_name(name)
    path = get_project_path(name, config_dir)
    if path.exists():
        raise FileExistsError(f"Project '{name}' already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_template(name), encoding="utf-8")
    return path


def delete_project(name: str, config_dir: Path | None = None) -> Path:
    """Delete a project's layout document.

    Raises:
        ValueError: If the name is invalid.
        FileNotFoundError: If the project does not exist.
    """
    validate_project_name(name)
    path = get_project_path(name, config_dir)
    if not path.exists():
        raise FileNotFoundError(f"Project '{name}' not found: {path}")
    path.unlink()
    return path


def edit_project(name: str, editor: str, config_dir: Path | None = None) -> Path:
    """Open a project's layout document in an editor.

    Args:
        name: The project name.
        editor: Editor command, may include arguments.
        config_dir: Optional directory holding project documents. Uses default if None.

    Returns:
        Path to the edited document.

    Raises:
        ValueError: If the name is invalid.
        FileNotFoundError: If the project does not exist.
        EditorLaunchError: If the editor could not be started.
    """
    validate_project_name(name)
    path = get_project_path(name, config_dir)
    if not path.exists():
        raise FileNotFoundError(f"Project '{name}' not found: {path}")
    try:
        subprocess.run([*editor.split(), str(path)], check=False)
    except OSError as e:
        raise EditorLaunchError(editor, str(e)) from e
    return path


def list_projects(config_dir: Path | None = None) -> list[str]:
    """List project names that have a layout document, sorted."""
    directory = config_dir or get_config_dir()
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob(f"*{PROJECT_SUFFIX}") if p.is_file())

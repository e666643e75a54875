"""XDG-compliant path management for tmuxify."""

from pathlib import Path

from xdg_base_dirs import xdg_config_home

APP_NAME = "tmuxify"

# Document used when no project name is given
DEFAULT_DOCUMENT_PATH = Path("sample")

PROJECT_SUFFIX = ".yml"


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return xdg_config_home() / APP_NAME


def get_config_file_path() -> Path:
    """Get the config.yaml file path."""
    return get_config_dir() / "config.yaml"


def get_project_path(name: str, config_dir: Path | None = None) -> Path:
    """Get the layout document path for a project.

    Args:
        name: The project name.
        config_dir: Optional directory holding project documents. Uses default if None.

    Returns:
        Path to ``<config dir>/<name>.yml``.
    """
    return (config_dir or get_config_dir()) / f"{name}{PROJECT_SUFFIX}"


def resolve_document_path(name: str | None, default: Path | None = None) -> Path:
    """Resolve which layout document to load.

    Args:
        name: Optional project name.
        default: Document to use when no name is given. Falls back to the sample path.

    Returns:
        The project document path, or the default document path.
    """
    if name:
        return get_project_path(name)
    return default or DEFAULT_DOCUMENT_PATH

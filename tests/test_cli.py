"""Tests for the tmuxify CLI."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tmuxify import __version__
from tmuxify.__main__ import app

runner = CliRunner()

DEV_DOCUMENT = """\
name: dev
windows:
  - editor: vim
  - server:
      layout: main-vertical
      panes:
        - npm start
        - npm test
"""


def _completed(returncode: int) -> subprocess.CompletedProcess[bytes]:
    return subprocess.CompletedProcess[bytes](args=[], returncode=returncode)


@pytest.fixture
def project_dir(config_home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Config dir holding a `dev` project, outside of tmux."""
    monkeypatch.delenv("TMUX", raising=False)
    config_home.mkdir(parents=True)
    (config_home / "dev.yml").write_text(DEV_DOCUMENT, encoding="utf-8")
    return config_home


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """Should print the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestOpen:
    """Tests for opening a project."""

    def test_dry_run_new_session(self, project_dir: Path) -> None:
        """Should print the commands that build the session."""
        with patch("tmuxify.client.subprocess.run", return_value=_completed(1)) as mock_run:
            result = runner.invoke(app, ["dev", "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "Would create session" in result.output
        assert "tmux new-session -d -s dev" in result.output
        assert "tmux split-window -v -t dev" in result.output
        # Only has-session checks reach tmux in dry run
        assert all(call.args[0][1] == "has-session" for call in mock_run.call_args_list)

    def test_dry_run_running_session(self, project_dir: Path) -> None:
        """Should only attach when the session is already running."""
        with patch("tmuxify.client.subprocess.run", return_value=_completed(0)):
            result = runner.invoke(app, ["open", "dev", "-n"])
        assert result.exit_code == 0, result.output
        assert "already running" in result.output
        assert "new-session" not in result.output

    def test_creates_session(self, project_dir: Path) -> None:
        """Should run every tmux operation in order."""
        with patch("tmuxify.client.subprocess.run", return_value=_completed(1)) as mock_run:
            result = runner.invoke(app, ["dev"])
        assert result.exit_code == 0, result.output
        issued = [call.args[0][1] for call in mock_run.call_args_list]
        assert issued == [
            "attach-session",
            "new-session",
            "rename-window",
            "send-keys",
            "new-window",
            "rename-window",
            "split-window",
            "send-keys",
            "send-keys",
            "attach-session",
        ]

    def test_strict_mode_aborts_on_failure(self, project_dir: Path) -> None:
        """Should exit 1 on the first failed operation with --strict."""
        with patch("tmuxify.client.subprocess.run", return_value=_completed(1)) as mock_run:
            result = runner.invoke(app, ["dev", "--strict"])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert mock_run.call_count == 2

    def test_strict_mode_from_config(self, project_dir: Path) -> None:
        """Should honour strict: true in config.yaml."""
        (project_dir / "config.yaml").write_text("strict: true\n", encoding="utf-8")
        with patch("tmuxify.client.subprocess.run", return_value=_completed(1)):
            result = runner.invoke(app, ["dev"])
        assert result.exit_code == 1

    def test_missing_tmux(self, project_dir: Path) -> None:
        """Should exit 1 when tmux cannot be executed."""
        with patch("tmuxify.client.subprocess.run", side_effect=FileNotFoundError("tmux")):
            result = runner.invoke(app, ["dev"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_document(self, project_dir: Path) -> None:
        """Should fail before calling tmux when the document is missing."""
        with patch("tmuxify.client.subprocess.run") as mock_run:
            result = runner.invoke(app, ["nope"])
        assert result.exit_code == 1
        assert "Cannot read" in result.output
        mock_run.assert_not_called()

    def test_invalid_document(self, project_dir: Path) -> None:
        """Should fail before calling tmux when the document is not YAML."""
        (project_dir / "bad.yml").write_text("windows: [\n", encoding="utf-8")
        with patch("tmuxify.client.subprocess.run") as mock_run:
            result = runner.invoke(app, ["bad"])
        assert result.exit_code == 1
        assert "Cannot parse" in result.output
        mock_run.assert_not_called()

    def test_refuses_inside_tmux(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should refuse to nest sessions."""
        monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,1,0")
        with patch("tmuxify.client.subprocess.run") as mock_run:
            result = runner.invoke(app, ["dev"])
        assert result.exit_code == 1
        assert "inside a tmux session" in result.output
        mock_run.assert_not_called()

    def test_no_project_uses_sample(self, project_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should load ./sample when no project is given."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "sample").write_text("name: sample-session\nwindows:\n  - ls\n", encoding="utf-8")
        with patch("tmuxify.client.subprocess.run", return_value=_completed(1)):
            result = runner.invoke(app, ["--dry-run"])
        assert result.exit_code == 0, result.output
        assert "new-session -d -s sample-session" in result.output


class TestProjectCommands:
    """Tests for new/edit/delete/list commands."""

    def test_new_project(self, config_home: Path) -> None:
        """Should create a starter document."""
        result = runner.invoke(app, ["new", "web", "--no-edit"])
        assert result.exit_code == 0, result.output
        assert (config_home / "web.yml").exists()

    def test_new_existing_project(self, project_dir: Path) -> None:
        """Should refuse to overwrite a document."""
        result = runner.invoke(app, ["new", "dev"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_new_opens_editor_by_default(self, config_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should open the new document in $EDITOR unless --no-edit is given."""
        monkeypatch.setenv("EDITOR", "nano")
        with patch("tmuxify.projects.subprocess.run") as mock_run:
            result = runner.invoke(app, ["new", "web"])
        assert result.exit_code == 0, result.output
        assert mock_run.call_args.args[0] == ["nano", str(config_home / "web.yml")]

    def test_new_no_edit_skips_editor(self, config_home: Path) -> None:
        """Should not start an editor with --no-edit."""
        with patch("tmuxify.projects.subprocess.run") as mock_run:
            result = runner.invoke(app, ["new", "web", "--no-edit"])
        assert result.exit_code == 0, result.output
        mock_run.assert_not_called()

    def test_new_missing_editor(self, config_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should report an editor that cannot be started and keep the document."""
        monkeypatch.setenv("EDITOR", "no-such-editor")
        with patch("tmuxify.projects.subprocess.run", side_effect=FileNotFoundError("no-such-editor")):
            result = runner.invoke(app, ["new", "web"])
        assert result.exit_code == 1
        assert "Cannot launch editor" in result.output
        assert (config_home / "web.yml").exists()

    def test_edit_uses_configured_editor(self, project_dir: Path) -> None:
        """Should prefer the editor from config.yaml."""
        (project_dir / "config.yaml").write_text("editor: hx\n", encoding="utf-8")
        with patch("tmuxify.projects.subprocess.run") as mock_run:
            result = runner.invoke(app, ["edit", "dev"])
        assert result.exit_code == 0, result.output
        assert mock_run.call_args.args[0] == ["hx", str(project_dir / "dev.yml")]

    def test_edit_missing_project(self, project_dir: Path) -> None:
        """Should exit 1 for unknown projects."""
        result = runner.invoke(app, ["edit", "nope"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit_missing_editor(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should report an editor that cannot be started, not a missing project."""
        monkeypatch.setenv("EDITOR", "no-such-editor")
        with patch("tmuxify.projects.subprocess.run", side_effect=FileNotFoundError("no-such-editor")):
            result = runner.invoke(app, ["edit", "dev"])
        assert result.exit_code == 1
        assert "Cannot launch editor" in result.output
        assert "not found" not in result.output
        assert "tmuxify new" not in result.output

    def test_delete_with_yes(self, project_dir: Path) -> None:
        """Should delete without prompting."""
        result = runner.invoke(app, ["delete", "dev", "--yes"])
        assert result.exit_code == 0, result.output
        assert not (project_dir / "dev.yml").exists()

    def test_delete_cancelled(self, project_dir: Path) -> None:
        """Should keep the document when the prompt is declined."""
        result = runner.invoke(app, ["delete", "dev"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert (project_dir / "dev.yml").exists()

    def test_delete_missing_project(self, project_dir: Path) -> None:
        """Should exit 1 for unknown projects."""
        result = runner.invoke(app, ["delete", "nope", "-y"])
        assert result.exit_code == 1

    def test_list_projects(self, project_dir: Path) -> None:
        """Should list project names."""
        (project_dir / "api.yml").write_text("name: api\n", encoding="utf-8")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0, result.output
        assert "api" in result.output
        assert "dev" in result.output

    def test_list_empty(self, config_home: Path) -> None:
        """Should say when there are no projects."""
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No projects found" in result.output


class TestProjectNames:
    """Tests for project name checks on every command that takes a name."""

    @pytest.mark.parametrize("command", [["open", "../x"], ["delete", "../x", "-y"], ["edit", "../x"]])
    def test_rejects_path_escape(self, project_dir: Path, command: list[str]) -> None:
        """Should exit 1 before touching files outside the config dir."""
        outside = project_dir.parent / "x.yml"
        outside.write_text("name: x\nwindows:\n  - ls\n", encoding="utf-8")
        with (
            patch("tmuxify.client.subprocess.run") as mock_tmux,
            patch("tmuxify.projects.subprocess.run") as mock_editor,
        ):
            result = runner.invoke(app, command)
        assert result.exit_code == 1
        assert "Project name" in result.output
        assert outside.exists()
        mock_tmux.assert_not_called()
        mock_editor.assert_not_called()

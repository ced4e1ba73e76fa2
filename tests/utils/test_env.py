import os
from pathlib import Path
from unittest.mock import patch

from utils.env import _find_project_root, load_project_dotenv

# --- _find_project_root --- #


def test_find_project_root_in_start_dir(tmp_path: Path):
    (tmp_path / "pyproject.toml").touch()
    assert _find_project_root(start=tmp_path) == tmp_path


def test_find_project_root_walks_up(tmp_path: Path):
    (tmp_path / "pyproject.toml").touch()
    start_dir = tmp_path / "agents" / "nested"
    start_dir.mkdir(parents=True)
    assert _find_project_root(start=start_dir) == tmp_path


# --- load_project_dotenv --- #


@patch("utils.env.load_dotenv")
@patch("utils.env._find_project_root")
def test_load_dotenv_called_when_env_file_exists(mock_find_root, mock_load_dotenv, tmp_path: Path):
    env_file = tmp_path / ".env"
    env_file.touch()
    mock_find_root.return_value = tmp_path

    assert load_project_dotenv(tmp_path) is True

    mock_find_root.assert_called_once_with(tmp_path)
    mock_load_dotenv.assert_called_once_with(dotenv_path=env_file, override=False)


@patch("utils.env.load_dotenv")
@patch("utils.env._find_project_root")
def test_load_dotenv_skipped_without_env_file(mock_find_root, mock_load_dotenv, tmp_path: Path):
    mock_find_root.return_value = tmp_path

    assert load_project_dotenv() is False

    mock_find_root.assert_called_once_with(None)
    mock_load_dotenv.assert_not_called()


def test_load_dotenv_keeps_existing_variables(tmp_path: Path, monkeypatch):
    (tmp_path / "pyproject.toml").touch()
    (tmp_path / ".env").write_text("OPENAI_API_KEY=from-dotenv\nRETAIL_LOG_LEVEL=DEBUG\n")
    monkeypatch.setenv("OPENAI_API_KEY", "from-shell")
    monkeypatch.delenv("RETAIL_LOG_LEVEL", raising=False)

    load_project_dotenv(tmp_path)

    assert os.environ["OPENAI_API_KEY"] == "from-shell"
    assert os.environ["RETAIL_LOG_LEVEL"] == "DEBUG"
    # load_dotenv writes straight into os.environ; undo it for other tests
    monkeypatch.delenv("RETAIL_LOG_LEVEL")

import json
import logging
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

import main


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def write_config(directory, config):
    (directory / "config.json").write_text(json.dumps(config))


def test_main_runs_headless_until_max_steps(tmp_path, monkeypatch, capsys, restore_root_logger):
    write_config(tmp_path, {
        "simulation_parameters": {"seed": 5, "particle_count": 8},
        "run_control": {"max_steps": 3, "log_throttle_steps": 1, "profile": True},
        "visualization": {"window_width": 160, "window_height": 120},
        "logging": {"log_file": None},
    })
    monkeypatch.chdir(tmp_path)

    assert main.main() is None

    err = capsys.readouterr().err
    assert "Reached max_steps (3)" in err
    assert "Performance Profile" in err
    assert "Shutting Down" in err


def test_main_without_profile_skips_report(tmp_path, monkeypatch, capsys, restore_root_logger):
    write_config(tmp_path, {
        "run_control": {"max_steps": 2, "profile": False},
        "visualization": {"window_width": 160, "window_height": 120},
        "logging": {"log_file": None},
    })
    monkeypatch.chdir(tmp_path)

    main.main()

    err = capsys.readouterr().err
    assert "Reached max_steps (2)" in err
    assert "Performance Profile" not in err


def test_main_missing_config_exits_quietly(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main.main() is None

    assert "FATAL: Could not load config.json" in capsys.readouterr().out


def test_main_invalid_config_exits_quietly(tmp_path, monkeypatch, capsys):
    (tmp_path / "config.json").write_text("{broken")
    monkeypatch.chdir(tmp_path)

    assert main.main() is None

    assert "FATAL: Could not load config.json" in capsys.readouterr().out

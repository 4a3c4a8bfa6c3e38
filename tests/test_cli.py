from datetime import timedelta

import pytest
from sqlalchemy import create_engine

from foxdogs import __version__
from foxdogs.cli import main
from foxdogs.engine import Role
from foxdogs.results import GameResult, GameResultDao


def test_version(capsys) -> None:
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_best_on_empty_store(tmp_path, capsys) -> None:
    url = f"sqlite:///{tmp_path / 'scores.db'}"
    assert main(["--database", url]) == 0
    assert "No results yet." in capsys.readouterr().out


def test_best_lists_ranked_results(tmp_path, capsys) -> None:
    url = f"sqlite:///{tmp_path / 'scores.db'}"
    dao = GameResultDao(create_engine(url))
    dao.persist(GameResult(player="zoe", rounds=7, duration=timedelta(seconds=75), winner=Role.FOX))
    dao.persist(GameResult(player="max", rounds=4, duration=timedelta(seconds=30), winner=Role.DOG))

    assert main(["--database", url, "--best", "1"]) == 0
    out = capsys.readouterr().out
    assert "max" in out
    assert "zoe" not in out
    assert "0:30" in out


def test_unknown_log_level_is_a_usage_error(monkeypatch, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version", "--log-level", "chatty"])
    assert exc.value.code == 2

    monkeypatch.setenv("FOXDOGS_LOG_LEVEL", "chatty")
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 2
    assert "FOXDOGS_LOG_LEVEL" in capsys.readouterr().err


def test_log_level_is_case_insensitive(capsys) -> None:
    assert main(["--version", "--log-level", "debug"]) == 0

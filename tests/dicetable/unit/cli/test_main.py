from __future__ import annotations

from pathlib import Path

import pytest

from dicetable import main as cli
from dicetable.core.die import DIE_UNICODE_CHARACTERS


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "setup_logging", lambda: None)
    for name in ("WIDTH", "HEIGHT", "DIE_SIZE", "DISPERSION", "HOLD_DURATION"):
        monkeypatch.delenv(f"DICETABLE_{name}", raising=False)


def _faces(text: str) -> int:
    return sum(text.count(face) for face in DIE_UNICODE_CHARACTERS)


def test_main_prints_the_thrown_board(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--dice", "3", "--seed", "1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 10
    assert _faces("\n".join(lines)) == 3


def test_main_holds_and_throws_again(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--dice", "4", "--seed", "2", "--hold", "1"]) == 0
    first, second = capsys.readouterr().out.split("\n\n")
    assert _faces(first) == 4
    assert _faces(second) == 4
    assert second.count("*") == 1


def test_main_same_seed_same_output(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["--dice", "5", "--seed", "9"])
    first = capsys.readouterr().out
    cli.main(["--dice", "5", "--seed", "9"])
    assert capsys.readouterr().out == first


def test_main_reports_configuration_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DICETABLE_WIDTH", "0")
    assert cli.main(["--dice", "1"]) == 2


def test_main_rejects_more_dice_than_cells(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DICETABLE_WIDTH", "200")
    monkeypatch.setenv("DICETABLE_HEIGHT", "100")
    assert cli.main(["--dice", "3"]) == 2

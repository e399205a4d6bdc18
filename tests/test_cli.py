import pytest

from richfn.cli import main


def test_meet(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["meet", "optional", "non-empty-multi"]) == 0
    assert capsys.readouterr().out.strip() == "general_multi"


def test_meet_single_kind(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["meet", "EMPTY"]) == 0
    assert capsys.readouterr().out.strip() == "empty"


def test_widen_ok(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["widen", "single", "optional"]) == 0
    assert "ok" in capsys.readouterr().out


def test_widen_missing_edge(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["widen", "non_empty_multi", "optional"]) == 1
    out = capsys.readouterr().out
    assert "no widening edge" in out
    assert "general_multi" in out


def test_table(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["table"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 6
    assert lines[0].split() == [
        "meet", "single", "optional", "non_empty_multi", "general_multi", "empty",
    ]
    assert lines[2].split() == [
        "optional", "optional", "optional", "general_multi", "general_multi", "empty",
    ]


def test_no_command() -> None:
    assert main([]) == 1


def test_unknown_kind(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["meet", "several"])
    assert exc_info.value.code == 2
    assert "Unknown multiplicity kind" in capsys.readouterr().err

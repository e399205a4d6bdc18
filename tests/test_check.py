import itertools
import logging

import pytest

import richfn.mapping
from richfn.check import Severity, check_container, checked
from richfn.config import Settings
from richfn.containers import NOTHING, Just, Stream
from richfn.errors import CardinalityError
from richfn.mapping import QualifiedMapping
from richfn.multiplicity import Multiplicity


def test_valid_containers() -> None:
    assert check_container(Multiplicity.SINGLE, 3) == ()
    assert check_container(Multiplicity.OPTIONAL, Just(3)) == ()
    assert check_container(Multiplicity.OPTIONAL, NOTHING) == ()
    assert check_container(Multiplicity.NON_EMPTY_MULTI, [1]) == ()
    assert check_container(Multiplicity.NON_EMPTY_MULTI, Stream.of(1, 2)) == ()
    assert check_container(Multiplicity.GENERAL_MULTI, []) == ()


def test_single_rejects_containers() -> None:
    res = check_container(Multiplicity.SINGLE, Just(1))
    assert [d.check for d in res] == ["single_bare_value"]
    assert res[0].severity == Severity.ERROR


def test_optional_requires_maybe() -> None:
    res = check_container(Multiplicity.OPTIONAL, None)
    assert [d.check for d in res] == ["optional_maybe"]


def test_multi_requires_iterable() -> None:
    assert [d.check for d in check_container(Multiplicity.GENERAL_MULTI, 5)] == [
        "multi_iterable"
    ]
    assert [d.check for d in check_container(Multiplicity.NON_EMPTY_MULTI, Just(5))] == [
        "multi_iterable"
    ]


def test_non_empty_requires_an_element() -> None:
    res = check_container(Multiplicity.NON_EMPTY_MULTI, [])
    assert [d.check for d in res] == ["non_empty"]


def test_one_shot_iterator_is_not_consumed() -> None:
    it = iter([1, 2])
    res = check_container(Multiplicity.NON_EMPTY_MULTI, it)
    assert [d.check for d in res] == ["multi_restartable"]
    assert res[0].severity == Severity.WARNING
    assert list(it) == [1, 2]


def test_infinite_stream_checked_within_depth() -> None:
    assert check_container(Multiplicity.NON_EMPTY_MULTI, Stream(lambda: itertools.count()), 3) == ()


def test_empty_kind_is_never_checked() -> None:
    res = check_container(Multiplicity.EMPTY, None)
    assert [d.check for d in res] == ["empty_evaluated"]


def test_checked_raises_on_error() -> None:
    run = checked(Multiplicity.NON_EMPTY_MULTI, lambda x: [])
    with pytest.raises(CardinalityError, match="non_empty"):
        run(1)


def test_checked_logs_warnings(caplog: pytest.LogCaptureFixture) -> None:
    run = checked(Multiplicity.NON_EMPTY_MULTI, lambda x: itertools.count(x))
    with caplog.at_level(logging.WARNING, logger="richfn.check"):
        result = run(1)
    assert next(result) == 1
    assert "multi_restartable" in caplog.text


def test_mapping_check_flag() -> None:
    m = QualifiedMapping(Multiplicity.OPTIONAL, lambda x: x, check=True)
    with pytest.raises(CardinalityError):
        m.apply(1)
    unchecked = QualifiedMapping(Multiplicity.OPTIONAL, lambda x: x, check=False)
    assert unchecked.apply(1) == 1


def test_mapping_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        richfn.mapping, "get_settings", lambda: Settings(check_cardinality=True)
    )
    m = QualifiedMapping(Multiplicity.SINGLE, lambda x: Just(x))
    with pytest.raises(CardinalityError, match="single_bare_value"):
        m.apply(1)


def test_multi_check_runs_on_iteration() -> None:
    m = QualifiedMapping(Multiplicity.NON_EMPTY_MULTI, lambda x: [], check=True)
    stream = m.apply(1)
    with pytest.raises(CardinalityError):
        list(stream)


# ─────────────────────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────────────────────


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RICHFN_CHECK_CARDINALITY", raising=False)
    monkeypatch.delenv("RICHFN_CHECK_DEPTH", raising=False)
    monkeypatch.setattr("richfn.config.load_dotenv", lambda: False)
    assert Settings.from_env() == Settings(check_cardinality=False, check_depth=1)


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RICHFN_CHECK_CARDINALITY", "Yes")
    monkeypatch.setenv("RICHFN_CHECK_DEPTH", "4")
    assert Settings.from_env() == Settings(check_cardinality=True, check_depth=4)


@pytest.mark.parametrize("depth", ["zero", "0"])
def test_settings_reject_bad_depth(monkeypatch: pytest.MonkeyPatch, depth: str) -> None:
    monkeypatch.setenv("RICHFN_CHECK_DEPTH", depth)
    with pytest.raises(ValueError, match="RICHFN_CHECK_DEPTH"):
        Settings.from_env()

"""Tests for the component-switchable Debug logger."""

from __future__ import annotations

import logging

import pytest

from debug import COMPONENTS, Debug
from main import Config, make_debug


def test_components_start_off():
    debug = Debug()
    assert debug.components == {c: False for c in COMPONENTS}
    assert not debug.active("convert")


def test_enable():
    debug = Debug()
    debug.enable("stepping", "convert")
    assert debug.active("stepping")
    assert debug.active("convert")
    assert not debug.active("config")


@pytest.mark.parametrize("name", ["plugboard", "rotor", "alphabet"])
def test_unknown_component(name):
    with pytest.raises(ValueError):
        Debug().enable(name)


def test_log_respects_switches(caplog):
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    debug = Debug()
    debug.log("config", "hidden")
    debug.enable("config")
    debug.log("config", "shown")
    messages = [r.getMessage() for r in caplog.records]
    assert "[CONFIG] shown" in messages
    assert "[CONFIG] hidden" not in messages


def test_each_instance_gets_its_own_log_file(tmp_path):
    Debug()
    first, second = tmp_path / "first.log", tmp_path / "second.log"

    a = Debug(log_to=str(first))
    a.enable("config")
    a.log("config", "to first")
    a.close()

    b = Debug(log_to=str(second))
    b.enable("config")
    b.log("config", "to second")
    b.close()

    assert "[CONFIG] to first" in first.read_text(encoding="utf-8")
    assert "to second" not in first.read_text(encoding="utf-8")
    assert "[CONFIG] to second" in second.read_text(encoding="utf-8")


def test_close_detaches_file_handler(tmp_path):
    debug = Debug(log_to=str(tmp_path / "trace.log"))
    before = len(debug.logger.handlers)
    debug.close()
    assert len(debug.logger.handlers) == before - 1
    debug.close()


def test_make_debug_follows_verbose_flag():
    assert make_debug(Config()) is None
    debug = make_debug(Config(verbose=True))
    assert debug is not None
    assert debug.active("convert")
    assert debug.active("stepping")
    assert debug.active("config")

from __future__ import annotations

import argparse
import logging

import pytest

from beatlane.i18n import normalize_lang, pick_lang_from_config, tr
from beatlane.logging_setup import parse_level, resolve_level, setup_logging


@pytest.mark.parametrize("raw, expected", [(None, "en"), ("", "en"), ("zh", "zh-CN"), ("CN", "zh-CN"), ("en_US", "en"), ("fr", "fr")])
def test_normalize_lang(raw, expected):
    assert normalize_lang(raw) == expected


def test_tr_formats_and_falls_back_to_english():
    assert tr("en", "hud.score", score=30) == "Score: 30"
    assert tr("zh-CN", "hud.score", score=30) == "分数：30"
    assert tr("fr", "paused") == "PAUSED (P to resume)"
    assert tr("en", "no.such.key") == "no.such.key"
    assert tr("en", "no.such.key", "dflt") == "dflt"
    assert tr("en", "game_over.accuracy", ratio=75) == "Accuracy 75%"


def test_pick_lang_from_config():
    assert pick_lang_from_config({"ui": {"lang": "zh"}}) == "zh"
    assert pick_lang_from_config({"ui": "x"}) is None
    assert pick_lang_from_config(None) is None


def test_parse_level():
    assert parse_level("warn") == logging.WARNING
    assert parse_level(" debug ") == logging.DEBUG
    assert parse_level("loud") is None
    assert parse_level(None) is None


def test_resolve_level_priority(monkeypatch):
    monkeypatch.delenv("BEATLANE_LOG_LEVEL", raising=False)
    assert resolve_level(None) == logging.INFO
    assert resolve_level(argparse.Namespace(quiet=True, basic_debug=False)) == logging.WARNING
    assert resolve_level(argparse.Namespace(quiet=True, basic_debug=True)) == logging.DEBUG

    monkeypatch.setenv("BEATLANE_LOG_LEVEL", "error")
    assert resolve_level(argparse.Namespace(quiet=False, basic_debug=True)) == logging.ERROR


def test_setup_logging_is_a_noop_when_handlers_exist():
    root = logging.getLogger()
    before = list(root.handlers)
    if not before:
        root.addHandler(logging.NullHandler())
        before = list(root.handlers)
    setup_logging(argparse.Namespace(quiet=False, basic_debug=False, log_file=None))
    assert root.handlers == before

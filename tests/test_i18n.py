"""
Tests for label translation and language switching.
"""

from weekplanner.domain.models import DayKey
from weekplanner.i18n import (
    day_label,
    default_quotes,
    get_language,
    on_language_changed,
    remove_language_callback,
    set_language,
    tr,
)
from weekplanner.i18n.translations import DEFAULT_QUOTES, TRANSLATIONS


def test_every_language_has_the_same_keys():
    assert set(TRANSLATIONS["pt"]) == set(TRANSLATIONS["en"])


def test_tr_formats_and_falls_back_to_key():
    assert tr("report.busy", busy="1h", pct=6) == "busy 1h (6%)"
    assert tr("missing.key") == "missing.key"


def test_day_labels():
    assert day_label(DayKey.MON) == "Mon"
    assert day_label(DayKey.SUN, long=True) == "Sunday"
    assert day_label("xyz", long=True) == "Day"

    set_language("pt")
    assert day_label(DayKey.SAT) == "Sáb"
    assert day_label(DayKey.MON, long=True) == "Segunda-feira"


def test_unsupported_language_falls_back_to_english():
    set_language("de")
    assert get_language() == "en"


def test_default_quotes_follow_language():
    assert default_quotes() == DEFAULT_QUOTES["en"]
    set_language("pt")
    assert default_quotes() == DEFAULT_QUOTES["pt"]


def test_language_callbacks():
    seen = []
    on_language_changed(seen.append)
    try:
        set_language("pt")
    finally:
        remove_language_callback(seen.append)
    set_language("en")

    assert seen == ["pt"]

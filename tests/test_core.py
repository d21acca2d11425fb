"""Unit tests for termlaunch.core: matching, filtering, scrolling and launching."""

import logging

import pytest

from termlaunch import core, logger, settings
from termlaunch.catalog import FLATPAK, NATIVE, AppEntry, make_catalog, make_entry


def named_catalog(*names):
    return make_catalog([make_entry(name + ".desktop") for name in names])


# ─── Matching ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "name, query, expected",
    [
        pytest.param("Firefox", "", True, id="empty-query"),
        pytest.param("", "", True, id="empty-both"),
        pytest.param("Firefox", "fire", True, id="prefix"),
        pytest.param("Firefox", "FOX", True, id="upper-query"),
        pytest.param("LibreOffice Calc", "e c", True, id="inner-space"),
        pytest.param("Files", "fox", False, id="no-match"),
        pytest.param("Vim", "vimdiff", False, id="query-longer-than-name"),
        pytest.param("Äpfel", "äp", False, id="non-ascii-not-folded"),
        pytest.param("Äpfel", "Äp", True, id="non-ascii-exact"),
    ],
)
def test_matches(name, query, expected):
    assert core.matches(name, query) is expected


# ─── Filtering ───────────────────────────────────────────────────────────────


def test_filter_keeps_catalog_order():
    catalog = named_catalog("Files", "Firefox", "GIMP")
    assert core.get_filtered_indices(catalog, "fi") == [0, 1]


def test_filter_empty_query_returns_all_indices(catalog):
    assert core.get_filtered_indices(catalog, "") == list(range(len(catalog)))


def test_filter_without_matches_is_empty(catalog):
    assert core.get_filtered_indices(catalog, "xyz") == []


@pytest.mark.parametrize("query", ["", "f", "fi", "FIRE", "o", "mp", "zz"])
def test_filter_contains_exactly_the_matching_indices(catalog, query):
    result = core.get_filtered_indices(catalog, query)
    expected = [i for i, entry in enumerate(catalog)
                if core.matches(entry.display_name, query)]
    assert result == expected
    assert result == sorted(result)


# ─── Viewport ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "offset, highlight, capacity, expected",
    [
        pytest.param(0, 0, 5, 0, id="top"),
        pytest.param(0, 4, 5, 0, id="last-visible-row"),
        pytest.param(0, 5, 5, 1, id="one-below"),
        pytest.param(3, 20, 5, 16, id="far-below"),
        pytest.param(6, 2, 5, 2, id="above"),
        pytest.param(2, 3, 1, 3, id="capacity-one"),
        pytest.param(0, 3, 0, 3, id="capacity-zero-treated-as-one"),
    ],
)
def test_adjust_offset(offset, highlight, capacity, expected):
    assert core.adjust_offset(offset, highlight, capacity) == expected


def test_adjust_offset_always_contains_highlight():
    for capacity in range(1, 5):
        for offset in range(0, 8):
            for highlight in range(0, 8):
                new = core.adjust_offset(offset, highlight, capacity)
                assert 0 <= new <= highlight < new + capacity


def test_visible_range_is_cut_at_the_end_of_the_list():
    assert list(core.get_visible_range(0, 3, 5)) == [0, 1, 2]
    assert list(core.get_visible_range(2, 10, 3)) == [2, 3, 4]
    assert list(core.get_visible_range(0, 0, 3)) == []


# ─── Launching ───────────────────────────────────────────────────────────────


def test_launch_args_for_native_entry():
    entry = make_entry("firefox.desktop", NATIVE)
    assert core.get_launch_args(entry) == ["gtk-launch", "firefox.desktop"]


def test_launch_args_for_flatpak_entry():
    entry = make_entry("org.gimp.GIMP.desktop", FLATPAK)
    assert core.get_launch_args(entry) == ["flatpak", "run", "org.gimp.GIMP"]


def test_launch_args_follow_configured_starter():
    settings.update_config({"flatpak-starter": "flatpak run --user"})
    entry = make_entry("org.gimp.GIMP.desktop", FLATPAK)
    assert core.get_launch_args(entry) == [
        "flatpak", "run", "--user", "org.gimp.GIMP"]


class RecordingPopen:
    calls = []

    def __init__(self, args, **kwargs):
        self.calls.append((args, kwargs))


def test_launch_does_not_wait_for_the_application(monkeypatch):
    RecordingPopen.calls = []
    monkeypatch.setattr(core.subprocess, "Popen", RecordingPopen)
    core.launch(make_entry("firefox.desktop"))
    [(args, kwargs)] = RecordingPopen.calls
    assert args == ["gtk-launch", "firefox.desktop"]
    assert kwargs["start_new_session"] is True
    assert kwargs["stdout"] is kwargs["stderr"]


def test_launch_raises_when_helper_is_missing(monkeypatch):
    def missing(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(core.subprocess, "Popen", missing)
    with pytest.raises(core.LaunchError, match="firefox"):
        core.launch(AppEntry("firefox", "firefox.desktop", NATIVE))


def test_launch_is_only_reported_when_verbose(monkeypatch, caplog):
    RecordingPopen.calls = []
    monkeypatch.setattr(core.subprocess, "Popen", RecordingPopen)
    logger.enable("termlaunch", logging.INFO)
    with caplog.at_level(logging.DEBUG):
        logger.LOGGER.setLevel(logging.INFO)
        core.launch(make_entry("firefox.desktop"))
        assert caplog.records == []
        logger.LOGGER.setLevel(logging.DEBUG)
        core.launch(make_entry("firefox.desktop"))
    [record] = caplog.records
    assert record.levelname == "DEBUG"
    assert "gtk-launch firefox.desktop" in record.message

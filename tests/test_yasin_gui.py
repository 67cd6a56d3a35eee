"""Headless walkthroughs of the memorize screen."""

import logging

import pytest
from textual.containers import ScrollableContainer, Vertical
from textual.logging import TextualHandler
from textual.widgets import Button, OptionList, Static

from yasin import YASIN_VERSES, Verse, VerseKey
import yasin_gui
from yasin_gui import YasinApp, page_label, toggle_label, verse_option_label

SIZE = (100, 40)


def panels(app):
    screen = app.screen
    return (
        screen.query_one("#verse-panel", Vertical).display,
        screen.query_one("#verse-detail", ScrollableContainer).display,
    )


def shown(app, selector):
    return str(app.screen.query_one(selector, Static).render())


async def pick_verse(pilot, verse_number):
    picker = pilot.app.screen.query_one("#verse-picker", OptionList)
    picker.highlighted = verse_number - 1
    picker.action_select()
    await pilot.pause()


# ── Label helpers ─────────────────────────────────────────────────────────────


def test_page_label_carries_badge():
    assert page_label(1, 100 / 3) == "1. Sayfa  33%"
    assert page_label(2, 0) == "2. Sayfa  0%"


def test_verse_option_marks_memorized():
    verse = YASIN_VERSES[2]
    assert verse_option_label(verse, False) == "3. Ayet"
    assert verse_option_label(verse, True) == "3. Ayet ✓"


def test_toggle_label_follows_state():
    assert toggle_label(True) == "✓ Ezberlendi"
    assert toggle_label(False) == "○ Ezberle"


# ── Screen ────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_starts_with_page_grid_only():
    app = YasinApp()
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        assert panels(app) == (False, False)
        button = app.screen.query_one("#page-1", Button)
        assert "0%" in str(button.label)
        assert button.has_class("partial")


@pytest.mark.asyncio
async def test_page_then_verse_then_toggle():
    app = YasinApp()
    async with app.run_test(size=SIZE) as pilot:
        await pilot.click("#page-1")
        await pilot.pause()
        assert app.verse_selection.page == 1
        assert panels(app) == (True, False)
        picker = app.screen.query_one("#verse-picker", OptionList)
        assert picker.option_count == 6
        assert [picker.get_option_at_index(i).id for i in range(6)] == [
            f"verse-{n}" for n in range(1, 7)
        ]

        await pick_verse(pilot, 3)
        verse = YASIN_VERSES[2]
        assert app.verse_selection.verse == verse
        assert panels(app) == (True, True)
        assert verse.arabic_text in shown(app, "#detail-arabic")
        assert verse.arabic_reading in shown(app, "#detail-reading")
        assert verse.turkish_meaning in shown(app, "#detail-meaning")
        toggle = app.screen.query_one("#btn-toggle", Button)
        assert str(toggle.label) == "○ Ezberle"

        await pilot.press("m")
        assert app.memorized.is_memorized(VerseKey(1, 3))
        assert str(toggle.label) == "✓ Ezberlendi"
        assert toggle.variant == "success"
        assert "17%" in str(app.screen.query_one("#page-1", Button).label)
        prompts = [str(picker.get_option_at_index(i).prompt) for i in range(6)]
        assert prompts[2] == "3. Ayet ✓"
        assert all("✓" not in p for i, p in enumerate(prompts) if i != 2)


@pytest.mark.asyncio
async def test_full_page_renders_complete_badge():
    app = YasinApp()
    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("1")
        for number in range(1, 7):
            await pick_verse(pilot, number)
            await pilot.press("m")
            if number == 2:
                button = app.screen.query_one("#page-1", Button)
                assert "33%" in str(button.label)
        button = app.screen.query_one("#page-1", Button)
        assert "100%" in str(button.label)
        assert button.has_class("complete")
        assert not button.has_class("partial")


@pytest.mark.asyncio
async def test_reselecting_page_hides_detail():
    app = YasinApp()
    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("1")
        await pick_verse(pilot, 2)
        assert panels(app) == (True, True)
        await pilot.press("1")
        assert app.verse_selection.verse is None
        assert panels(app) == (True, False)


@pytest.mark.asyncio
async def test_toggle_without_verse_changes_nothing():
    app = YasinApp()
    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("1")
        await pilot.press("m")
        assert app.memorized.memorized_keys() == set()


@pytest.mark.asyncio
async def test_arrow_keys_walk_verses_and_escape_clears():
    app = YasinApp()
    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("1", "right", "right")
        assert app.verse_selection.verse.verse_number == 2
        await pilot.press("left")
        assert app.verse_selection.verse.verse_number == 1
        await pilot.press("escape")
        assert app.verse_selection.page is None
        assert panels(app) == (False, False)


@pytest.mark.asyncio
async def test_one_button_per_page():
    verses = [
        Verse(1, 1, "a", "b", "c"),
        Verse(2, 1, "d", "e", "f"),
        Verse(2, 2, "g", "h", "i"),
    ]
    app = YasinApp(verses)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("2")
        assert len(app.screen.query(".page-btn")) == 2
        assert app.screen.query_one("#page-2", Button).variant == "primary"
        assert app.screen.query_one("#verse-picker", OptionList).option_count == 2


@pytest.mark.asyncio
async def test_switching_verses_replaces_detail_text():
    app = YasinApp()
    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("1")
        await pick_verse(pilot, 5)
        await pick_verse(pilot, 2)
        assert YASIN_VERSES[1].arabic_reading in shown(app, "#detail-reading")
        assert YASIN_VERSES[4].arabic_reading not in shown(app, "#detail-reading")


def test_app_keeps_catalog_keys():
    app = YasinApp()
    assert app.verse_keys == frozenset(v.key for v in YASIN_VERSES)
    assert app.toggle_memorized(1, 4) is True
    assert app.memorized.is_memorized(VerseKey(1, 4))


def test_configure_logging_routes_to_textual(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    yasin_gui.configure_logging()
    assert calls[0]["level"] == yasin_gui.YASIN_LOG_LEVEL == "INFO"
    assert isinstance(calls[0]["handlers"][0], TextualHandler)
    assert calls[0]["force"] is True

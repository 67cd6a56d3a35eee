#!/usr/bin/env python3
"""
Yasin Suresi — Textual TUI Memorization Tracker
===============================================
Pick a page, pick a verse, read its Arabic text, reading and Turkish
meaning, and mark it memorized. Each page button carries a completion badge.

Run:
    pip install textual
    python yasin_gui.py
"""

from __future__ import annotations

import logging

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Grid, Horizontal, ScrollableContainer, Vertical
from textual.logging import TextualHandler
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, OptionList, Rule, Static
from textual.widgets.option_list import Option

from yasin import (
    YASIN_VERSES,
    DisplayMode, MemorizationState, SelectionState, Verse, VerseKey,
    format_percent, group_by_page, is_complete,
    overall_percentage, page_percentages, validate_catalog,
)

# ── Constants ─────────────────────────────────────────────────────────────────

LABELS = {
    "page":      "{page}. Sayfa",
    "verse":     "{verse}. Ayet",
    "pick":      "Ayet Seçin",
    "pages":     "SAYFALAR",
    "memorized": "✓ Ezberlendi",
    "memorize":  "○ Ezberle",
    "reading":   "Arapça Okunuş:",
    "meaning":   "Türkçe Meali:",
    "overall":   "Toplam ezber: {pct}",
    "no_verse":  "Önce bir ayet seçin",
}

MAX_PAGE_SHORTCUTS = 9
YASIN_LOG_LEVEL = "INFO"

# ── Label helpers ─────────────────────────────────────────────────────────────


def page_label(page: int, pct: float) -> str:
    """'1. Sayfa  33%'"""
    return f"{LABELS['page'].format(page=page)}  {format_percent(pct)}"


def verse_option_label(verse: Verse, memorized: bool) -> str:
    label = LABELS["verse"].format(verse=verse.verse_number)
    return f"{label} ✓" if memorized else label


def toggle_label(memorized: bool) -> str:
    return LABELS["memorized"] if memorized else LABELS["memorize"]


# ── Memorize Screen ───────────────────────────────────────────────────────────


class MemorizeScreen(Screen):
    """Page grid, verse picker and verse detail on one screen."""

    BINDINGS = [
        *[
            Binding(str(n), f"select_page({n})", f"Page {n}", show=False)
            for n in range(1, MAX_PAGE_SHORTCUTS + 1)
        ],
        Binding("m",      "toggle_memorized", "Memorize"),
        Binding("right",  "next_verse",       "Next",  show=False),
        Binding("left",   "prev_verse",       "Prev",  show=False),
        Binding("escape", "deselect",         "Clear"),
        Binding("q",      "app.quit",         "Quit"),
    ]

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="memorize-layout"):
            yield Static(LABELS["pages"], classes="panel-title")
            with Grid(id="page-grid"):
                for page in self.app.page_index:
                    yield Button(
                        LABELS["page"].format(page=page),
                        id=f"page-{page}", classes="page-btn",
                    )
            yield Rule()
            with Vertical(id="verse-panel"):
                yield Static(LABELS["pick"], classes="panel-title")
                yield OptionList(id="verse-picker")
            with ScrollableContainer(id="verse-detail"):
                with Horizontal(id="detail-head"):
                    yield Static(id="detail-arabic", classes="arabic-text")
                    yield Button(LABELS["memorize"], id="btn-toggle")
                yield Static(id="detail-reading")
                yield Static(id="detail-meaning")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_panels()

    def refresh_panels(self) -> None:
        """Re-render every panel from the app's current state."""
        app = self.app
        pages = app.page_index
        memorized = app.memorized
        selection = app.verse_selection

        for page, pct in page_percentages(pages, memorized).items():
            btn = self.query_one(f"#page-{page}", Button)
            btn.label = page_label(page, pct)
            btn.variant = "primary" if page == selection.page else "default"
            btn.set_class(is_complete(pct), "complete")
            btn.set_class(not is_complete(pct), "partial")

        mode = selection.mode
        self.query_one("#verse-panel", Vertical).display = mode is not DisplayMode.PAGES_ONLY
        self.query_one("#verse-detail", ScrollableContainer).display = (
            mode is DisplayMode.VERSE_SELECTED
        )

        picker = self.query_one("#verse-picker", OptionList)
        picker.clear_options()
        if selection.page is not None:
            group = pages.get(selection.page, [])
            picker.add_options([
                Option(
                    verse_option_label(v, memorized.is_memorized(v.key)),
                    id=f"verse-{v.verse_number}",
                )
                for v in group
            ])
            if selection.verse is not None:
                picker.highlighted = group.index(selection.verse)

        verse = selection.verse
        if verse is not None:
            done = memorized.is_memorized(verse.key)
            self.query_one("#detail-arabic", Static).update(
                f"[bold]{verse.arabic_text}[/bold]"
            )
            self.query_one("#detail-reading", Static).update(
                f"[bold]{LABELS['reading']}[/bold] {verse.arabic_reading}"
            )
            self.query_one("#detail-meaning", Static).update(
                f"[bold]{LABELS['meaning']}[/bold] {verse.turkish_meaning}"
            )
            toggle = self.query_one("#btn-toggle", Button)
            toggle.label = toggle_label(done)
            toggle.variant = "success" if done else "default"

        app.sub_title = LABELS["overall"].format(
            pct=format_percent(overall_percentage(app.verses, memorized))
        )

    # ── State helpers ─────────────────────────────────────────────────────────

    def _pick_page(self, page: int) -> None:
        self.app.verse_selection.select_page(page, self.app.page_index)
        self.refresh_panels()

    def _pick_verse(self, verse_number: int) -> None:
        self.app.verse_selection.select_verse(verse_number, self.app.page_index)
        self.refresh_panels()

    def _toggle_verse(self) -> None:
        verse = self.app.verse_selection.verse
        if verse is None:
            self.notify(LABELS["no_verse"], severity="warning")
            return
        self.app.toggle_memorized(verse.page, verse.verse_number)
        self.refresh_panels()

    # ── Keyboard actions ──────────────────────────────────────────────────────

    def action_select_page(self, page: int) -> None:
        self._pick_page(page)

    def action_toggle_memorized(self) -> None:
        self._toggle_verse()

    def action_next_verse(self) -> None:
        self.app.verse_selection.step_verse(1, self.app.page_index)
        self.refresh_panels()

    def action_prev_verse(self) -> None:
        self.app.verse_selection.step_verse(-1, self.app.page_index)
        self.refresh_panels()

    def action_deselect(self) -> None:
        self.app.verse_selection.clear()
        self.refresh_panels()

    # ── Widget handlers ───────────────────────────────────────────────────────

    @on(Button.Pressed)
    def handle_button(self, event: Button.Pressed) -> None:
        bid = event.button.id
        if bid and bid.startswith("page-"):
            self._pick_page(int(bid.split("-")[1]))
        elif bid == "btn-toggle":
            self._toggle_verse()

    @on(OptionList.OptionSelected, "#verse-picker")
    def on_verse_picked(self, event: OptionList.OptionSelected) -> None:
        option_id = event.option.id or ""
        if option_id.startswith("verse-"):
            self._pick_verse(int(option_id.split("-")[1]))


# ── App ───────────────────────────────────────────────────────────────────────


class YasinApp(App):
    TITLE = "Yasin Suresi"
    SUB_TITLE = "Ezber Takibi"

    CSS = """
    Screen { background: $surface; }

    #memorize-layout {
        padding: 1 2;
        height: 1fr;
    }

    .panel-title {
        color: $accent;
        text-style: bold;
        margin: 1 0 0 0;
    }

    #page-grid {
        grid-size: 3;
        grid-gutter: 0 1;
        height: auto;
    }
    .page-btn { width: 100%; }
    .page-btn.partial  { color: $warning; }
    .page-btn.complete { color: $success; text-style: bold; }

    #verse-panel { height: auto; }
    #verse-picker {
        height: auto;
        max-height: 10;
        border: solid $primary-darken-2;
    }

    #verse-detail {
        height: 1fr;
        border: solid $primary-darken-2;
        padding: 1 2;
        margin-top: 1;
    }
    #detail-head { height: auto; margin-bottom: 1; }
    .arabic-text {
        width: 1fr;
        text-align: right;
        padding: 1 0;
    }
    #btn-toggle { margin: 0 0 0 2; }

    Rule { margin: 1 0; }
    """

    def __init__(self, verses=YASIN_VERSES) -> None:
        super().__init__()
        self.verses = validate_catalog(verses)
        self.verse_keys = frozenset(v.key for v in self.verses)
        self.memorized = MemorizationState()
        self.verse_selection = SelectionState()

    @property
    def page_index(self) -> dict:
        return group_by_page(self.verses)

    def toggle_memorized(self, page: int, verse_number: int) -> bool:
        return self.memorized.toggle(VerseKey(page, verse_number), self.verse_keys)

    def on_mount(self) -> None:
        self.push_screen(MemorizeScreen())


def configure_logging(level: str = YASIN_LOG_LEVEL) -> None:
    """Send log records to the Textual devtools console, not the terminal."""
    logging.basicConfig(level=level, handlers=[TextualHandler()], force=True)


def main() -> None:
    configure_logging(YASIN_LOG_LEVEL)
    YasinApp().run()


if __name__ == "__main__":
    main()

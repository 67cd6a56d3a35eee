#!/usr/bin/env python3
"""
Yasin Suresi - Memorization Tracker Core
========================================
Verse catalog, page grouping, memorization and selection state for the
Yasin Suresi hifz (memorization) tool. The Textual front-end lives in
yasin_gui.py; nothing here imports the UI.

Usage:
    from yasin import YASIN_VERSES, group_by_page, page_percentages
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when the embedded verse catalog is malformed."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VerseKey:
    page: int
    verse_number: int


@dataclass(frozen=True)
class Verse:
    page: int
    verse_number: int
    arabic_text: str
    arabic_reading: str
    turkish_meaning: str

    @property
    def key(self) -> VerseKey:
        return VerseKey(self.page, self.verse_number)


YASIN_VERSES: tuple = (
    Verse(
        page=1,
        verse_number=1,
        arabic_text="يَس",
        arabic_reading="yā sīn",
        turkish_meaning="Yasin (Harfi Mukatta)",
    ),
    Verse(
        page=1,
        verse_number=2,
        arabic_text="وَالْقُرْءَانِ الْحَكِيمِ",
        arabic_reading="wal-qur'ānil-ḥakīm",
        turkish_meaning="Hikmet sahibi Kur'an'a andolsun ki",
    ),
    Verse(
        page=1,
        verse_number=3,
        arabic_text="إِنَّكَ لَمِنَ الْمُرْسَلِينَ",
        arabic_reading="innaka laminal-mursalīn",
        turkish_meaning="Şüphesiz sen, gönderilen peygamberlerdensin",
    ),
    Verse(
        page=1,
        verse_number=4,
        arabic_text="عَلَىٰ صِرَاطٍ مُّسْتَقِيمٍ",
        arabic_reading="'alā ṣirāṭin mustaqīm",
        turkish_meaning="Dosdoğru bir yol üzerindesin",
    ),
    Verse(
        page=1,
        verse_number=5,
        arabic_text="تَنزِيلَ الْعَزِيزِ الرَّحِيمِ",
        arabic_reading="tanzīlal-'azīzir-raḥīm",
        turkish_meaning="Güçlü ve Rahim olan Allah'ın indirmesidir",
    ),
    Verse(
        page=1,
        verse_number=6,
        arabic_text="لِتُنذِرَ قَوْمًا مَّا أُنذِرَ آبَاؤُهُمْ فَهُمْ غَافِلُونَ",
        arabic_reading="li-tundhira qawman mā undhira ābā'uhum fahum ghāfilūn",
        turkish_meaning=(
            "Babaları uyarılmamış bir kavmi uyarman için (gönderildin). "
            "Onlar gaflet içindedirler"
        ),
    ),
)


# ---------------------------------------------------------------------------
# Catalog helpers
# ---------------------------------------------------------------------------


def validate_catalog(verses: Iterable[Verse]) -> tuple:
    """
    Check every verse has a positive page and verse number and that no
    (page, verse_number) identity appears twice.

    Returns the catalog as a tuple; raises CatalogError on the first bad record.
    """
    seen: set = set()
    checked = []
    for idx, verse in enumerate(verses):
        for field in ("page", "verse_number"):
            value = getattr(verse, field)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise CatalogError(
                    f"Verse #{idx + 1} has invalid {field}: {value!r}"
                )
        if verse.key in seen:
            raise CatalogError(
                f"Duplicate verse {verse.page}:{verse.verse_number} at #{idx + 1}"
            )
        seen.add(verse.key)
        checked.append(verse)
    logger.info("Loaded %d verse(s) on %d page(s)", len(checked),
                len({v.page for v in checked}))
    return tuple(checked)


def group_by_page(verses: Iterable[Verse]) -> dict:
    """Map page -> verses on that page, pages in catalog order, verses ascending."""
    pages: dict = {}
    for verse in verses:
        pages.setdefault(verse.page, []).append(verse)
    for group in pages.values():
        group.sort(key=lambda v: v.verse_number)
    return pages


def _percentage(group: list, memorized: "MemorizationState") -> float:
    if not group:
        return 0.0
    done = sum(1 for v in group if memorized.is_memorized(v.key))
    return done / len(group) * 100


def page_percentages(pages: dict, memorized: "MemorizationState") -> dict:
    """Completion percentage (0-100) for every page in *pages*."""
    return {page: _percentage(group, memorized) for page, group in pages.items()}


def overall_percentage(verses: Iterable[Verse], memorized: "MemorizationState") -> float:
    return _percentage(list(verses), memorized)


def format_percent(pct: float) -> str:
    """33.33 -> '33%'"""
    return f"{pct:.0f}%"


def is_complete(pct: float) -> bool:
    return pct >= 100


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


class MemorizationState:
    """Per-verse memorized flags. Missing keys read as not memorized."""

    def __init__(self) -> None:
        self._flags: dict = {}

    def is_memorized(self, key: VerseKey) -> bool:
        return self._flags.get(key, False)

    def toggle(self, key: VerseKey, known_keys: Optional[AbstractSet[VerseKey]] = None) -> bool:
        """
        Flip the flag for *key* and return the new value.

        When *known_keys* is given and does not contain *key* the toggle still
        happens; the entry just never shows up in any page percentage.
        """
        if known_keys is not None and key not in known_keys:
            logger.warning(
                "Toggling %d:%d which is not in the catalog",
                key.page, key.verse_number,
            )
        value = not self._flags.get(key, False)
        self._flags[key] = value
        logger.info(
            "Verse %d:%d %s", key.page, key.verse_number,
            "memorized" if value else "unmarked",
        )
        return value

    def memorized_keys(self) -> set:
        return {k for k, v in self._flags.items() if v}


class DisplayMode(enum.Enum):
    PAGES_ONLY = "pages"
    PAGE_SELECTED = "page"
    VERSE_SELECTED = "verse"


class SelectionState:
    """Focused page and verse. A selected verse always belongs to the selected page."""

    def __init__(self) -> None:
        self.page: Optional[int] = None
        self.verse: Optional[Verse] = None

    @property
    def mode(self) -> DisplayMode:
        if self.page is None:
            return DisplayMode.PAGES_ONLY
        if self.verse is None:
            return DisplayMode.PAGE_SELECTED
        return DisplayMode.VERSE_SELECTED

    def clear(self) -> None:
        self.page = None
        self.verse = None

    def select_page(self, page: int, pages: dict) -> None:
        # Re-selecting the current page still drops the verse focus.
        if page not in pages:
            logger.debug("Ignoring unknown page %r", page)
            return
        self.page = page
        self.verse = None
        logger.debug("Selected page %d", page)

    def select_verse(self, verse_number: int, pages: dict) -> None:
        if self.page is None:
            return
        self.verse = next(
            (v for v in pages.get(self.page, []) if v.verse_number == verse_number),
            None,
        )
        logger.debug("Selected verse %r on page %d -> %s", verse_number, self.page,
                     "found" if self.verse else "cleared")

    def step_verse(self, offset: int, pages: dict) -> None:
        """Move focus *offset* verses along the selected page, stopping at the ends."""
        if self.page is None or not offset:
            return
        group = pages.get(self.page, [])
        if not group:
            return
        if self.verse is None:
            target = group[0] if offset > 0 else group[-1]
        else:
            idx = group.index(self.verse) + offset
            if not 0 <= idx < len(group):
                return
            target = group[idx]
        self.select_verse(target.verse_number, pages)

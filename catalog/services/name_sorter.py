from typing import Iterable, List, Tuple

from pypinyin import Style, lazy_pinyin

from catalog.textual_manipulation import starts_with_ascii_letter, strip_diacritics

def _latin_key(name: str) -> Tuple[str, str]:
    # Base-letter comparison first; the raw string breaks ties deterministically.
    return (strip_diacritics(name).casefold(), name)

def _reading_key(name: str) -> Tuple[Tuple[str, ...], str]:
    # Han characters compare by their pinyin reading, other characters pass through.
    reading = tuple(syllable.casefold() for syllable in lazy_pinyin(name, style=Style.TONE3))
    return (reading, name)

def sort_names(names: Iterable[str]) -> List[str]:
    """
    Orders contributor names for the filter dropdowns: names starting with an
    ASCII letter come first in alphabetical order, followed by all other names
    ordered by their Mandarin reading.
    """
    latin: List[str] = []
    other: List[str] = []
    for name in names:
        if starts_with_ascii_letter(name):
            latin.append(name)
        else:
            other.append(name)

    latin.sort(key=_latin_key)
    other.sort(key=_reading_key)
    return latin + other

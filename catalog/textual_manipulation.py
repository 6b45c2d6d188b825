# catalog/textual_manipulation.py

import unicodedata

def strip_diacritics(text: str) -> str:
    """
    Removes diacritics from a string, supporting a wide range of languages
    by normalizing Unicode characters.
    """
    if not isinstance(text, str):
        return text
    # Decompose the string into base characters and combining marks (e.g., accents)
    nfkd_form = unicodedata.normalize('NFKD', text)
    # Filter out the combining marks, leaving only the base characters
    return "".join([c for c in nfkd_form if not unicodedata.combining(c)])

def normalize_for_search(text: str) -> str:
    """
    Folds a string into the form used by the fuzzy matcher: full-width forms
    become half-width (NFKC), case is folded and accents are dropped.
    Whitespace runs collapse to a single space.
    """
    if not text:
        return ""
    folded = unicodedata.normalize('NFKC', text).casefold()
    return " ".join(strip_diacritics(folded).split())

def starts_with_ascii_letter(text: str) -> bool:
    return bool(text) and text[0].isascii() and text[0].isalpha()

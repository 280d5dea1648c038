"""Turn problem folder names into display titles."""

import re

_NUMBER_PREFIX = re.compile(r"^\d+[-._]\s*")
_LEADING_NUMBER = re.compile(r"^(\d+)")
_SEPARATORS = re.compile(r"[-_]")
_WORD_START = re.compile(r"\b\w", re.ASCII)


def _capitalize_words(text: str) -> str:
    return _WORD_START.sub(lambda m: m.group().upper(), text)


def extract_number(folder_name: str) -> str:
    """Leading problem number of a folder name, or "" if it has none."""
    match = _LEADING_NUMBER.match(folder_name)
    return match.group(1) if match else ""


def title_from_folder(folder_name: str, capitalize: bool = True) -> str:
    """'1-two-sum' -> 'Two Sum' (drops the numeric prefix)."""
    title = _SEPARATORS.sub(" ", _NUMBER_PREFIX.sub("", folder_name))
    if capitalize:
        title = _capitalize_words(title)
    return title.strip()


def title_case(folder_name: str) -> str:
    """'big_countries' -> 'Big Countries' (keeps any numeric prefix)."""
    return _capitalize_words(_SEPARATORS.sub(" ", folder_name)).strip()


def normalize_title(folder_name: str, style: str = "title") -> str:
    if style == "folder":
        return title_from_folder(folder_name)
    if style == "title":
        return title_case(folder_name)
    raise ValueError(f"Unknown title style: {style}")

"""
String helpers: regular expression extraction, case checks and escaping
of regex special characters.
"""

import re
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Union

SPECIAL_CHARS = ('!', '(', ')', '-', '=', '*', '.')


class Case(Enum):
    """Letter case to check for."""

    UPPER = 'upper'
    LOWER = 'lower'


CASE_PATTERNS = {
    Case.UPPER: re.compile(r'^[A-Z ]+$'),
    Case.LOWER: re.compile(r'^[a-z ]+$'),
}


def _as_strings(text: Union[str, Iterable]) -> List[str]:
    if isinstance(text, str):
        return [text]
    return [str(item) for item in text]


def _compile(pattern: str, ignore_case: bool, fixed: bool) -> 're.Pattern':
    if fixed:
        pattern = re.escape(pattern)
    return re.compile(pattern, re.IGNORECASE if ignore_case else 0)


def regex(pattern: str, text: Union[str, Iterable[str]],
          ignore_case: bool = False, fixed: bool = False) -> List[str]:
    """
    First match of the pattern in each element of text.

    Elements without a match are dropped.

    Args:
        pattern: Regular expression
        text: String or strings to search
        ignore_case: Case-insensitive matching
        fixed: Treat the pattern as a literal string

    Returns:
        List of matched substrings
    """
    compiled = _compile(pattern, ignore_case, fixed)
    matches = (compiled.search(item) for item in _as_strings(text))
    return [match.group(0) for match in matches if match is not None]


def gregex(pattern: str, text: Union[str, Iterable[str]],
           ignore_case: bool = False, fixed: bool = False) -> Dict[str, List[str]]:
    """
    All matches of the pattern in each element of text.

    Args:
        pattern: Regular expression
        text: String or strings to search
        ignore_case: Case-insensitive matching
        fixed: Treat the pattern as a literal string

    Returns:
        Dict from each matching element to the list of its matches
    """
    compiled = _compile(pattern, ignore_case, fixed)
    result = {}
    for item in _as_strings(text):
        found = [match.group(0) for match in compiled.finditer(item)]
        if found:
            result[item] = found
    return result


def one_regex(text: str, pattern: str) -> List[str]:
    """
    First match of the pattern in a single string.

    Args:
        text: The string to search
        pattern: Regular expression

    Returns:
        List holding the match, or an empty list
    """
    strings = _as_strings(text)
    if len(strings) != 1:
        raise ValueError(f"one_regex takes a single string, got {len(strings)}")
    return regex(pattern, strings)


def find_case(strings: Union[str, Iterable[str]], case: Union[Case, str] = Case.UPPER) -> List[bool]:
    """
    Check whether each string is entirely upper or lower case.

    Spaces are allowed; digits and punctuation are not.

    Args:
        strings: String or strings to check
        case: 'upper' or 'lower'

    Returns:
        List of booleans, one per string
    """
    try:
        case = Case(case)
    except ValueError:
        raise ValueError(f"'case' should be one of 'upper', 'lower', got {case!r}") from None

    pattern = CASE_PATTERNS[case]
    return [pattern.match(item) is not None for item in _as_strings(strings)]


def all_upper(strings: Union[str, Iterable[str]]) -> List[bool]:
    """Check whether each string is entirely upper case."""
    return find_case(strings, Case.UPPER)


def all_lower(strings: Union[str, Iterable[str]]) -> List[bool]:
    """Check whether each string is entirely lower case."""
    return find_case(strings, Case.LOWER)


def sub_out(to_alter: Union[str, Iterable[str]],
            special_chars: Sequence[str] = SPECIAL_CHARS) -> Union[str, List[str]]:
    """
    Put a backslash in front of every special character.

    Args:
        to_alter: String or strings
        special_chars: Characters to escape

    Returns:
        Escaped string, or list of escaped strings
    """
    def escape(item: str) -> str:
        for char in special_chars:
            item = item.replace(char, '\\' + char)
        return item

    if isinstance(to_alter, str):
        return escape(to_alter)
    return [escape(item) for item in _as_strings(to_alter)]


def sub_specials(*vectors, special_chars: Sequence[str] = SPECIAL_CHARS) -> list:
    """
    Escape special characters in each of several strings or lists of strings.

    Args:
        *vectors: Strings or lists of strings
        special_chars: Characters to escape

    Returns:
        List with one escaped result per argument
    """
    return [sub_out(vector, special_chars=special_chars) for vector in vectors]

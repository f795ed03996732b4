# -*- coding: utf-8 -*-
# SPDX-License-Identifier: GPL-2.0


##########################################################################################
# Imports
##########################################################################################

from typing import Generator, Iterable, Sequence

from .history_reader import HistoryLine


##########################################################################################
# Functions
##########################################################################################

def matches(text: str, terms: Sequence[str]) -> bool:
    '''
    Check if all search terms are contained in a text.

    Arguments:
        text  - the text to check
        terms - sequence of search terms

    Every term is an independent, case-sensitive substring test.
    An empty sequence of terms matches everything.
    '''

    return all(t in text for t in terms)

def ordered_matches(text: str, terms: Sequence[str]) -> bool:
    '''
    Check if all search terms are contained in a text, in the given order.

    Arguments:
        text  - the text to check
        terms - sequence of search terms

    Each term is searched for after the end of the previous match, so
    occurrences must not overlap.
    '''

    pos = 0

    for t in terms:
        idx = text.find(t, pos)
        if idx == -1:
            return False

        pos = idx + len(t)

    return True

def dedupe(lines: Iterable) -> Generator:
    '''
    Drop lines whose exact text was already seen.

    Arguments:
        lines - iterable of HistoryLine objects or plain strings

    The first occurrence of every line is kept, in input order.
    '''

    seen = set()

    for line in lines:
        key = line.text if isinstance(line, HistoryLine) else line

        if key in seen:
            continue

        seen.add(key)

        yield line

def select_lines(lines: Iterable[HistoryLine], terms: Sequence[str], dedupe_lines: bool = False, ordered: bool = False) -> Generator[HistoryLine, None, None]:
    '''
    Select the history lines matching the search terms.

    Arguments:
        lines        - iterable of history lines
        terms        - sequence of search terms
        dedupe_lines - drop repeated lines?
        ordered      - must the terms occur in the given order?

    Lines that are not valid UTF-8 never match.
    '''

    match_fn = ordered_matches if ordered else matches

    selected = (l for l in lines if not l.not_utf8 and match_fn(l.text, terms))

    if dedupe_lines:
        selected = dedupe(selected)

    yield from selected

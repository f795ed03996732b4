# -*- coding: utf-8 -*-
# SPDX-License-Identifier: GPL-2.0

'''
Search a shell history file (or any text file) for lines containing all
of the given search terms.
'''


##########################################################################################
# Imports
##########################################################################################

import sys

from logging import DEBUG, WARNING, Logger, StreamHandler, getLogger
from os import O_WRONLY, devnull, dup2, environ as os_environ, open as os_open
from pathlib import Path
from typing import Generator, Iterable, Sequence, TextIO

from ..history_config import SearchConfig
from ..history_match import select_lines
from ..history_reader import HistoryLine, HistoryReadError, read_history
from ..history_resolve import ResolutionError, list_history_files, resolve_target
from ..search_terms import ArgumentError, CommandLine, parse_command_line


##########################################################################################
# Constants
##########################################################################################

_logger_name = 'histsearch'
_log_prefix = 'histsearch: '


##########################################################################################
# Internal functions
##########################################################################################

def _usage(app: str) -> None:
    print(f'Usage: {app} [OPTIONS] [--] [SEARCH_TERMS]...', file=sys.stdout)

    msg = '''
\t --history <name> [search a history file in the home directory]
\t -f|--file <path> [search a file path, wins over --history]
\t -d|--dedupe      [suppress duplicate output lines]
\t -o|--ordered     [terms must occur in the given order]
\t -l|--list        [list history files in the home directory]
\t -v|--verbose     [verbose diagnostics]
\t -h|--help        [print this help]

Search terms starting with a dash have to be passed after "--".'''

    print(msg, file=sys.stdout)

def _silence_stdout() -> None:
    '''
    Point the standard output at /dev/null once the reading end of the pipe is gone.

    Otherwise the final flush on interpreter exit fails again.
    '''

    try:
        fd = sys.stdout.fileno()

    except (AttributeError, OSError, ValueError):
        return

    dup2(os_open(devnull, O_WRONLY), fd)

def _count_lines(lines: Iterable[HistoryLine], counter: list[int]) -> Generator[HistoryLine, None, None]:
    for line in lines:
        counter[0] += 1

        yield line

def _list_histories(lg: Logger, config: SearchConfig) -> int:
    try:
        paths = list_history_files(config)

    except ResolutionError as exc:
        print(f'error: failed to list history files: {exc}', file=sys.stderr)

        return 2

    if len(paths) == 0:
        lg.info(_log_prefix + f'no history files found in: {config.home}')

    for p in paths:
        print(p, file=sys.stdout)

    return 0

def _search(lg: Logger, config: SearchConfig, cmdline: CommandLine) -> int:
    if config.format_error is not None:
        lg.warning(_log_prefix + f'ignoring invalid format override: {config.format_error}')

    lg.debug(_log_prefix + f'config: shell={config.shell.name}, home={config.home}, format={config.line_format.name}')

    if cmdline.list_histories:
        return _list_histories(lg, config)

    try:
        path = resolve_target(config, cmdline.history, cmdline.file, lg=lg)

    except ResolutionError as exc:
        print(f'error: failed to resolve file: {exc}', file=sys.stderr)

        return 2

    counter = [0]

    try:
        lines = _count_lines(read_history(path, lg), counter)
        matched = report(cmdline.terms, path, lines, cmdline.dedupe, cmdline.ordered, sys.stdout)

    except ResolutionError as exc:
        print(f'error: failed to open file: {exc}', file=sys.stderr)

        return 2

    except HistoryReadError as exc:
        print(f'error: {exc}', file=sys.stderr)

        return 3

    lg.info(_log_prefix + f'matched {matched} of {counter[0]} lines')

    return 0


##########################################################################################
# Functions
##########################################################################################

def report(terms: Sequence[str], path: Path, lines: Iterable[HistoryLine], dedupe: bool, ordered: bool, out: TextIO) -> int:
    '''
    Print the search header and all matching lines.

    Arguments:
        terms   - sequence of search terms
        path    - path of the searched file
        lines   - iterable of history lines
        dedupe  - suppress duplicate lines?
        ordered - must the terms occur in the given order?
        out     - stream to print to

    Returns the number of printed lines.
    '''

    print(f'Searching for - {list(terms)} - in {path}', file=out)

    matched = 0

    for line in select_lines(lines, terms, dedupe, ordered):
        print(line.text, file=out)
        matched += 1

    return matched


##########################################################################################
# Main
##########################################################################################

def main(args: list[str]) -> int:
    '''
    Main function.

    Arguments:
        args - list of string arguments from the CLI
    '''

    try:
        cmdline = parse_command_line(args[1:])

    except ArgumentError as err:
        print(f'error: argument parsing failed: {err}', file=sys.stderr)
        _usage(args[0])

        return 1

    if cmdline.help:
        _usage(args[0])

        return 0

    config = SearchConfig.from_environ(os_environ)

    lg = getLogger(_logger_name)
    handler = StreamHandler(sys.stderr)

    lg.addHandler(handler)
    lg.setLevel(DEBUG if cmdline.verbose else WARNING)

    try:
        return _search(lg, config, cmdline)

    except BrokenPipeError:
        _silence_stdout()

        return 0

    finally:
        lg.removeHandler(handler)

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: GPL-2.0


##########################################################################################
# Imports
##########################################################################################

from dataclasses import dataclass
from logging import Logger
from pathlib import Path
from re import compile as rcompile
from typing import Generator

from .history_resolve import FileNotFound, NotReadable


##########################################################################################
# Constants
##########################################################################################

_log_prefix = 'histsearch: read: '

'''
Line of a zsh extended history, e.g. ": 1700000000:0;ls -la".
'''
_extended_re = rcompile(r'^: *(\d+):(\d+);(.*)$')


##########################################################################################
# Class definitions
##########################################################################################

class HistoryReadError(RuntimeError):
    '''
    I/O failure while reading the lines of a history file.
    '''

    pass


##########################################################################################
# Dataclass definitions
##########################################################################################

@dataclass(frozen=True)
class HistoryLine:
    '''
    Dataclass encoding a single line of a history file.

    number   - line number (starting at one)
    text     - decoded text without line terminator (lossy if not_utf8 is set)
    raw      - undecoded bytes without line terminator
    not_utf8 - True if the bytes are not valid UTF-8
    '''

    number: int
    text: str
    raw: bytes
    not_utf8: bool = False

    @property
    def command(self) -> str:
        '''
        The command part of an extended history line, or None if the line is
        in some other format.
        '''

        if self.not_utf8:
            return None

        m = _extended_re.match(self.text)

        return None if m is None else m.group(3)


##########################################################################################
# Internal functions
##########################################################################################

def _strip_terminator(data: bytes) -> bytes:
    if data.endswith(b'\r\n'):
        return data[:-2]

    if data.endswith(b'\n'):
        return data[:-1]

    return data

def _decode_line(number: int, data: bytes) -> HistoryLine:
    raw = _strip_terminator(data)

    try:
        return HistoryLine(number, raw.decode('utf-8'), raw)

    except UnicodeDecodeError:
        return HistoryLine(number, raw.decode('utf-8', errors='replace'), raw, True)


##########################################################################################
# Functions
##########################################################################################

def read_history(path: Path, lg: Logger = None) -> Generator[HistoryLine, None, None]:
    '''
    Lazily read the lines of a history file.

    Arguments:
        path - path to the file
        lg   - logger used to report undecodable lines (or None)

    Every call opens the file again, so the result can be consumed more than once
    by calling this again. Lines that are not valid UTF-8 are reported, but still
    yielded with not_utf8 set.
    '''

    try:
        f = open(path, mode='rb')

    except FileNotFoundError as exc:
        raise FileNotFound(f'file not found: {path}') from exc

    except (PermissionError, IsADirectoryError) as exc:
        raise NotReadable(f'file not readable: {path}: {exc.strerror}') from exc

    except OSError as exc:
        raise HistoryReadError(f'failed to open: {path}: {exc}') from exc

    with f:
        number = 0

        while True:
            try:
                data = f.readline()

            except OSError as exc:
                raise HistoryReadError(f'failed to read line {number + 1}: {path}: {exc}') from exc

            if not data:
                break

            number += 1
            line = _decode_line(number, data)

            if line.not_utf8 and lg is not None:
                lg.warning(_log_prefix + f'skipping line {number}: not valid UTF-8')

            yield line

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: GPL-2.0


from __future__ import annotations


##########################################################################################
# Imports
##########################################################################################

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path, PurePath
from typing import Mapping


##########################################################################################
# Constants
##########################################################################################

'''
Environment variables consulted when building the search configuration.
'''
_shell_var = 'SHELL'
_home_var = 'HOME'
_format_var = 'HISTSEARCH_FORMAT'


##########################################################################################
# Enumerator definitions
##########################################################################################

class LineFormat(IntEnum):
    '''
    Layout of the lines in a history file.

    Plain    - one command per line
    Extended - zsh extended history, ": <epoch>:<duration>;<command>"
    '''

    Plain    = 0
    Extended = 1

    @staticmethod
    def from_name(name: str) -> LineFormat:
        '''
        Lookup a line format by its (case-insensitive) name.

        Arguments:
            name - name of the format, e.g. "plain" or "extended"
        '''

        for fmt in LineFormat:
            if fmt.name.lower() == name.strip().lower():
                return fmt

        raise ValueError(f'unknown line format: {name}')


@dataclass(frozen=True)
class _ShellInfo:
    history_name: str
    line_format: LineFormat


class Shell(Enum):
    '''
    Shells we know the default history file of.
    '''

    Unknown = _ShellInfo(None, LineFormat.Plain)
    Bash    = _ShellInfo('.bash_history', LineFormat.Plain)
    Zsh     = _ShellInfo('.zsh_history', LineFormat.Extended)

    @property
    def history_name(self) -> str:
        return self.value.history_name

    @property
    def line_format(self) -> LineFormat:
        return self.value.line_format

    @staticmethod
    def from_path(shell_path: str) -> Shell:
        '''
        Detect the shell from a path to its executable.

        Arguments:
            shell_path - path to the shell, e.g. "/bin/zsh" (can be None)
        '''

        if not shell_path:
            return Shell.Unknown

        name = PurePath(shell_path.strip()).name

        for shell in Shell:
            if shell is not Shell.Unknown and shell.name.lower() == name:
                return shell

        return Shell.Unknown


##########################################################################################
# Dataclass definitions
##########################################################################################

@dataclass(frozen=True)
class SearchConfig:
    '''
    Dataclass encoding the search configuration.

    shell        - detected shell of the user
    home         - path to the home directory (None if it can't be determined)
    line_format  - expected format of history lines
    format_error - description of an invalid format override (None if valid)
    '''

    shell: Shell
    home: Path
    line_format: LineFormat
    format_error: str = None

    @staticmethod
    def from_environ(env: Mapping[str, str]) -> SearchConfig:
        '''
        Create a search config from an environment mapping.

        Arguments:
            env - environment, usually os.environ

        This is the only place where the environment is consulted.
        '''

        shell = Shell.from_path(env.get(_shell_var))

        home_raw = env.get(_home_var)
        home = Path(home_raw) if home_raw else None

        line_format = shell.line_format
        format_error = None

        format_raw = env.get(_format_var)
        if format_raw:
            try:
                line_format = LineFormat.from_name(format_raw)

            except ValueError as exc:
                format_error = f'{_format_var}: {exc}'

        return SearchConfig(shell, home, line_format, format_error)

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: GPL-2.0


##########################################################################################
# Imports
##########################################################################################

from logging import Logger
from os import R_OK, access, getcwd
from pathlib import Path
from stat import S_ISREG

from .history_config import SearchConfig, Shell


##########################################################################################
# Constants
##########################################################################################

_log_prefix = 'histsearch: resolve: '

'''
Substring identifying history files in the home directory.
'''
_history_marker = 'history'


##########################################################################################
# Class definitions
##########################################################################################

class ResolutionError(RuntimeError):
    '''
    Base class for failures to determine the file to search.
    '''

    pass

class FileNotFound(ResolutionError):
    pass

class UnknownShell(ResolutionError):
    pass

class HomeDirUnavailable(ResolutionError):
    pass

class NotReadable(ResolutionError):
    pass


##########################################################################################
# Internal functions
##########################################################################################

def _require_home(config: SearchConfig) -> Path:
    if config.home is None:
        raise HomeDirUnavailable('home directory could not be determined')

    return config.home

def _check_file(path: Path) -> Path:
    '''
    Check that a path points to a readable regular file.

    Arguments:
        path - the path to check

    Returns the absolute path.
    '''

    try:
        st = path.stat()

    except (FileNotFoundError, NotADirectoryError) as exc:
        raise FileNotFound(f'file not found: {path}') from exc

    except PermissionError as exc:
        raise NotReadable(f'file not accessible: {path}: {exc.strerror}') from exc

    if not S_ISREG(st.st_mode):
        raise NotReadable(f'not a regular file: {path}')

    if not access(path, R_OK):
        raise NotReadable(f'file not readable: {path}')

    return path.absolute()


##########################################################################################
# Functions
##########################################################################################

def resolve_default(config: SearchConfig) -> Path:
    '''
    Resolve the default history file of the user's shell.

    Arguments:
        config - search configuration
    '''

    home = _require_home(config)

    if config.shell is Shell.Unknown:
        raise UnknownShell('unable to detect the shell (check $SHELL)')

    return _check_file(home / config.shell.history_name)

def resolve_history(config: SearchConfig, name: str) -> Path:
    '''
    Resolve a history file located directly in the home directory.

    Arguments:
        config - search configuration
        name   - filename of the history file
    '''

    home = _require_home(config)

    if name in ('.', '..') or Path(name).name != name:
        raise FileNotFound(f'history name must be a plain filename: {name}')

    return _check_file(home / name)

def resolve_file(path: str, cwd: Path = None) -> Path:
    '''
    Resolve an explicit file path.

    Arguments:
        path - absolute path, or path relative to the working directory
        cwd  - working directory (None for the current one)
    '''

    p = Path(path)

    if not p.is_absolute():
        p = (Path(getcwd()) if cwd is None else cwd) / p

    return _check_file(p)

def resolve_target(config: SearchConfig, history: str = None, file: str = None, cwd: Path = None, lg: Logger = None) -> Path:
    '''
    Resolve the path of the file to search.

    Arguments:
        config  - search configuration
        history - name of a history file in the home directory (or None)
        file    - explicit file path (or None)
        cwd     - working directory for relative file paths (or None)
        lg      - logger for diagnostics (or None)

    An explicit file path takes precedence over a history name.
    '''

    if file is not None:
        if history is not None and lg is not None:
            lg.warning(_log_prefix + f'both --history and --file given, using file: {file}')

        return resolve_file(file, cwd)

    if history is not None:
        return resolve_history(config, history)

    return resolve_default(config)

def list_history_files(config: SearchConfig) -> list[Path]:
    '''
    List the history files in the home directory.

    Arguments:
        config - search configuration

    Returns a sorted list of regular files whose name contains "history".
    '''

    home = _require_home(config)

    try:
        return sorted(p for p in home.iterdir() if _history_marker in p.name and p.is_file())

    except (FileNotFoundError, NotADirectoryError) as exc:
        raise HomeDirUnavailable(f'home directory not found: {home}') from exc

    except PermissionError as exc:
        raise NotReadable(f'home directory not readable: {home}: {exc.strerror}') from exc

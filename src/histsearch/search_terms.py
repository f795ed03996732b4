# -*- coding: utf-8 -*-
# SPDX-License-Identifier: GPL-2.0

'''
Split the raw CLI arguments into flags and literal search terms.
'''


##########################################################################################
# Imports
##########################################################################################

from dataclasses import dataclass
from getopt import getopt, GetoptError


##########################################################################################
# Constants
##########################################################################################

_getopt_sargs = 'hf:dolv'
_getopt_largs = ('help', 'history=', 'file=', 'dedupe', 'ordered', 'list', 'verbose')


##########################################################################################
# Class definitions
##########################################################################################

class ArgumentError(GetoptError):
    '''
    Malformed flag usage on the command line.
    '''

    pass


@dataclass(frozen=True)
class CommandLine:
    '''
    Dataclass encoding a parsed command line.

    terms          - tuple of literal search terms, in CLI order
    history        - name of a history file under the home directory (or None)
    file           - explicit path of the file to search (or None)
    dedupe         - suppress duplicate output lines?
    ordered        - must the terms occur in the given order?
    list_histories - list the history files instead of searching?
    verbose        - verbose diagnostics?
    help           - print usage and exit?
    '''

    terms: tuple[str, ...] = ()
    history: str = None
    file: str = None
    dedupe: bool = False
    ordered: bool = False
    list_histories: bool = False
    verbose: bool = False
    help: bool = False


##########################################################################################
# Internal functions
##########################################################################################

def _is_option(arg: str) -> bool:
    return arg.startswith('-') and arg != '-'

def _split_args(args: list[str]) -> tuple[list[tuple[str, str]], list[str]]:
    '''
    Split arguments into options and search terms.

    Arguments:
        args - list of string arguments, without the program name

    Options are parsed one token at a time, so terms and options can be
    mixed in any order. An option whose argument is a separate token
    consumes that token too, even if it looks like "--".
    '''

    opts = []
    terms = []

    idx = 0
    while idx < len(args):
        arg = args[idx]

        if arg == '--':
            terms.extend(args[idx + 1:])
            break

        if not _is_option(arg):
            terms.append(arg)
            idx += 1
            continue

        try:
            o, _ = getopt(args[idx:idx + 1], _getopt_sargs, _getopt_largs)
            step = 1

        except GetoptError:
            if idx + 1 == len(args):
                raise

            o, _ = getopt(args[idx:idx + 2], _getopt_sargs, _getopt_largs)
            step = 2

        opts.extend(o)
        idx += step

    return opts, terms


##########################################################################################
# Functions
##########################################################################################

def parse_command_line(args: list[str]) -> CommandLine:
    '''
    Parse the command line.

    Arguments:
        args - list of string arguments, without the program name

    Options and search terms may be interleaved. Everything after a "--" token
    is taken literally, so dash-prefixed terms have to be passed that way.
    '''

    try:
        opts, oargs = _split_args(args)

    except GetoptError as err:
        raise ArgumentError(err.msg, err.opt) from err

    history = None
    file = None
    dedupe = False
    ordered = False
    list_histories = False
    verbose = False
    show_help = False

    for o, a in opts:
        if o in ('-h', '--help'):
            show_help = True
        elif o == '--history':
            history = a
        elif o in ('-f', '--file'):
            file = a
        elif o in ('-d', '--dedupe'):
            dedupe = True
        elif o in ('-o', '--ordered'):
            ordered = True
        elif o in ('-l', '--list'):
            list_histories = True
        elif o in ('-v', '--verbose'):
            verbose = True
        else:
            raise RuntimeError('unhandled option')

    for value, name in ((history, '--history'), (file, '--file')):
        if value is not None and len(value) == 0:
            raise ArgumentError(f'option {name} requires a non-empty argument', name)

    return CommandLine(tuple(oargs), history, file, dedupe, ordered, list_histories, verbose, show_help)

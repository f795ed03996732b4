# -*- coding: utf-8 -*-
# SPDX-License-Identifier: GPL-2.0


from sys import argv as sys_argv

def history_search_cli() -> int:
    from .history_search import main as cli_main
    return cli_main(sys_argv)

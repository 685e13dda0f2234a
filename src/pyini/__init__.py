# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 14:48:20

from .consts import DEFAULT_SECTION, DuplicatePolicy
from .model import IniDocument, IniSection, NotFound
from .parser import (
    DuplicateError,
    IniParser,
    ParseError,
    parse,
    parse_bytes
)

__all__ = [
    'DEFAULT_SECTION', 'DuplicatePolicy',
    'IniDocument', 'IniSection', 'NotFound',
    'DuplicateError', 'IniParser', 'ParseError',
    'parse', 'parse_bytes'
]

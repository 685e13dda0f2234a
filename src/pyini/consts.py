# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19 14:02:11

from enum import Enum


# keys declared before any `[section]` live here.
DEFAULT_SECTION = ''

COMMENT_PREFIXES = (';', '#')

# `chardet` guesses below this are not trusted.
MIN_CODEC_CONFIDENCE = 0.8
FALLBACK_CODECS = ('utf-8', 'gbk')


class DuplicatePolicy(str, Enum):
    """What to do when a section header (or a key) shows up twice."""
    MERGE = 'merge'          # reopen the section, last key wins
    OVERWRITE = 'overwrite'  # drop the earlier section, last key wins
    ERROR = 'error'          # raise `DuplicateError`

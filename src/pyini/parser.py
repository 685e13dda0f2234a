# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 14:31:05

"""Line-oriented INI reader.

Supported syntax, and nothing more:

    ```ini
    ; comment, so is `# ...`
    key = value        ; pairs before any header go to the "" section

    [section]          ; inline comments need whitespace before them
    url = http://host/path#frag
    expr = a=b         ; value is "a=b", split happens on the first `=`
    ```

Sections and keys showing up twice are handled per `DuplicatePolicy`.
"""

import logging
from collections.abc import Iterable, Iterator
from io import TextIOBase
from re import compile as regex

import chardet

from .consts import (
    COMMENT_PREFIXES,
    FALLBACK_CODECS,
    MIN_CODEC_CONFIDENCE,
    DuplicatePolicy
)
from .model import IniDocument, IniSection

_INLINE_COMMENT = regex(r'\s[;#]')
# `str.splitlines` also breaks on \x0c, \x85, U+2028 and friends.
_LINE_BREAK = regex(r'\r\n|\r|\n')
_LINE_END = regex(r'(?:\r\n|\r|\n)\Z')
_BOM = '\ufeff'


class ParseError(ValueError):
    """To record malformed lines when reading INI text."""

    def __init__(self, lineno: int, line: str, reason: str) -> None:
        super().__init__(f'line {lineno}: {reason}: {line!r}')
        self.lineno = lineno
        self.line = line
        self.reason = reason


class DuplicateError(ParseError):
    """Raised for repeated sections or keys under `DuplicatePolicy.ERROR`."""


def _readlines(buf: TextIOBase) -> Iterator[str]:
    # `StringIO` only ends lines at `\n`, old Mac `\r` text comes in one piece.
    while i := buf.readline():
        yield from _LINE_BREAK.split(_LINE_END.sub('', i, count=1))


class IniParser:
    def __init__(
        self, *,
        strict: bool = True,
        duplicates: DuplicatePolicy | str = DuplicatePolicy.MERGE,
        inline_comments: bool = True
    ) -> None:
        """
        Args:
            strict: raise `ParseError` on malformed lines.
                When `False` they are logged and skipped.
            duplicates: see `DuplicatePolicy`.
            inline_comments: cut ` ;...` and ` #...` off the line tail.
        """
        self.strict = strict
        self.duplicates = DuplicatePolicy(duplicates)
        self.inline_comments = inline_comments

    def read(self, text: str) -> IniDocument:
        return self._scan(_LINE_BREAK.split(text))

    def readstream(self, buf: TextIOBase) -> IniDocument:
        """读取解码好的字符串流。"""
        return self._scan(_readlines(buf))

    def readbytes(self, raw: bytes, encoding: str | None = None) -> IniDocument:
        """Decode `raw` first, guessing the codec unless `encoding` is given."""
        return self.read(self.decode(raw, encoding))

    @staticmethod
    def decode(raw: bytes, encoding: str | None = None) -> str:
        if encoding is not None:
            try:
                return raw.decode(encoding)
            except (UnicodeDecodeError, LookupError) as e:
                raise ParseError(0, '', f'cannot decode as {encoding}') from e

        codec = chardet.detect(raw)
        guessed = codec.get('encoding')
        if guessed is None or codec['confidence'] < MIN_CODEC_CONFIDENCE:
            guessed = FALLBACK_CODECS[0]
        logging.debug(f'guessed codec {guessed} ({codec["confidence"]})')

        # fallbacks
        for i in dict.fromkeys((guessed, *FALLBACK_CODECS)):
            try:
                return raw.decode(i)
            except (UnicodeDecodeError, LookupError):
                continue
        raise ParseError(0, '', 'cannot guess the text encoding')

    def _malformed(self, lineno: int, line: str, reason: str) -> None:
        if self.strict:
            raise ParseError(lineno, line, reason)
        logging.warning(f'skipped line {lineno} ({reason}): {line!r}')

    def _section_name(self, lineno: int, line: str, raw: str) -> str | None:
        # `line` has inline comments cut off, `raw` goes into messages.
        line = line.rstrip()
        close = line.find(']')
        if close < 0:
            self._malformed(lineno, raw, 'unclosed section header')
        elif close != len(line) - 1:
            self._malformed(lineno, raw, 'unexpected text after section header')
        elif not (name := line[1:-1].strip()):
            self._malformed(lineno, raw, 'empty section name')
        else:
            return name
        return None

    def _open_section(
        self, ret: IniDocument, seen: set[str],
        lineno: int, line: str, name: str
    ) -> IniSection:
        if name not in seen:
            seen.add(name)
            return ret.add_section(name)

        match self.duplicates:
            case DuplicatePolicy.ERROR:
                raise DuplicateError(lineno, line, f'duplicate section [{name}]')
            case DuplicatePolicy.OVERWRITE:
                logging.debug(f'line {lineno}: [{name}] overwrites earlier one')
                return ret.add_section(name, replace=True)
            case _:
                logging.debug(f'line {lineno}: [{name}] merged into earlier one')
                return ret.add_section(name)

    def _scan(self, lines: Iterable[str]) -> IniDocument:
        ret = IniDocument()
        # None after a skipped header: its pairs are dropped, not
        # handed to whatever section came before.
        this_sect: IniSection | None = ret.header
        seen: set[str] = set()

        for lineno, raw in enumerate(lines, 1):
            if lineno == 1:
                raw = raw.removeprefix(_BOM)
            raw = raw.strip()
            if not raw or raw[0] in COMMENT_PREFIXES:
                continue
            line = raw
            if self.inline_comments and (m := _INLINE_COMMENT.search(line)):
                line = line[:m.start()]

            if line[0] == '[':
                name = self._section_name(lineno, line, raw)
                this_sect = (
                    None if name is None
                    else self._open_section(ret, seen, lineno, raw, name))
                continue

            if '=' not in line:
                self._malformed(lineno, raw, 'expected "key=value"')
                continue
            key, val = line.split('=', 1)
            key = key.strip()
            if not key:
                self._malformed(lineno, raw, 'empty key')
                continue
            if this_sect is None:
                logging.warning(
                    f'skipped line {lineno} (under a malformed header): {raw!r}')
                continue
            if key in this_sect and self.duplicates is DuplicatePolicy.ERROR:
                raise DuplicateError(
                    lineno, raw,
                    f'duplicate key "{key}" in section [{this_sect.name}]')
            this_sect.insert(key, val.strip())
        return ret


def parse(text: str, **options) -> IniDocument:
    """Parse INI `text`. Keyword options go to `IniParser`."""
    return IniParser(**options).read(text)


def parse_bytes(
    raw: bytes, encoding: str | None = None, **options
) -> IniDocument:
    return IniParser(**options).readbytes(raw, encoding)

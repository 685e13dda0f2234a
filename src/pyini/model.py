# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 14:10:37

"""
Basically INI Structure: a document of sections, a section of pairs.

Both are read-only mappings once the parser hands them out.
`add_section()` and `insert()` are the only ways in, and they exist
for the parser (or for building a document by hand).
"""

from collections.abc import Mapping
from typing import Callable, Iterator, Sequence, TypeVar

from .consts import DEFAULT_SECTION

T = TypeVar('T')

_TRUTHY = ('1', 'y', 't')
_FALSY = ('0', 'n', 'f')


class NotFound(KeyError):
    """A section (or a key inside one) is not in the document."""

    def __init__(self, section: str, key: str | None = None) -> None:
        super().__init__(section if key is None else key)
        self.section = section
        self.key = key

    def __str__(self) -> str:
        if self.key is None:
            return f'section [{self.section}] not found'
        return f'key "{self.key}" not found in section [{self.section}]'


class IniSection(Mapping[str, str]):
    """INI 小节字典。

    All pairs are `str: str`, empty values included.
    Lookups of absent keys raise `NotFound`.
    """

    def __init__(
        self, name: str, /,
        pairs_to_import: Mapping[str, str] | None = None
    ) -> None:
        self.name = name
        self.__raw: dict[str, str] = {}
        if pairs_to_import:
            for k, v in pairs_to_import.items():
                self.insert(k, v)

    def __getitem__(self, key: str) -> str:
        if key in self.__raw:
            return self.__raw[key]
        raise NotFound(self.name, key)

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __str__(self) -> str:
        return f"[{self.name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.name, len(self.__raw))

    def insert(self, key: str, value: str) -> None:
        # last one wins, duplicates are the parser's business.
        self.__raw[key] = value

    def get(
        self, key: str,
        default: T | None = None,
        converter: Callable[[str], T] = str
    ) -> T | None:
        if key not in self.__raw:
            return default
        return converter(self.__raw[key])

    def getbool(self, key: str, default: bool | None = None) -> bool | None:
        """`1/yes/true` and `0/no/false` (only the first char counts).

        Absent or empty values give `default`, anything else is a
        `ValueError`.
        """
        value = self.__raw.get(key, '')
        if not value:
            return default
        if value[0].lower() in _TRUTHY:
            return True
        if value[0].lower() in _FALSY:
            return False
        raise ValueError(f'[{self.name}] {key}={value} is not a boolean')

    def getint(self, key: str, default: int | None = None) -> int | None:
        value = self.__raw.get(key, '')
        return default if not value else int(value)

    def getlist(self, key: str, sep: str = ',') -> list[str]:
        value = self.__raw.get(key, '')
        return [i.strip() for i in value.split(sep) if i.strip()]

    def to_type_list(self) -> Sequence[str]:
        """Distinct, non-empty values in declaration order.

        Handy for registry-like sections:

            ```ini
            [Plugins]
            0 = cache
            1 = auth
            ```
        """
        ret: dict[str, None] = {}
        for i in self.__raw.values():
            if i:
                ret.setdefault(i, None)
        return list(ret)

    def to_dict(self) -> dict[str, str]:
        return self.__raw.copy()


class IniDocument(Mapping[str, IniSection]):
    """A whole INI text, keyed by section name.

        ```ini
        key = val  ; pairs before any header go to self.header

        [section]
        key233 = val666
        ```

    The default section `""` is always there, even when empty.
    """

    def __init__(self) -> None:
        self.__sections: dict[str, IniSection] = {
            DEFAULT_SECTION: IniSection(DEFAULT_SECTION)
        }

    @property
    def header(self) -> IniSection:
        """位于文件头部的，不属于任何小节的游离键值对。"""
        return self.__sections[DEFAULT_SECTION]

    def __getitem__(self, key: str) -> IniSection:
        if key in self.__sections:
            return self.__sections[key]
        raise NotFound(key)

    def __contains__(self, key: object) -> bool:
        return key in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __repr__(self) -> str:
        return f'<IniDocument sections={list(self.__sections)!r}>'

    def add_section(self, name: str, *, replace: bool = False) -> IniSection:
        """Get section `name`, creating it if needed.

        With `replace=True` an existing section is swapped for an empty
        one (it keeps its position in the document).
        """
        if replace or name not in self.__sections:
            self.__sections[name] = IniSection(name)
        return self.__sections[name]

    def find_key(self, key: str) -> list[str]:
        """Names of every section defining `key`, in document order."""
        return [name for name, sect in self.__sections.items() if key in sect]

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {name: sect.to_dict() for name, sect in self.__sections.items()}

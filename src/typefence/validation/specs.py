"""
Forbidden-type specs.

A spec names a type by the library that declares it:

    package:flutter/src/widgets/framework.dart::Widget
    |------------- locator --------------------|  |type|

The locator must contain a '/' separating the package from the path, and
'::' must come at index 2 or later.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from typefence.errors import MalformedSpec
from typefence.program_info.names import PACKAGE_SEPARATOR, TYPE_SEPARATOR


@dataclass(frozen=True)
class ForbiddenTypeSpec:
    """A parsed ``<package-locator>::<type-name>`` string."""
    raw: str
    locator: str
    type_name: str

    @classmethod
    def parse(cls, raw: str) -> "ForbiddenTypeSpec":
        """Parse raw, raising MalformedSpec when a delimiter is missing."""
        separator = raw.find(TYPE_SEPARATOR)
        slash = raw.find(PACKAGE_SEPARATOR)
        if separator < 2 or slash == -1 or slash > separator:
            raise MalformedSpec(raw)
        type_name = raw[separator + len(TYPE_SEPARATOR):]
        if not type_name:
            raise MalformedSpec(raw)
        return cls(raw=raw, locator=raw[:separator], type_name=type_name)

    @property
    def package(self) -> str:
        """Locator text before the first '/', e.g. ``package:flutter``."""
        return self.locator[:self.locator.index(PACKAGE_SEPARATOR)]

    @property
    def scheme(self) -> str:
        """URI scheme of the locator including the colon, or '' if none."""
        colon = self.locator.find(":")
        return self.locator[:colon + 1] if colon > 0 else ""

    @property
    def lookup_path(self) -> Tuple[str, str, str]:
        """Program-info path probed for this type: package, library, type."""
        return (self.package, self.locator, self.type_name)

    def __str__(self) -> str:
        return self.raw


def unique_specs(raw_specs: Iterable[str]) -> List[str]:
    """Drop duplicate spec strings, keeping first-seen order."""
    return list(dict.fromkeys(raw_specs))

"""
Qualified-name grammar for snapshot display names.

    <library-uri>[::<TypeName>[.<member>]]

where <library-uri> carries a URI scheme, e.g.

    package:foo/src/bar.dart::Foo.build
    dart:core::int

This is the only place that knows how display names are spelled. If the
snapshot format changes its naming, only split_qualified_name changes.
"""

from __future__ import annotations

import re
from typing import List, Optional

TYPE_SEPARATOR = "::"
MEMBER_SEPARATOR = "."
PACKAGE_SEPARATOR = "/"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


def package_of(library_uri: str) -> str:
    """Return the package segment of a library URI (text before the first '/')."""
    slash = library_uri.find(PACKAGE_SEPARATOR)
    return library_uri[:slash] if slash > 0 else library_uri


def split_qualified_name(name: str) -> Optional[List[str]]:
    """
    Split a display name into tree segments, coarsest first.

    Returns [package, library] plus the type and member segments when
    present, or None when the name does not start with a library URI.

    >>> split_qualified_name("package:foo/bar.dart::Foo.build")
    ['package:foo', 'package:foo/bar.dart', 'Foo', 'build']
    """
    library, sep, rest = name.strip().partition(TYPE_SEPARATOR)
    # A bare scheme ("package:") names no library; URIs never contain spaces
    if not _SCHEME_RE.match(library) or library.endswith(":"):
        return None
    if any(c.isspace() for c in library):
        return None

    segments = [package_of(library), library]
    if sep and rest:
        type_name, dot, member = rest.partition(MEMBER_SEPARATOR)
        if type_name:
            segments.append(type_name)
            if dot and member:
                segments.append(member)
    return segments

"""
Exception hierarchy for typefence.

Structural problems with the inputs (snapshot, manifest) are fatal and
abort a run. Problems with a single forbidden-type spec are recoverable:
the runner catches them and records a finding instead.
"""


class TypefenceError(Exception):
    """Base class for all typefence errors."""


class MalformedSnapshot(TypefenceError):
    """The snapshot text is not a decodable heap snapshot."""

    def __init__(self, message: str, source: str = "<snapshot>"):
        self.source = source
        super().__init__(f"Malformed snapshot {source}: {message}")


class MalformedManifest(TypefenceError):
    """The package manifest could not be parsed."""

    def __init__(self, message: str, source: str = "<manifest>"):
        self.source = source
        super().__init__(f"Malformed package manifest {source}: {message}")


class MalformedSpec(TypefenceError):
    """A forbidden-type string lacks the required delimiters."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(
            f'Invalid forbidden type "{raw}". The format must be '
            "<package_uri>::<type_name>, e.g. "
            "package:flutter/src/widgets/framework.dart::Widget"
        )


class MissingManifest(TypefenceError):
    """A package: spec needs validating but no manifest was configured."""

    def __init__(self, spec: str):
        self.spec = spec
        super().__init__(f"No package manifest configured to validate {spec}")

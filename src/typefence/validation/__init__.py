"""
typefence.validation - Forbidden-type specs and existence checks
"""

from typefence.validation.specs import ForbiddenTypeSpec, unique_specs
from typefence.validation.validator import (
    DEFAULT_COMMENT_MARKERS,
    DeclarationCheck,
    DeclarationStatus,
    check_declaration,
    find_type_mention,
    line_mentions_type,
    validate_type,
)
from typefence.errors import MalformedSpec

__all__ = [
    "ForbiddenTypeSpec",
    "MalformedSpec",
    "unique_specs",
    "DEFAULT_COMMENT_MARKERS",
    "DeclarationCheck",
    "DeclarationStatus",
    "check_declaration",
    "find_type_mention",
    "line_mentions_type",
    "validate_type",
]

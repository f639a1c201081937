"""Introspector module for mkvprops.

This module provides container inspection:

- MkvmergeIntrospector: validation and track identification via mkvmerge
- parse_identify_output: JSON parsing with a text fallback
- resolve_language: display-language selection (IETF over legacy)
"""

from mkvprops.exceptions import MediaIntrospectionError
from mkvprops.introspector.mkvmerge import MkvmergeIntrospector
from mkvprops.introspector.parsers import (
    IdentifyParseError,
    IdentifyResult,
    parse_identify_json,
    parse_identify_output,
    parse_identify_text,
    parse_track,
    resolve_language,
)

__all__ = [
    "IdentifyParseError",
    "IdentifyResult",
    "MediaIntrospectionError",
    "MkvmergeIntrospector",
    "parse_identify_json",
    "parse_identify_output",
    "parse_identify_text",
    "parse_track",
    "resolve_language",
]

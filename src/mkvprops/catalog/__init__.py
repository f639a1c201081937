"""Catalog of properties editable by mkvpropedit."""

from mkvprops.catalog.cache import PropertyCatalog
from mkvprops.catalog.parsers import (
    boolean_flag_properties,
    format_display_name,
    infer_section,
    is_flag_property,
    map_property_type,
    parse_property_line,
    parse_property_list,
)

__all__ = [
    "PropertyCatalog",
    "boolean_flag_properties",
    "format_display_name",
    "infer_section",
    "is_flag_property",
    "map_property_type",
    "parse_property_line",
    "parse_property_list",
]

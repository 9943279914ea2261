"""Airspace boundary decoding and point containment queries.

This package decodes airspace definitions (lines, arcs and circles in
aviation notation) into geometric volumes and answers "which volumes
enclose this position?".

Typical usage:
    from airspace import Point, decode, enclosing_volumes

    features = decode(document_bytes)
    volumes = enclosing_volumes(Point(lon=-2.2, lat=57.2), features)
"""

from airspace.classification import clearance_required, danger
from airspace.containment import PreparedVolumes, enclosing_volumes, is_enclosed_by
from airspace.errors import AirspaceDecodeError, AirspaceError, FormatError, LoaderError
from airspace.loader import load_file, load_source, load_url
from airspace.model import Circle, Feature, Point, Volume
from airspace.normaliser import DecodeResult, DecodeWarning, decode, decode_with_warnings
from airspace.repository import AirspaceRepository

__all__ = [
    "AirspaceDecodeError",
    "AirspaceError",
    "AirspaceRepository",
    "Circle",
    "DecodeResult",
    "DecodeWarning",
    "Feature",
    "FormatError",
    "LoaderError",
    "Point",
    "PreparedVolumes",
    "Volume",
    "clearance_required",
    "danger",
    "decode",
    "decode_with_warnings",
    "enclosing_volumes",
    "is_enclosed_by",
    "load_file",
    "load_source",
    "load_url",
]

"""Airspace document decoding and normalisation.

This module turns a YAML airspace document (as published by the UK
airspace project, https://gitlab.com/ahsparrow/airspace) into Feature and
Volume objects.

Decoding is all-or-nothing for structural problems: an unparseable
document or a malformed coordinate raises AirspaceDecodeError and no
features are returned. Malformed heights and distances are tolerated,
decoded as zero and reported as DecodeWarning records.

Typical usage:
    from airspace.normaliser import decode

    with open("airspace.yaml", "rb") as f:
        features = decode(f.read())
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any

import yaml

from airspace.arc import ARC_STEP_DEG, ArcDirection, arc_to_polygon
from airspace.classification import clearance_required, danger
from airspace.errors import AirspaceDecodeError, FormatError
from airspace.model import Circle, Feature, Point, Volume
from airspace.units import Measurement, decode_distance, decode_height, decode_position

logger = logging.getLogger(__name__)

# Raw types whose real meaning is carried by the "localtype" field.
LOCAL_TYPE_SENTINELS = ("OTHER", "D_OTHER")


class _TextLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain scalars as text.

    YAML 1.1 would otherwise turn names such as NO or ON into booleans and
    1:30 into a sexagesimal integer. Only null and merge keys are resolved.
    """


_TextLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag in ("tag:yaml.org,2002:null", "tag:yaml.org,2002:merge")
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class DecodeWarning:
    """Non-fatal data-quality problem found while decoding.

    Attributes:
        context: Where the problem was found (feature id and sequence)
        message: Description of the problem
    """

    context: str
    message: str

    def __str__(self) -> str:
        return f"{self.context}: {self.message}"


@dataclass
class DecodeResult:
    """Features decoded from a document together with any warnings."""

    features: list[Feature] = field(default_factory=list)
    warnings: list[DecodeWarning] = field(default_factory=list)


def resolve_type(raw_type: str, local_type: str) -> str:
    """Resolve the effective airspace type.

    Args:
        raw_type: The record's "type" field
        local_type: The record's "localtype" field

    Returns:
        local_type for the OTHER/D_OTHER sentinels, raw_type otherwise
    """
    if raw_type in LOCAL_TYPE_SENTINELS:
        return local_type
    return raw_type


def resolve_feature_id(raw_id: str, name: str, index: int) -> str:
    """Resolve a feature identifier.

    Drop zones and similar records have no explicit ID, so one is built
    from the name and the record's position in the source list. Reordering
    the source therefore changes synthesised IDs.

    Args:
        raw_id: The record's "id" field, possibly empty
        name: The record's name
        index: Position of the record in the source list

    Returns:
        Trimmed raw_id, or "<name-with-hyphens>-<index>" in lowercase

    Examples:
        >>> resolve_feature_id("", "Drop Zone Alpha", 5)
        'drop-zone-alpha-5'
    """
    feature_id = raw_id.strip()
    if feature_id:
        return feature_id
    return f"{name.replace(' ', '-').lower()}-{index}"


def decode(data: bytes | str) -> list[Feature]:
    """Decode an airspace YAML document into features.

    Args:
        data: Raw document bytes or text

    Returns:
        Features in source order (empty for an empty document)

    Raises:
        AirspaceDecodeError: If the document or a coordinate is malformed
    """
    return decode_with_warnings(data).features


def decode_with_warnings(data: bytes | str, arc_step_deg: float = ARC_STEP_DEG) -> DecodeResult:
    """Decode an airspace YAML document, collecting non-fatal warnings.

    Args:
        data: Raw document bytes or text
        arc_step_deg: Angular step used when rasterising arcs

    Returns:
        DecodeResult with features and warnings

    Raises:
        AirspaceDecodeError: If the document or a coordinate is malformed
    """
    try:
        document = yaml.load(data, Loader=_TextLoader)
    except yaml.YAMLError as e:
        raise AirspaceDecodeError(f"failed to unmarshal YAML: {e}") from e

    result = DecodeResult()
    if document is None:
        return result

    if not isinstance(document, dict):
        raise AirspaceDecodeError("failed to unmarshal YAML: top level is not a mapping")

    records = document.get("airspace") or []
    if not isinstance(records, list):
        raise AirspaceDecodeError("failed to unmarshal YAML: 'airspace' is not a list")

    for index, record in enumerate(records):
        result.features.append(_normalise_feature(record, index, arc_step_deg, result.warnings))

    logger.info(
        "Decoded %d airspace features (%d volumes, %d warnings)",
        len(result.features),
        sum(len(f.geometry) for f in result.features),
        len(result.warnings),
    )
    return result


def _text(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value)


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise AirspaceDecodeError(f"failed to unmarshal YAML: {what} is not a mapping: {value!r}")
    return value


def _sequence(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise AirspaceDecodeError(f"failed to unmarshal YAML: {what} is not a list: {value!r}")
    return value


def _normalise_feature(
    raw: Any, index: int, arc_step_deg: float, warnings: list[DecodeWarning]
) -> Feature:
    record = _mapping(raw, f"airspace entry {index}")
    name = _text(record, "name")

    feature = Feature(
        id=resolve_feature_id(_text(record, "id"), name, index),
        name=name,
        type=resolve_type(_text(record, "type"), _text(record, "localtype")),
        cls=_text(record, "class"),
    )

    volumes = tuple(
        _build_volume(
            _mapping(geometry, f"geometry of {feature.id}"), feature, arc_step_deg, warnings
        )
        for geometry in _sequence(record.get("geometry"), f"geometry of {feature.id}")
    )
    return replace(feature, geometry=volumes)


def _build_volume(
    geometry: dict[str, Any],
    feature: Feature,
    arc_step_deg: float,
    warnings: list[DecodeWarning],
) -> Volume:
    sequence = _sequence_number(geometry.get("seqno"), feature.id)
    context = f"{feature.id} seq {sequence}"

    def measure(measurement: Measurement) -> float:
        if measurement.warning:
            warnings.append(DecodeWarning(context, measurement.warning))
            logger.warning("%s: %s", context, measurement.warning)
        return measurement.value

    circle = Circle()
    polygon: list[Point] = []
    current: Point | None = None

    for raw in _sequence(geometry.get("boundary"), f"boundary of {context}"):
        primitive = _mapping(raw, f"boundary primitive of {context}")

        if "circle" in primitive:
            definition = _mapping(primitive["circle"], f"circle of {context}")
            circle = Circle(
                radius=measure(decode_distance(_text(definition, "radius"))),
                centre=_position(definition.get("centre"), "circle", primitive),
            )

        if "line" in primitive:
            line = primitive["line"]
            if isinstance(line, str):
                line = [line]
            for text in _sequence(line, f"line of {context}"):
                current = _position(text, "line", primitive)
                polygon.append(current)

        if "arc" in primitive:
            definition = _mapping(primitive["arc"], f"arc of {context}")
            to = _position(definition.get("to"), "arc", primitive)
            centre = _position(definition.get("centre"), "arc", primitive)
            if current is None:
                raise AirspaceDecodeError(f"bad arc {primitive!r}: no preceding point")
            polygon.extend(
                arc_to_polygon(
                    centre,
                    measure(decode_distance(_text(definition, "radius"))),
                    current,
                    to,
                    ArcDirection.parse(_text(definition, "dir")),
                    arc_step_deg,
                )
            )
            current = to

    return Volume(
        id=_text(geometry, "id") or feature.id,
        name=_text(geometry, "name") or feature.name,
        type=feature.type,
        cls=_text(geometry, "class") or feature.cls,
        sequence=sequence,
        lower=measure(decode_height(_text(geometry, "lower"))),
        upper=measure(decode_height(_text(geometry, "upper"))),
        clearance_required=clearance_required(feature),
        danger=danger(feature),
        circle=circle,
        polygon=tuple(polygon),
    )


def _sequence_number(value: Any, feature_id: str) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise AirspaceDecodeError(f"bad seqno {value!r} in {feature_id}") from e


def _position(text: Any, kind: str, primitive: dict[str, Any]) -> Point:
    try:
        return decode_position(text)
    except FormatError as e:
        raise AirspaceDecodeError(f"bad {kind} {primitive!r}: {e}") from e

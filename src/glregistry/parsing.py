"""Conversion of registry XML elements into registry data types."""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from typing import NamedTuple, Optional, Union

from .errors import MalformedInputError, MissingInputError
from .types import (
    NONE,
    FeatureKind,
    GLCommand,
    GLEnum,
    GLExtension,
    GLFeature,
    GLFeatureGroup,
    GLGroup,
    GLParam,
    NativeType,
    parse_int,
    version_key,
)

logger = logging.getLogger(__name__)

# Storage type of an <enum> by its "type" attribute
ENUM_TYPES = {"u": "GLuint", "ull": "GLuint64"}

FEATURE_TAGS = {kind.value: kind for kind in FeatureKind}


class Signature(NamedTuple):
    """A declaration split into its type string, identifier and base type."""

    type: str  # "const GLchar *"
    name: Optional[str]  # "pName"
    base: Optional[str]  # "GLchar"


def _require(elem: Optional[ET.Element], what: str) -> ET.Element:
    if elem is None:
        raise MissingInputError(f"{what} element cannot be None")
    return elem


def iter_content(elem: ET.Element) -> Iterator[Union[str, ET.Element]]:
    """Yield the mixed content of an element in document order."""
    if elem.text:
        yield elem.text
    for child in elem:
        yield child
        if child.tail:
            yield child.tail


def parse_signature(elem: ET.Element) -> Signature:
    """Reconstruct a C declaration from a <proto> or <param> element.

    The type is spread over free text and a <ptype> child, e.g.
    ``const <ptype>GLchar</ptype> *<name>pName</name>``: text and <ptype>
    content are joined in order, <name> content is the identifier and any
    other child (or comment) is ignored.
    """
    _require(elem, "Declaration")

    buffer = []
    name = None
    base = None
    for item in iter_content(elem):
        if isinstance(item, str):
            buffer.append(item)
        elif item.tag == "ptype":
            base = item.text or ""
            buffer.append(base)
        elif item.tag == "name":
            name = item.text
        # Comments, processing instructions and unknown tags carry no type text

    return Signature(type="".join(buffer).strip(), name=name, base=base)


def parse_enum(enum_elem: ET.Element) -> GLEnum:
    """Parse a single <enum> constant."""
    _require(enum_elem, "Enum")

    name = enum_elem.get("name")
    value = enum_elem.get("value")
    if not name or not value:
        raise MalformedInputError("Enum missing name or value")

    # Value must be usable as an integer (can be hex or decimal)
    parse_int(value)

    groups = enum_elem.get("group")
    return GLEnum(
        name=name,
        value=value,
        alias=enum_elem.get("alias"),
        api=enum_elem.get("api"),
        type=ENUM_TYPES.get(enum_elem.get("type", ""), "GLenum"),
        groups=tuple(groups.split(",")) if groups else (),
        comment=enum_elem.get("comment"),
    )


def parse_group(enums_elem: ET.Element, members: tuple[GLEnum, ...] = ()) -> GLGroup:
    """Parse the attributes of an <enums> block.

    Members are parsed by the caller, which decides what to do with
    malformed constants. An unreadable start/end range is dropped.
    """
    _require(enums_elem, "Enums")

    value_range = None
    start = enums_elem.get("start")
    end = enums_elem.get("end")
    if start and end:
        try:
            value_range = range(parse_int(start), parse_int(end) + 1)
        except MalformedInputError as e:
            logger.warning(
                "Ignoring range of enums %r: %s", enums_elem.get("group"), e
            )

    return GLGroup(
        namespace=enums_elem.get("namespace"),
        name=enums_elem.get("group"),
        members=members,
        vendor=enums_elem.get("vendor"),
        value_range=value_range,
        bitmask=enums_elem.get("type") == "bitmask",
        comment=enums_elem.get("comment"),
    )


def parse_param(param_elem: ET.Element) -> GLParam:
    """Parse a function parameter."""
    _require(param_elem, "Param")

    signature = parse_signature(param_elem)
    if not signature.name:
        raise MalformedInputError("Parameter missing name")

    return GLParam(
        name=signature.name,
        type=NativeType.from_declaration(
            signature.type, signature.base, param_elem.get("group")
        ),
        length=param_elem.get("len"),
        comment=param_elem.get("comment"),
    )


def parse_command(command_elem: ET.Element) -> GLCommand:
    """Parse a <command> definition: prototype, parameters and aliases."""
    _require(command_elem, "Command")

    proto_elem = command_elem.find("proto")
    if proto_elem is None:
        raise MalformedInputError("Command missing <proto>")

    signature = parse_signature(proto_elem)
    if not signature.name:
        raise MalformedInputError("Command prototype missing name")

    alias_elem = command_elem.find("alias")
    vecequiv_elem = command_elem.find("vecequiv")

    return GLCommand(
        name=signature.name,
        type=NativeType.from_declaration(
            signature.type, signature.base, proto_elem.get("group")
        ),
        params=tuple(parse_param(p) for p in command_elem.findall("param")),
        alias=alias_elem.get("name") if alias_elem is not None else None,
        vecequiv=vecequiv_elem.get("name") if vecequiv_elem is not None else None,
        comment=command_elem.get("comment"),
    )


def parse_feature(
    item_elem: ET.Element, api: Optional[str] = None, profile: Optional[str] = None
) -> Optional[GLFeature]:
    """Parse one child of a <require>/<remove> block.

    Returns None for children that do not reference an enum, command or type.
    """
    _require(item_elem, "Feature")

    kind = FEATURE_TAGS.get(item_elem.tag)
    name = item_elem.get("name")
    if kind is None or not name:
        return None

    return GLFeature(
        name=name,
        kind=kind,
        api=api or NONE,
        profile=profile or NONE,
        comment=item_elem.get("comment"),
    )


def _parse_blocks(
    provider_elem: ET.Element, tag: str, api: str
) -> tuple[GLFeature, ...]:
    features = []
    for block in provider_elem.findall(tag):
        block_api = block.get("api") or api
        block_profile = block.get("profile")
        for item in block:
            if not isinstance(item.tag, str):
                continue  # comment node
            feature = parse_feature(item, block_api, block_profile)
            if feature is not None:
                features.append(feature)
    return tuple(features)


def parse_feature_group(feature_elem: ET.Element) -> GLFeatureGroup:
    """Parse a <feature> block (one API version)."""
    _require(feature_elem, "Feature group")

    api = feature_elem.get("api") or NONE
    version = feature_elem.get("number")
    if not version:
        raise MalformedInputError("Feature missing version number")
    version_key(version)

    return GLFeatureGroup(
        name=feature_elem.get("name", ""),
        api=api,
        version=version,
        additions=_parse_blocks(feature_elem, "require", api),
        removals=_parse_blocks(feature_elem, "remove", api),
        comment=feature_elem.get("comment"),
    )


def parse_extension(extension_elem: ET.Element) -> GLExtension:
    """Parse an <extension> block."""
    _require(extension_elem, "Extension")

    api = extension_elem.get("api") or NONE
    supported = extension_elem.get("supported")

    return GLExtension(
        name=extension_elem.get("name", ""),
        api=api,
        additions=_parse_blocks(extension_elem, "require", api),
        supported=frozenset(supported.split("|")) if supported else frozenset(),
        comment=extension_elem.get("comment"),
    )

"""OpenGL registry parsing."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from .errors import MalformedInputError, MissingInputError
from .parsing import (
    parse_command,
    parse_enum,
    parse_extension,
    parse_feature_group,
    parse_group,
)
from .types import GLCommand, GLEnum, GLExtension, GLFeatureGroup, GLGroup, version_key

logger = logging.getLogger(__name__)


class GLRegistry:
    """All definitions of one OpenGL registry XML document.

    The registry is built once and treated as read-only afterwards; any number
    of :class:`~glregistry.spec.GLSpec` instances may query it.
    """

    def __init__(self, root: ET.Element) -> None:
        if root is None:
            raise MissingInputError("Registry root element cannot be None")

        self.groups: tuple[GLGroup, ...] = self.parse_groups(root)
        self.commands: tuple[GLCommand, ...] = self.parse_commands(root)
        self.features: tuple[GLFeatureGroup, ...] = self.parse_features(root)
        self.extensions: tuple[GLExtension, ...] = self.parse_extensions(root)
        self.enums: tuple[GLEnum, ...] = tuple(
            enum for group in self.groups for enum in group.members
        )

        # Name indexes; the first definition of a name wins, except that enums
        # may be redefined per API
        self._commands_by_name: dict[str, GLCommand] = {}
        for command in self.commands:
            self._commands_by_name.setdefault(command.name, command)
        self._enums_by_name: dict[str, list[GLEnum]] = {}
        for enum in self.enums:
            self._enums_by_name.setdefault(enum.name, []).append(enum)
        self._extensions_by_name: dict[str, GLExtension] = {}
        for extension in self.extensions:
            self._extensions_by_name.setdefault(extension.name, extension)

        logger.debug(
            "Loaded registry: %d enums in %d groups, %d commands, "
            "%d features, %d extensions",
            len(self.enums),
            len(self.groups),
            len(self.commands),
            len(self.features),
            len(self.extensions),
        )

    @classmethod
    def load(cls, xml_path: Union[str, Path]) -> "GLRegistry":
        """Load and parse the OpenGL registry XML."""
        tree = ET.parse(xml_path)
        return cls(tree.getroot())

    @classmethod
    def parse(cls, xml_content: str) -> "GLRegistry":
        """Parse the OpenGL registry from an XML string."""
        return cls(ET.fromstring(xml_content))

    def parse_groups(self, root: ET.Element) -> tuple[GLGroup, ...]:
        """Parse enum groups and their constants from the registry."""
        groups = []
        for enums_elem in root.findall("enums"):
            members = []
            for enum_elem in enums_elem.findall("enum"):
                try:
                    members.append(parse_enum(enum_elem))
                except MalformedInputError as e:
                    logger.warning("Skipping enum %r: %s", enum_elem.get("name"), e)
                    continue

            groups.append(parse_group(enums_elem, tuple(members)))
        return tuple(groups)

    def parse_commands(self, root: ET.Element) -> tuple[GLCommand, ...]:
        """Parse command definitions from the registry."""
        commands_group = root.find("commands")
        if commands_group is None:
            return ()

        commands = []
        for command_elem in commands_group.findall("command"):
            try:
                commands.append(parse_command(command_elem))
            except MalformedInputError as e:
                logger.warning("Skipping malformed command: %s", e)
                continue  # Skip malformed commands
        return tuple(commands)

    def parse_features(self, root: ET.Element) -> tuple[GLFeatureGroup, ...]:
        """Parse feature definitions (versions) from the registry."""
        features = []
        for feature_elem in root.findall("feature"):
            try:
                features.append(parse_feature_group(feature_elem))
            except MalformedInputError as e:
                logger.warning("Skipping feature %r: %s", feature_elem.get("name"), e)
                continue
        return tuple(features)

    def parse_extensions(self, root: ET.Element) -> tuple[GLExtension, ...]:
        """Parse extension definitions from the registry."""
        extensions_group = root.find("extensions")
        if extensions_group is None:
            return ()

        return tuple(
            parse_extension(extension_elem)
            for extension_elem in extensions_group.findall("extension")
        )

    def get_command(self, name: str) -> Optional[GLCommand]:
        return self._commands_by_name.get(name)

    def get_enum(self, name: str, api: Optional[str] = None) -> Optional[GLEnum]:
        """Look up an enum by name.

        With ``api``, a definition tagged for that API is preferred, then an
        untagged one. Otherwise the first definition is returned.
        """
        candidates = self._enums_by_name.get(name)
        if not candidates:
            return None
        if api is not None:
            for tag in (api, None):
                for enum in candidates:
                    if enum.api == tag:
                        return enum
        return candidates[0]

    def get_extension(self, name: str) -> Optional[GLExtension]:
        return self._extensions_by_name.get(name)

    def api_names(self) -> list[str]:
        """Get the names of all APIs that have at least one feature group."""
        return list(dict.fromkeys(feature.api for feature in self.features))

    def versions(self, api: str) -> list[str]:
        """Get the version numbers defined for an API, in ascending order."""
        numbers = dict.fromkeys(f.version for f in self.features if f.api == api)
        return sorted(numbers, key=version_key)

    def profiles(
        self, api: Optional[str] = None, version: Optional[str] = None
    ) -> list[str]:
        """Get the profile names used by feature groups.

        Limited to one API and to versions up to and including ``version``
        when given.
        """
        features = self.features
        if api is not None:
            features = tuple(f for f in features if f.api == api)
        if version is not None:
            threshold = version_key(version)
            features = tuple(f for f in features if f.version_key <= threshold)

        return list(
            dict.fromkeys(
                addition.profile
                for feature in features
                for addition in feature.additions
            )
        )

"""Resolution of the definitions required by one OpenGL API version/profile."""

import logging
from collections.abc import Iterable
from typing import Callable, Optional, TypeVar, Union

from .errors import MissingInputError
from .registry import GLRegistry
from .types import NONE, FeatureKind, GLCommand, GLEnum, GLFeature, version_key

logger = logging.getLogger(__name__)

T = TypeVar("T", GLCommand, GLEnum)


class GLSpec:
    """A subset of a registry targeting an API, version, profile and extensions.

    Every query replays the registry's feature groups and the requested
    extensions, so results always reflect the registry as it is now. They
    are not cached; keep the returned lists if you need them repeatedly.
    """

    def __init__(
        self,
        registry: Optional[GLRegistry],
        api: str,
        version: Union[str, float],
        profile: str = NONE,
        extensions: Iterable[str] = (),
    ) -> None:
        self.registry = registry
        self.api = api
        self.version = str(version)
        self.profile = profile or NONE
        if isinstance(extensions, str):
            extensions = [extensions]
        self.extensions: list[str] = list(dict.fromkeys(extensions))
        self._version_key = version_key(self.version)

    def __str__(self) -> str:
        name = f"Open{self.api.upper()} {self.version}"
        if self.profile != NONE:
            return f"{name} ({self.profile} profile)"
        return name

    def __repr__(self) -> str:
        return (
            f"GLSpec(api={self.api!r}, version={self.version!r}, "
            f"profile={self.profile!r}, extensions={self.extensions!r})"
        )

    def functions(self) -> list[GLCommand]:
        """Get all commands this specification defines."""
        return self._resolve(FeatureKind.FUNCTION, self._registry().get_command)

    def enums(self) -> list[GLEnum]:
        """Get all enum constants this specification defines."""
        registry = self._registry()
        return self._resolve(
            FeatureKind.ENUM, lambda name: registry.get_enum(name, self.api)
        )

    def types(self, include_groups: bool = False) -> list[str]:
        """Get the base types used by the commands of this specification.

        With ``include_groups``, the group names of return values and
        parameters are included as well.
        """
        values: dict[str, None] = {}
        for command in self.functions():
            for native_type in [command.type] + [p.type for p in command.params]:
                values[native_type.base] = None
                if include_groups and native_type.group:
                    values[native_type.group] = None
        return list(values)

    def used_groups(self) -> list[str]:
        """Get the enum group names referenced by this specification's commands."""
        names: dict[str, None] = {}
        for command in self.functions():
            for native_type in [command.type] + [p.type for p in command.params]:
                if native_type.group:
                    names[native_type.group] = None
        return list(names)

    def _registry(self) -> GLRegistry:
        if self.registry is None:
            raise MissingInputError(f"{self!r} has no registry")
        return self.registry

    def _matches(self, feature: GLFeature, kind: FeatureKind) -> bool:
        return feature.kind is kind and feature.profile in (NONE, self.profile)

    def _resolve(
        self, kind: FeatureKind, lookup: Callable[[str], Optional[T]]
    ) -> list[T]:
        registry = self._registry()

        # Keyed by name: re-adding replaces, removing a missing name is a no-op
        values: dict[str, T] = {}

        def add(feature: GLFeature) -> None:
            definition = lookup(feature.name)
            if definition is None:
                logger.debug(
                    "%s %r is not defined in the registry", kind.value, feature.name
                )
                return
            values[feature.name] = definition

        # Core versions, up to and including the target version
        for group in registry.features:
            if group.api != self.api or group.version_key > self._version_key:
                continue

            for feature in group.additions:
                if self._matches(feature, kind):
                    add(feature)

            for feature in group.removals:
                if self._matches(feature, kind):
                    values.pop(feature.name, None)

        # Extensions only add, and are not subject to version removals
        for name in self.extensions:
            extension = registry.get_extension(name)
            if extension is None or not extension.supports(self.api):
                logger.debug(
                    "Skipping extension %r: not available for %s", name, self.api
                )
                continue

            for feature in extension.additions:
                if self._matches(feature, kind):
                    add(feature)

        return list(values.values())

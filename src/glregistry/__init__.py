"""glregistry - OpenGL registry model and API version resolution."""

__version__ = "0.1.0"

from .errors import MalformedInputError, MissingInputError, RegistryError
from .registry import GLRegistry
from .spec import GLSpec
from .types import (
    GL_TYPES,
    NONE,
    FeatureKind,
    FeatureProvider,
    GLCommand,
    GLEnum,
    GLExtension,
    GLFeature,
    GLFeatureGroup,
    GLGroup,
    GLParam,
    NativeType,
)

__all__ = [
    "GLRegistry",
    "GLSpec",
    "NativeType",
    "GLEnum",
    "GLGroup",
    "GLParam",
    "GLCommand",
    "FeatureKind",
    "GLFeature",
    "FeatureProvider",
    "GLFeatureGroup",
    "GLExtension",
    "NONE",
    "GL_TYPES",
    "RegistryError",
    "MissingInputError",
    "MalformedInputError",
]

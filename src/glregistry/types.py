"""Data types for OpenGL registry parsing."""

import enum
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from .errors import MalformedInputError

NONE = "none"  # api/profile tag meaning "not restricted"
VOID = "GLvoid"  # base type of declarations without a <ptype>

_CONST_WORD = re.compile(r"\bconst\b")

# Every native type a registry declaration may reference
GL_TYPES = frozenset(
    {
        "GLenum",
        "GLboolean",
        "GLbitfield",
        "GLvoid",
        "GLbyte",
        "GLubyte",
        "GLshort",
        "GLushort",
        "GLint",
        "GLuint",
        "GLclampx",
        "GLsizei",
        "GLfloat",
        "GLclampf",
        "GLdouble",
        "GLclampd",
        "GLeglClientBufferEXT",
        "GLeglImageOES",
        "GLchar",
        "GLhandleARB",
        "GLhalf",
        "GLhalfARB",
        "GLfixed",
        "GLintptr",
        "GLintptrARB",
        "GLsizeiptr",
        "GLsizeiptrARB",
        "GLint64",
        "GLint64EXT",
        "GLuint64",
        "GLuint64EXT",
        "GLsync",
        "struct _cl_context",
        "struct _cl_event",
        "GLDEBUGPROC",
        "GLDEBUGPROCARB",
        "GLDEBUGPROCKHR",
        "GLDEBUGPROCAMD",
        "GLhalfNV",
        "GLvdpauSurfaceNV",
        "GLVULKANPROCNV",
    }
)


def parse_int(text: str) -> int:
    """Parse a registry numeric literal (hex if prefixed with 0x)."""
    try:
        if text.startswith("0x"):
            return int(text, 16)
        return int(text)
    except ValueError:
        raise MalformedInputError(f"Invalid numeric value: {text!r}") from None


def version_key(version: Union[str, float]) -> tuple[int, ...]:
    """Convert a version number into a tuple that compares numerically.

    Trailing zero components are dropped so that "4" and "4.0" are equal,
    and "3.10" sorts after "3.2".
    """
    text = str(version).strip()
    try:
        parts = [int(part) for part in text.split(".")]
    except ValueError:
        raise MalformedInputError(f"Invalid version number: {text!r}") from None

    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


@dataclass(frozen=True)
class NativeType:
    """A C type as written in a <proto> or <param> declaration."""

    type: str  # "const GLchar *"
    base: str = VOID  # "GLchar"
    group: Optional[str] = None  # "ShaderType"

    @classmethod
    def from_declaration(
        cls, type_string: str, base: Optional[str], group: Optional[str] = None
    ) -> "NativeType":
        return cls(type=type_string.strip(), base=base or VOID, group=group)

    @property
    def is_pointer(self) -> bool:
        return "*" in self.type

    @property
    def is_const(self) -> bool:
        return self.type.startswith("const ")

    @property
    def is_out(self) -> bool:
        """True for pointers the callee may write through."""
        return self.is_pointer and not _CONST_WORD.search(self.type)

    def __str__(self) -> str:
        return self.type


@dataclass(frozen=True)
class GLEnum:
    """Represents an OpenGL enum constant."""

    name: str  # "GL_COLOR_BUFFER_BIT"
    value: str  # "0x00004000"
    alias: Optional[str] = None
    api: Optional[str] = None  # "gles2" for API-specific values
    type: str = "GLenum"  # "GLuint" or "GLuint64" for wide constants
    groups: tuple[str, ...] = ()  # ("ClearBufferMask",)
    comment: Optional[str] = None

    def to_int(self) -> int:
        return parse_int(self.value)


@dataclass(frozen=True)
class GLGroup:
    """An <enums> block of the registry."""

    namespace: Optional[str]  # "GL"
    name: Optional[str] = None  # None for catch-all blocks
    members: tuple[GLEnum, ...] = ()
    vendor: Optional[str] = None  # "ARB"
    value_range: Optional[range] = None  # inclusive start/end
    bitmask: bool = False
    comment: Optional[str] = None


@dataclass(frozen=True)
class GLParam:
    """Represents a function parameter."""

    name: str  # "target"
    type: NativeType
    length: Optional[str] = None  # "count", "COMPSIZE(pname)", "4"
    comment: Optional[str] = None


@dataclass(frozen=True)
class GLCommand:
    """Represents an OpenGL function/command."""

    name: str  # "glClear"
    type: NativeType  # return type
    params: tuple[GLParam, ...] = ()
    alias: Optional[str] = None  # "glClearEXT" -> "glClear"
    vecequiv: Optional[str] = None  # "glColor3f" -> "glColor3fv"
    comment: Optional[str] = None


class FeatureKind(enum.Enum):
    ENUM = "enum"
    FUNCTION = "command"
    TYPE = "type"


@dataclass(frozen=True)
class GLFeature:
    """A reference, by name, to an enum, command or type defined elsewhere."""

    name: str
    kind: FeatureKind
    api: str = NONE
    profile: str = NONE
    comment: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class FeatureProvider:
    """Common shape of <feature> and <extension>: a list of required features."""

    name: str
    api: str = NONE
    additions: tuple[GLFeature, ...] = ()
    comment: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class GLFeatureGroup(FeatureProvider):
    """A core API version: the features it adds and the ones it removes."""

    version: str  # "3.3"
    removals: tuple[GLFeature, ...] = ()

    @property
    def version_key(self) -> tuple[int, ...]:
        return version_key(self.version)


@dataclass(frozen=True, kw_only=True)
class GLExtension(FeatureProvider):
    """An extension and the APIs it may be used with."""

    supported: frozenset[str] = field(default_factory=frozenset)

    def supports(self, api: str) -> bool:
        return api in self.supported

import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

import pytest

from glregistry import GLRegistry

SAMPLE_GL_XML = """<?xml version="1.0" encoding="UTF-8"?>
<registry>
    <enums namespace="GL" group="ClearBufferMask" type="bitmask">
        <enum value="0x00004000" name="GL_COLOR_BUFFER_BIT"/>
        <enum value="0x00000100" name="GL_DEPTH_BUFFER_BIT"/>
    </enums>
    <enums namespace="GL" start="0x8B30" end="0x8B3F" vendor="ARB">
        <enum value="0x8B30" name="GL_FRAGMENT_SHADER" group="ShaderType"/>
        <enum value="0x8B31" name="GL_VERTEX_SHADER" group="ShaderType"/>
        <enum value="0x0B21" name="GL_LINE_WIDTH"/>
        <enum value="0x0BC0" name="GL_ALPHA_TEST"/>
        <enum value="0x8C2F" name="GL_ANY_SAMPLES_PASSED_EXT"/>
    </enums>
    <commands namespace="GL">
        <command>
            <proto>void <name>glClear</name></proto>
            <param group="ClearBufferMask"><ptype>GLbitfield</ptype> <name>mask</name></param>
        </command>
        <command>
            <proto><ptype>GLuint</ptype> <name>glCreateShader</name></proto>
            <param group="ShaderType"><ptype>GLenum</ptype> <name>type</name></param>
        </command>
        <command>
            <proto>void <name>glShaderSource</name></proto>
            <param><ptype>GLuint</ptype> <name>shader</name></param>
            <param><ptype>GLsizei</ptype> <name>count</name></param>
            <param len="count">const <ptype>GLchar</ptype> *const*<name>string</name></param>
            <param len="count">const <ptype>GLint</ptype> *<name>length</name></param>
        </command>
        <command>
            <proto>void <name>glBegin</name></proto>
            <param group="PrimitiveType"><ptype>GLenum</ptype> <name>mode</name></param>
        </command>
        <command>
            <proto>void <name>glGenQueriesEXT</name></proto>
            <param><ptype>GLsizei</ptype> <name>n</name></param>
            <param len="n"><ptype>GLuint</ptype> *<name>ids</name></param>
            <alias name="glGenQueries"/>
        </command>
    </commands>
    <feature api="gl" name="GL_VERSION_1_0" number="1.0">
        <require>
            <command name="glClear"/>
            <command name="glBegin"/>
            <enum name="GL_COLOR_BUFFER_BIT"/>
            <enum name="GL_DEPTH_BUFFER_BIT"/>
            <enum name="GL_LINE_WIDTH"/>
            <enum name="GL_ALPHA_TEST"/>
        </require>
    </feature>
    <feature api="gl" name="GL_VERSION_2_0" number="2.0">
        <require>
            <command name="glCreateShader"/>
            <command name="glShaderSource"/>
            <enum name="GL_FRAGMENT_SHADER"/>
            <enum name="GL_VERTEX_SHADER"/>
        </require>
    </feature>
    <feature api="gl" name="GL_VERSION_3_2" number="3.2">
        <remove profile="core" comment="Compatibility-only features">
            <command name="glBegin"/>
            <enum name="GL_ALPHA_TEST"/>
        </remove>
    </feature>
    <feature api="gles2" name="GL_ES_VERSION_2_0" number="2.0">
        <require>
            <command name="glClear"/>
            <command name="glCreateShader"/>
            <enum name="GL_COLOR_BUFFER_BIT"/>
        </require>
    </feature>
    <extensions>
        <extension name="GL_EXT_occlusion_query_boolean" supported="gles2">
            <require>
                <command name="glGenQueriesEXT"/>
                <enum name="GL_ANY_SAMPLES_PASSED_EXT"/>
            </require>
        </extension>
        <extension name="GL_ARB_shader_objects" supported="gl|glcore">
            <require>
                <command name="glCreateShader"/>
            </require>
        </extension>
        <extension name="GL_EXT_disabled" supported="disabled">
            <require>
                <command name="glBegin"/>
            </require>
        </extension>
    </extensions>
</registry>
"""


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_GL_XML


@pytest.fixture
def sample_registry() -> GLRegistry:
    return GLRegistry.parse(SAMPLE_GL_XML)


@pytest.fixture
def gl_xml_file(tmp_path: Path) -> Path:
    path = tmp_path / "gl.xml"
    path.write_text(SAMPLE_GL_XML, encoding="utf-8")
    return path


@pytest.fixture
def make_registry() -> Callable[[str], GLRegistry]:
    def _make_registry(inner_xml: str) -> GLRegistry:
        return GLRegistry(ET.fromstring(f"<registry>{inner_xml}</registry>"))

    return _make_registry

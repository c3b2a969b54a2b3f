"""Command line interface for the OpenGL registry."""

import argparse
import json
import logging
import shutil
import sys
import urllib.request
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .errors import RegistryError
from .registry import GLRegistry
from .spec import GLSpec

logger = logging.getLogger(__name__)

GL_XML_URL = (
    "https://raw.githubusercontent.com/KhronosGroup/OpenGL-Registry/main/xml/gl.xml"
)
GL_XML_COMMITS_URL = (
    "https://api.github.com/repos/KhronosGroup/OpenGL-Registry/commits?path=xml/gl.xml"
)

LISTINGS = ("apis", "profiles", "versions", "functions", "enums", "types", "groups")


def download_gl_xml(output_path: Path, force: bool = False) -> None:
    """Download the latest gl.xml from Khronos registry."""
    if output_path.exists() and not force:
        print(f"gl.xml already exists at {output_path}. Use --force to re-download.")
        return

    print(f"Downloading gl.xml from {GL_XML_URL}...")

    try:
        # Only a complete download replaces output_path
        filename, _ = urllib.request.urlretrieve(GL_XML_URL)
        shutil.move(filename, output_path)
        print(f"Downloaded gl.xml to {output_path}")
    except OSError as e:
        print(f"Failed to download gl.xml: {e}")
        sys.exit(1)


def is_outdated(path: Path, timeout: float = 5.0) -> bool:
    """Check whether a newer gl.xml was committed after the local file was written.

    Only file timestamps are compared, so the answer is a hint. Returns False
    when the file does not exist or the remote cannot be queried.
    """
    if not path.exists():
        return False

    try:
        with urllib.request.urlopen(GL_XML_COMMITS_URL, timeout=timeout) as response:
            commits = json.load(response)
        date = commits[0]["commit"]["author"]["date"]  # "2024-05-01T12:00:00Z"
        committed = datetime.strptime(date, "%Y-%m-%dT%H:%M:%SZ")
    except (OSError, ValueError, KeyError, IndexError) as e:
        logger.warning("Failed to query current registry version: %s", e)
        return False

    committed = committed.replace(tzinfo=timezone.utc)
    modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    return modified < committed


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve the OpenGL definitions of an API version and profile"
    )
    parser.add_argument("--api", default="gl", help="Target API (default: gl)")
    parser.add_argument(
        "--version", default="4.6", help="Target OpenGL version (default: 4.6)"
    )
    parser.add_argument(
        "--profile", default="core", help="Target profile (default: core)"
    )
    parser.add_argument(
        "--ext",
        action="append",
        default=[],
        metavar="NAME",
        help="Include the definitions of an extension (repeatable)",
    )
    parser.add_argument(
        "--gl-xml", type=Path, default=Path("gl.xml"), help="Path to gl.xml file"
    )
    parser.add_argument(
        "--download",
        action="store_true",
        help="Download latest gl.xml from Khronos registry",
    )
    parser.add_argument(
        "--force", action="store_true", help="Force re-download of gl.xml"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check whether a newer gl.xml is available",
    )
    parser.add_argument(
        "--list", choices=LISTINGS, default=None, help="Print one kind of definition"
    )
    parser.add_argument(
        "--groups",
        action="store_true",
        help="Include enum group names when listing types",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def print_listing(
    registry: GLRegistry, spec: GLSpec, listing: str, include_groups: bool = False
) -> None:
    """Print one definition name per line."""
    if listing == "apis":
        names = registry.api_names()
    elif listing == "profiles":
        names = registry.profiles(spec.api, spec.version)
    elif listing == "versions":
        names = registry.versions(spec.api)
    elif listing == "functions":
        names = [command.name for command in spec.functions()]
    elif listing == "enums":
        names = [enum.name for enum in spec.enums()]
    elif listing == "types":
        names = spec.types(include_groups)
    else:
        names = spec.used_groups()

    for name in names:
        print(name)


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_argument_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Download gl.xml if requested
    if args.download or not args.gl_xml.exists():
        download_gl_xml(args.gl_xml, args.force)

    if not args.gl_xml.exists():
        print(f"gl.xml not found at {args.gl_xml}. Use --download to fetch it.")
        sys.exit(1)

    if args.check:
        if is_outdated(args.gl_xml):
            print("A newer gl.xml is available. Use --download --force to update.")
        else:
            print(f"{args.gl_xml} is up to date.")
        return

    try:
        registry = GLRegistry.load(args.gl_xml)
        spec = GLSpec(registry, args.api, args.version, args.profile, args.ext)
    except (ET.ParseError, RegistryError) as e:
        print(f"Failed to read {args.gl_xml}: {e}")
        sys.exit(1)

    for name in spec.extensions:
        extension = registry.get_extension(name)
        if extension is None:
            print(f"Ignoring unknown extension {name}", file=sys.stderr)
        elif not extension.supports(spec.api):
            print(f"Ignoring {name}: not supported by {spec.api}", file=sys.stderr)

    if args.list:
        print_listing(registry, spec, args.list, args.groups)
        return

    print(f"{spec}:")
    print(f"  Functions: {len(spec.functions())}")
    print(f"  Enums:     {len(spec.enums())}")
    print(f"  Types:     {len(spec.types())}")
    print(f"  Groups:    {len(spec.used_groups())}")


if __name__ == "__main__":
    main()

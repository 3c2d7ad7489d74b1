"""
Command-line tool that generates the Eclipse resource encoding preference file.

Encodings come from an optional YAML build config plus --project-encoding and
--resource options, which override the config.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..generator.task import ResourceEncodingGenerator
from ..model.config import build_registry, load_encoding_config
from ..model.merger import normalize_line_endings
from ..model.registry import EncodingConfigError, EncodingRegistry
from ..storage.prefs_file import DEFAULT_PREFS_PATH, PrefsFileError

logger = logging.getLogger(__name__)


def _parse_resource_option(option: str) -> tuple[str, str]:
    """Split a PATH=ENCODING option. Raises EncodingConfigError if malformed."""
    path, sep, encoding = option.rpartition("=")
    if not sep or not path or not encoding:
        raise EncodingConfigError(
            f"Invalid --resource {option!r}. Expected PATH=ENCODING."
        )
    return path, encoding


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Generate .settings/org.eclipse.core.resources.prefs for a project."
    )
    parser.add_argument(
        "--config",
        type=str,
        metavar="FILE",
        help="YAML build config with source_sets, project_encoding and resources",
    )
    parser.add_argument(
        "--project-dir",
        type=str,
        default=".",
        metavar="DIR",
        help="Project root directory (default: current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        metavar="FILE",
        help=f"Output file (default: <project-dir>/{DEFAULT_PREFS_PATH.as_posix()})",
    )
    parser.add_argument(
        "--project-encoding",
        type=str,
        metavar="ENCODING",
        help="Encoding for the whole project (e.g. UTF-8)",
    )
    parser.add_argument(
        "--resource",
        action="append",
        default=[],
        metavar="PATH=ENCODING",
        help="Encoding for a project-relative resource (repeatable)",
    )
    parser.add_argument(
        "--line-endings",
        choices=["unix", "windows"],
        help="Normalize line endings of the written file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the file instead of writing it",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def _build_registry(args: argparse.Namespace) -> EncodingRegistry:
    """Build the registry from --config, then apply command-line overrides."""
    if args.config:
        registry = build_registry(load_encoding_config(Path(args.config)))
    else:
        registry = EncodingRegistry()
    if args.project_encoding is not None:
        if not args.project_encoding:
            raise EncodingConfigError("Invalid --project-encoding: must not be empty.")
        registry.record_project_encoding(args.project_encoding)
    for option in args.resource:
        path, encoding = _parse_resource_option(option)
        registry.record_resource_encoding(path, encoding)
    if args.line_endings:
        registry.file.transformer = normalize_line_endings(args.line_endings)
    return registry


async def _main_async(argv: Optional[Sequence[str]] = None) -> int:
    """Async main logic. Returns exit code."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = Path(args.project_dir) / DEFAULT_PREFS_PATH

    try:
        registry = _build_registry(args)
        generator = ResourceEncodingGenerator(registry, output_path)
        if args.dry_run:
            _, text = await generator.render()
            sys.stdout.write(text)
        else:
            await generator.generate()
            print(f"Wrote {output_path}")
    except (EncodingConfigError, PrefsFileError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def main() -> None:
    """CLI entry point."""
    exit_code = asyncio.run(_main_async())
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()

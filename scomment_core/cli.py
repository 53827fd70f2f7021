#!/usr/bin/env python3
"""
Structured Comment Processor

Processes a batch of structured comments (as produced by the DTD scanner)
and writes the annotation XML consumed by the documentation generator.

Usage:
    scomment <batch_file> [--output <xml>] [--config <yaml|json>]

Batch file (JSON or YAML):

    comments:
      - identifier: "<article>"
        sections:
          tags: "root journal"
          notes: "Top level element. See `<front> and @article-type."
      - identifier: "Journal Article Tag Suite"
        name: "JATS-journalpublishing1.dtd"
        sections:
          - [notes, "Module overview"]

Examples:
    scomment comments.yaml
    scomment comments.yaml --converter "pandoc -f markdown -t html" -o out.xml
    scomment comments.json --keep-going --log-level DEBUG
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from scomment_core.config.settings import EngineConfig, load_config
from scomment_core.errors import InitializationError, MalformedSectionError
from scomment_core.processor import SectionProcessor
from scomment_core.transform.converter import parse_command
from scomment_core.xml.annotations import comments_to_xml

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MALFORMED = 1
EXIT_SETUP = 2


def load_batch(batch_path: Path) -> List[Dict[str, Any]]:
    """
    Load the list of comment entries from a batch file.

    Raises:
        FileNotFoundError: If the batch file doesn't exist
        ValueError: If the format or structure is not supported
    """
    if not batch_path.exists():
        raise FileNotFoundError(f"Batch file not found: {batch_path}")

    suffix = batch_path.suffix.lower()
    with open(batch_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported batch format: {suffix}")

    if isinstance(data, dict):
        data = data.get('comments', [])
    if not isinstance(data, list):
        raise ValueError("Batch file must contain a list of comments")

    for index, entry in enumerate(data, start=1):
        if not isinstance(entry, dict):
            raise ValueError(f"Comment {index} must be a mapping, not {type(entry).__name__}")
        try:
            iter_sections(entry)
        except ValueError as e:
            raise ValueError(f"Comment {index}: {e}") from e

    return data


def iter_sections(entry: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    Return the (name, text) pairs of a batch entry, in file order.

    Raises:
        ValueError: If sections is neither a mapping nor a list of pairs
    """
    sections = entry.get('sections') or []
    if isinstance(sections, dict):
        return [(str(name), str(text)) for name, text in sections.items()]
    if not isinstance(sections, list):
        raise ValueError("sections must be a mapping or a list of [name, text] pairs")

    pairs = []
    for item in sections:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Section {item!r} is not a [name, text] pair")
        name, text = item
        pairs.append((str(name), str(text)))
    return pairs


def build_config(args: argparse.Namespace) -> EngineConfig:
    """Load the config file (if any) and apply command line overrides."""
    config = load_config(args.config) if args.config else EngineConfig()

    if args.converter is not None:
        config.converter.command = args.converter
    if args.timeout is not None:
        config.converter.timeout = args.timeout if args.timeout > 0 else None
    if args.log_level:
        config.log_level = args.log_level

    parse_command(config.converter.command)

    return config


def process_batch(processor: SectionProcessor,
                  entries: List[Dict[str, Any]],
                  source: str,
                  keep_going: bool = False):
    """
    Build structured comments from batch entries.

    Returns:
        Tuple of (comments, failures) where failures is a list of
        (location, MalformedSectionError)

    Raises:
        MalformedSectionError: On the first bad section unless keep_going
    """
    comments = []
    failures = []

    for index, entry in enumerate(entries, start=1):
        comment = processor.new_comment(entry.get('identifier', ''))
        if entry.get('name'):
            comment.name = entry['name']

        for name, text in iter_sections(entry):
            location = f"{source}: comment {index} ({entry.get('identifier', '')}), section '{name}'"
            try:
                comment.add_section(name, text)
            except MalformedSectionError as e:
                if not keep_going:
                    logger.error(f"{location}:{e}")
                    raise
                failures.append((location, e))

        comments.append(comment)

    return comments, failures


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="scomment",
        description="Convert structured DTD comments into annotation XML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s comments.yaml
  %(prog)s comments.yaml --converter "pandoc -f markdown -t html" -o out.xml
        """
    )

    parser.add_argument(
        "batch_file",
        type=Path,
        help="JSON or YAML file listing structured comments"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output XML file (default: stdout)"
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Engine configuration file (JSON or YAML)"
    )

    parser.add_argument(
        "--converter",
        default=None,
        help="External comment converter command line, e.g. 'pandoc -t html'"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to allow the converter per section (0 waits forever)"
    )

    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Report malformed sections and continue with the rest"
    )

    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config, INFO)"
    )

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return EXIT_SETUP

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        processor = SectionProcessor(config)
    except InitializationError as e:
        logger.critical(str(e))
        return EXIT_SETUP

    try:
        entries = load_batch(args.batch_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Could not read batch file: {e}")
        return EXIT_SETUP

    try:
        comments, failures = process_batch(
            processor, entries, str(args.batch_file), keep_going=args.keep_going
        )
    except MalformedSectionError:
        return EXIT_MALFORMED

    for location, error in failures:
        logger.error(f"{location}:{error}")

    xml = comments_to_xml(comments, pretty_print=False)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(xml + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(comments)} comment(s) to {args.output}")
    else:
        sys.stdout.write(xml + "\n")

    return EXIT_MALFORMED if failures else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

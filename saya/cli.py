"""
Command line interface for saya.

Usage:
    saya "日本語テキスト"                     # display rows
    saya -f "日本語テキスト"                  # full JSON
    saya -d extra.json "テキスト"             # with a supplemental dictionary
    saya deconjugate 読んでいる               # deconjugation candidates
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from saya import __version__, settings
from saya.config import EngineConfig
from saya.deconjugator import deconjugate
from saya.errors import ConfigError
from saya.models import DisplayResult
from saya.processor import build_processor

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def format_display_results(results: List[DisplayResult]) -> str:
    """Format display rows as text output."""
    lines = []
    for row in results:
        header = f"* {row.term}"
        if row.reading:
            header += f"  【{row.reading}】"
        extras = [x for x in (row.frequency, row.pitch_accent, row.jlpt_level) if x]
        if extras:
            header += "  " + " ".join(extras)
        lines.append(header)
        if row.conjugation:
            lines.append(f"  ({row.conjugation})")
        lines.append(f"  {row.definition}")
    return '\n'.join(lines)


def main_deconjugate(args: list) -> int:
    """CLI entry point for the deconjugate subcommand."""
    parser = argparse.ArgumentParser(
        description='Show deconjugation candidates for a word',
        prog='saya deconjugate',
    )
    parser.add_argument('word', help='Inflected Japanese word')
    parser.add_argument(
        '-f', '--full',
        action='store_true',
        help='Output as JSON',
    )

    parsed = parser.parse_args(args)

    candidates = deconjugate(parsed.word)
    if parsed.full:
        output = [
            {'base_form': c.base_form, 'type': c.conjugation_type, 'confidence': c.confidence}
            for c in candidates
        ]
        print(json.dumps(output, ensure_ascii=False))
    else:
        for c in candidates:
            print(f"{c.base_form}\t{c.conjugation_type}\t{c.confidence:.1f}")
    return 0


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'deconjugate':
        return main_deconjugate(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Command line interface for Saya (Japanese vocabulary lookup)',
        prog='saya',
        epilog='Subcommands:\n  saya deconjugate WORD    Show deconjugation candidates',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Japanese text to look up',
    )

    parser.add_argument(
        '-f', '--full',
        action='store_true',
        help='Full lookup results as JSON',
    )

    parser.add_argument(
        '-l', '--limit',
        type=int,
        default=settings.MAX_SPANS,
        metavar='N',
        help=f'Examine at most N spans, 0 for all (default: {settings.MAX_SPANS})',
    )

    parser.add_argument(
        '--longest',
        action='store_true',
        help='Keep only the longest match at each position',
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        default=None,
        metavar='PATH',
        help='JSON configuration file',
    )

    parser.add_argument(
        '--base',
        type=str,
        default=None,
        metavar='PATH',
        help='Base dictionary file (JSON or JMdict XML)',
    )

    parser.add_argument(
        '-d', '--dictionary',
        action='append',
        default=[],
        metavar='PATH',
        help='Supplemental dictionary merged on top of the base (repeatable)',
    )

    parser.add_argument(
        '--no-enrichment',
        action='store_true',
        help='Skip frequency, pitch accent and JLPT metadata',
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        metavar='LEVEL',
        help=f'Logging level (default: {settings.LOG_LEVEL})',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'saya {__version__}')
        return 0

    text = ' '.join(parsed.text) if parsed.text else ''

    if not text:
        parser.print_help()
        return 1

    setup_logging(parsed.log_level)

    try:
        config = EngineConfig.load(parsed.config) if parsed.config else EngineConfig.from_env()
    except ConfigError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    if parsed.base:
        config.dictionary.base_path = Path(parsed.base)
    if parsed.dictionary:
        config.dictionary.additional_paths.extend(Path(p) for p in parsed.dictionary)
    if parsed.no_enrichment:
        config.enrichment.enabled = False

    try:
        processor = build_processor(config)
    except (OSError, ValueError) as e:
        # ValueError covers UnicodeDecodeError
        print(f'Error loading enrichment data: {e}', file=sys.stderr)
        return 1

    limit = parsed.limit if parsed.limit > 0 else None
    logger.debug(f"Looking up {text!r} (span limit: {limit})")

    if parsed.full:
        output = []
        for span, results in processor.lookup_spans(text, max_spans=limit, longest_only=parsed.longest):
            output.append({
                'surface': span.surface,
                'position': span.position,
                'results': [r.model_dump(exclude_none=True) for r in results],
            })
        print(json.dumps(output, ensure_ascii=False))
        return 0

    results = processor.analyze(text, max_spans=limit, longest_only=parsed.longest)
    if results:
        print(format_display_results(results))
    else:
        print('No results found.')
    return 0


if __name__ == '__main__':
    sys.exit(main())

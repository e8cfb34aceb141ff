"""
Command line interface for romakana.

Usage:
    romakana "onaji BUTTSUUJI"            # おなじ ブッツウジ
    romakana --obsolete we                # ゑ
    romakana -m na=に wanakana            # わにかに
    romakana --ime on kan                 # かn
    romakana -t kyouto                    # token breakdown as JSON
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from romakana import __version__
from romakana.converter import convert, to_kana
from romakana.options import KanaOptions
from romakana.romaji_map import load_custom_mapping
from romakana.settings import CUSTOM_MAP_PATH, DEBUG

logger = logging.getLogger(__name__)

IME_CHOICES = ['off', 'on', 'hiragana', 'katakana']


def parse_mapping_args(items: List[str]) -> Dict[str, str]:
    """
    Parse ROMA=KANA pairs from the command line.

    Raises:
        ValueError: If an item has no '='.
    """
    mapping = {}
    for item in items:
        romaji, sep, kana = item.partition('=')
        if not sep:
            raise ValueError(f"expected ROMA=KANA, got {item!r}")
        mapping[romaji.lower()] = kana
    return mapping


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Convert romaji to kana (hiragana for lowercase, katakana for UPPERCASE)',
        prog='romakana',
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Romaji text to convert',
    )

    parser.add_argument(
        '-k', '--ime',
        choices=IME_CHOICES,
        default='off',
        metavar='MODE',
        help='IME mode: leave trailing partial input unconverted; '
             'hiragana/katakana also force the output script (default: off)',
    )

    parser.add_argument(
        '-o', '--obsolete',
        action='store_true',
        help='Use obsolete kana for wi/we (ゐ/ゑ)',
    )

    parser.add_argument(
        '-m', '--map',
        action='append',
        default=[],
        metavar='ROMA=KANA',
        help='Custom mapping override, may be repeated',
    )

    parser.add_argument(
        '--map-file',
        type=str,
        default=None,
        metavar='PATH',
        help='Tab-separated romaji/kana override file '
             '(default: $ROMAKANA_CUSTOM_MAP_PATH)',
    )

    parser.add_argument(
        '-t', '--tokens',
        action='store_true',
        help='Print the token breakdown as JSON',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    if DEBUG:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    parser = build_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'romakana {__version__}')
        return 0

    text = ' '.join(parsed.text) if parsed.text else ''

    if not text:
        parser.print_help()
        return 1

    custom: Dict[str, str] = {}
    map_file = parsed.map_file or CUSTOM_MAP_PATH
    if map_file:
        try:
            custom.update(load_custom_mapping(map_file))
        except OSError as e:
            print(f'Error reading map file: {e}', file=sys.stderr)
            return 1

    try:
        custom.update(parse_mapping_args(parsed.map))
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    options = KanaOptions(
        ime_mode=parsed.ime,
        use_obsolete_kana=parsed.obsolete,
        custom_kana_mapping=custom or None,
    )

    if parsed.tokens:
        print(convert(text, options).model_dump_json(indent=2))
    else:
        print(to_kana(text, options))

    return 0


if __name__ == '__main__':
    sys.exit(main())

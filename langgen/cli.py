#!/usr/bin/env python3
"""
langgen CLI
===========
Command-line interface for phonotactic word generation.

Usage:
    langgen generate -n 20 --language demo
    langgen generate --language my_language.yaml --syllables 2 --seed 7
    langgen tree --language basic --edges
    langgen parse tʰ a ŋ
    langgen inventory --language demo
    langgen languages
"""

import argparse
import json
import logging
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from langgen import __version__

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def result(self, text: str):
        """Essential output, printed even in quiet mode."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", style="red", markup=False)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return
        table = Table(box=box.SIMPLE, title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def setup_logging(verbose: bool = False):
    from langgen.settings import get_setting

    level = "DEBUG" if verbose else get_setting("logging.level", "WARNING")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format=get_setting("logging.format", "%(levelname)s %(name)s: %(message)s"),
        stream=sys.stderr,
    )


def load_language(args):
    from langgen.config import GenerationConfig
    from langgen.language import Language

    name = args.language or GenerationConfig().language
    if not name:
        raise ValueError("No language given and generation.language is not set in app.yaml")
    return Language.from_yaml(name)


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate words."""
    from langgen.config import GenerationConfig
    from langgen.entropy import new_rng
    from langgen.language import GenerationSession

    config = GenerationConfig(count=args.count, syllable_marker=args.marker)
    language = load_language(args)
    session = GenerationSession(language, rng=new_rng(args.seed), config=config)

    words = session.generate(syllables=args.syllables)

    if args.json:
        out.result(json.dumps({
            'language': language.name,
            'words': words,
            'failures': session.failures,
        }, ensure_ascii=False, indent=2))
        return 0

    if not words:
        out.error(f"No words generated ({session.failures} unreachable)")
        return 1

    if args.verbose:
        rows = [[i, w, w.count(config.syllable_marker) + 1 if config.syllable_marker else '-']
                for i, w in enumerate(words, 1)]
        out.table(['#', 'Word', 'Syllables'], rows, title=f"{language.name} ({len(words)} words)")
    else:
        for word in words:
            out.result(word)

    if session.failures:
        out.print(f"[yellow]{session.failures} word(s) hit an unreachable state[/yellow]")
    return 0


def cmd_tree(args, out: Output):
    """Show the phonotactic tree for a language."""
    from langgen.language import GenerationSession

    language = load_language(args)
    tree = GenerationSession(language).tree if args.weighted else language.build_tree()

    reachable = sum(1 for _ in tree.walk())
    out.result(f"{language.name}: {len(tree)} nodes ({reachable} reachable), {tree.edge_count} edges")

    if args.edges:
        rows = []
        for node in tree.walk():
            for edge in node.edges:
                rows.append([
                    f"{tree.describe(node.handle)} [{node.handle}]",
                    f"{tree.describe(edge.target)} [{edge.target}]",
                    edge.context.value,
                    f"{edge.weight:g}",
                ])
        if args.limit:
            rows = rows[:args.limit]
        out.table(['From', 'To', 'Context', 'Weight'], rows)
    return 0


def cmd_parse(args, out: Output):
    """Parse IPA symbols into features."""
    from langgen.phonology import phoneme_from_ipa, to_ipa

    rows = []
    failed = 0
    for symbol in args.symbols:
        try:
            phoneme = phoneme_from_ipa(symbol)
        except ValueError as e:
            out.error(str(e))
            failed += 1
            continue
        data = phoneme.to_dict()
        kind = data.pop('type')
        if args.json:
            out.result(json.dumps({'ipa': symbol, 'type': kind, **data}, ensure_ascii=False))
        else:
            features = ', '.join(data.values())
            rows.append([symbol, to_ipa(phoneme), kind, features])

    if rows:
        out.table(['Input', 'IPA', 'Type', 'Features'], rows)
    return 1 if failed else 0


def cmd_inventory(args, out: Output):
    """Show a phoneme inventory."""
    from langgen.phonology import Inventory

    if args.symbols:
        inventory = Inventory.from_ipa(args.symbols)
        title = "inventory"
    else:
        language = load_language(args)
        inventory = language.inventory
        title = language.name

    listing = inventory.to_ipa()
    if args.json:
        out.result(json.dumps(listing, ensure_ascii=False, indent=2))
        return 0

    out.table(
        ['Consonants', 'Vowels'],
        [[' '.join(listing['consonants']) or '-', ' '.join(listing['vowels']) or '-']],
        title=f"{title} ({len(inventory)} phonemes)",
    )
    return 0


def cmd_languages(args, out: Output):
    """List bundled languages."""
    from langgen.settings import bundled_languages

    for name in bundled_languages():
        out.result(name)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='langgen',
        description='langgen - Phonotactic Word Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 20 --language demo
  %(prog)s generate --language basic --syllables 2 --seed 7
  %(prog)s tree --language basic --edges --weighted
  %(prog)s parse tʰ a ŋ t͡ʃ
  %(prog)s inventory --symbols p t k a i u
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate words')
    p.add_argument('-n', '--count', type=int, help='Number of words (default: from app.yaml)')
    p.add_argument('--language', '-l', help='Language file or bundled language name')
    p.add_argument('--syllables', '-s', type=int, help='Fixed syllable count (default: sampled)')
    p.add_argument('--seed', type=int, help='Seed for reproducible output')
    p.add_argument('--marker', help='Syllable separator (default: from app.yaml)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    p.add_argument('--verbose', '-v', action='store_true', help='Show detailed output')

    # --- tree ---
    p = subparsers.add_parser('tree', aliases=['t'], help='Show a phonotactic tree')
    p.add_argument('--language', '-l', help='Language file or bundled language name')
    p.add_argument('--edges', '-e', action='store_true', help='List edges')
    p.add_argument('--weighted', '-w', action='store_true', help='Apply presets and rules first')
    p.add_argument('--limit', type=int, default=0, help='Max edges to list (default: all)')
    p.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    # --- parse ---
    p = subparsers.add_parser('parse', aliases=['p'], help='Parse IPA symbols')
    p.add_argument('symbols', nargs='+', help='IPA symbols')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON lines')

    # --- inventory ---
    p = subparsers.add_parser('inventory', aliases=['inv', 'i'], help='Show a phoneme inventory')
    p.add_argument('--language', '-l', help='Language file or bundled language name')
    p.add_argument('--symbols', nargs='+', help='Build from IPA symbols instead of a language')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- languages ---
    subparsers.add_parser('languages', help='List bundled languages')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        't': 'tree',
        'p': 'parse',
        'inv': 'inventory', 'i': 'inventory',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=getattr(args, 'quiet', False))
    setup_logging(getattr(args, 'verbose', False))

    commands = {
        'generate': cmd_generate,
        'tree': cmd_tree,
        'parse': cmd_parse,
        'inventory': cmd_inventory,
        'languages': cmd_languages,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (ValueError, FileNotFoundError) as e:
            out.error(str(e))
            return 1
        except Exception as e:
            out.error(str(e))
            if getattr(args, 'verbose', False):
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())

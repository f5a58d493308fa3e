#!/usr/bin/env python3
"""
vn_ime_cli.py - Command-line interface for rule compilation and word lookup
Giao diện dòng lệnh: biên dịch luật gõ và tra từ

================================================================================
USAGE / Cách dùng
================================================================================

    # Compile one rule spec
    python vn_ime_cli.py rules w "UOA_ƯƠĂ__Ư"

    # List input methods, or show the rules of one
    python vn_ime_cli.py im
    python vn_ime_cli.py im VNI

    # Check words against dictionaries (configured ones by default)
    python vn_ime_cli.py check tiếng tieng -d words.txt
    python vn_ime_cli.py check tieng -d words.txt --dictionary-only

    # Suggest completions
    python vn_ime_cli.py complete "tiê" -d words.txt -n 5

================================================================================
"""

import argparse
import logging
import os
import sys

# Add src directory to path if needed
src_dir = os.path.dirname(os.path.abspath(__file__))
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

import charset
import input_method
import rules
import trie
import util

logger = logging.getLogger(__name__)


def setup_logging(verbose=False, level_name='WARNING'):
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else util.NAME_TO_LOGGING_LEVEL[level_name]
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s %(message)s',
        datefmt='%H:%M:%S'
    )


def format_rule(rule, indent='  '):
    """Render one rule (and its appended rules) as text lines."""
    effect_name = rules.EFFECT_TYPE_NAMES[rule.effect_type]
    if rule.effect_type == rules.TONE_TRANSFORMATION:
        line = f'{indent}{rule.key} {effect_name} tone={charset.TONE_NAMES.get(rule.effect, rule.effect)}'
    elif rule.effect_type == rules.MARK_TRANSFORMATION:
        line = (f'{indent}{rule.key} {effect_name} {rule.target_char} -> {rule.result} '
                f'mark={charset.MARK_NAMES.get(rule.effect, rule.effect)}')
    else:
        line = f'{indent}{rule.key} {effect_name} {rule.target_char}'
    lines = [line]
    for appended in rule.appended_rules:
        lines.extend(format_rule(appended, indent + '  + '))
    return lines


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def _dictionary_paths(args, config):
    if args.dictionary:
        return args.dictionary
    return config.get('dictionaries', [])


def _load_matcher(paths):
    if not paths:
        print("ERROR: No dictionary given. Use -d or set \"dictionaries\" in config.json")
        return None
    words = util.load_word_lists(paths)
    if not words:
        print(f"ERROR: No words loaded from: {', '.join(paths)}")
        return None
    return trie.TrieMatcher(words)


def cmd_rules(args, config):
    """
    Compile a single (key, spec) pair.
    """
    if not args.key:
        print("ERROR: Empty key")
        return 1
    compiled = rules.compile_rule(args.key[0], args.spec)
    if not compiled:
        print(f"No rules compiled from \"{args.spec}\"")
        return 1
    for rule in compiled:
        for line in format_rule(rule):
            print(line)
    return 0


def cmd_im(args, config):
    """
    List input methods, or print the compiled rules of one.
    """
    definitions = util.get_input_method_data()
    if definitions is None:
        print("ERROR: Input method definitions could not be loaded")
        return 1

    if not args.name:
        default = config.get('input_method', input_method.DEFAULT_INPUT_METHOD)
        for name in input_method.get_input_method_names(definitions):
            marker = '*' if name == default else ' '
            print(f"{marker} {name}")
        return 0

    im = input_method.load_input_method(args.name, definitions)
    if im is None:
        print(f"ERROR: Unknown input method: {args.name}")
        return 1
    print(f"{im.name}: {len(im.keys)} keys, {len(im.rules)} rules")
    print(f"  tone keys:      {''.join(im.tone_keys)}")
    print(f"  appending keys: {''.join(im.appending_keys)}")
    print(f"  super keys:     {''.join(im.super_keys)}")
    print("-" * 60)
    for rule in im.rules:
        for line in format_rule(rule):
            print(line)
    return 0


def cmd_check(args, config):
    """
    Print the match result of each word.
    """
    matcher = _load_matcher(_dictionary_paths(args, config))
    if matcher is None:
        return 1
    dictionary_only = args.dictionary_only or config.get('require_dictionary', False)
    for word in args.words:
        result = matcher.query(word, dictionary=dictionary_only)
        print(f"{word}\t{trie.FIND_RESULT_NAMES[result]}")
    return 0


def cmd_complete(args, config):
    """
    Print suggestions for a prefix, sorted.
    """
    matcher = _load_matcher(_dictionary_paths(args, config))
    if matcher is None:
        return 1
    limit = args.nbest if args.nbest is not None else config.get('max_suggestions', 10)
    if limit < 1:
        logger.warning(f'Ignoring max_suggestions={limit}; showing 10 suggestions')
        limit = 10
    words = sorted(matcher.autocomplete(args.prefix, include_aliases=args.aliases))
    for word in words[:limit]:
        print(word)
    return 0


COMMANDS = {
    'rules': cmd_rules,
    'im': cmd_im,
    'check': cmd_check,
    'complete': cmd_complete,
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog='vn-ime-core',
        description='Vietnamese input rule compiler and dictionary lookup',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    rules_parser = subparsers.add_parser('rules', help='Compile one rule spec')
    rules_parser.add_argument('key', help='Trigger key')
    rules_parser.add_argument('spec', help='Rule spec, e.g. "DauSac" or "UOA_ƯƠĂ__Ư"')

    im_parser = subparsers.add_parser('im', help='List input methods or show one')
    im_parser.add_argument('name', nargs='?', help='Input method name')

    check_parser = subparsers.add_parser('check', help='Check words against dictionaries')
    check_parser.add_argument('words', nargs='+', help='Words to check')
    check_parser.add_argument('-d', '--dictionary', action='append',
                              help='Dictionary file (repeatable; default: from config.json)')
    check_parser.add_argument('--dictionary-only', action='store_true',
                              help='Only count dictionary entries as full matches')

    complete_parser = subparsers.add_parser('complete', help='Suggest words for a prefix')
    complete_parser.add_argument('prefix', help='Prefix to complete')
    complete_parser.add_argument('-d', '--dictionary', action='append',
                                 help='Dictionary file (repeatable; default: from config.json)')
    complete_parser.add_argument('-n', '--nbest', type=positive_int, default=None,
                                 help='Maximum number of suggestions (default: max_suggestions from config.json)')
    complete_parser.add_argument('--aliases', action='store_true',
                                 help='Include spellings with diacritics stripped')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config, _ = util.get_config_data()
    setup_logging(args.verbose, util.get_logging_level(config))

    return COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())

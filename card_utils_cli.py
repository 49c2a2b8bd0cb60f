#!/usr/bin/env python3
"""
Card Utils CLI

Card creation, parsing, comparison and validation from the command line.

Usage:
    python card_utils_cli.py create --suit hearts --rank A
    python card_utils_cli.py validate --cards "AS,KH,QD"
    python card_utils_cli.py compare -1 AS -2 2H --ace-low
"""

import argparse
import json
import sys

import numpy as np

from holdem_odds.errors import PokerError
from holdem_odds.game.cards import create_card, parse_card, parse_cards, compare_cards, get_constants
from holdem_odds.game.deck import create_deck, shuffle_deck
from holdem_odds.game.validation import validate_cards
from holdem_odds.logging_utils import setup_logging

EXAMPLES = """
Card Utils CLI Examples:

Create a card:
  card-utils create --suit hearts --rank A
  card-utils create -s spades -r K --format display

Create a deck:
  card-utils deck
  card-utils deck --count
  card-utils deck --shuffle --seed 7

Validate cards:
  card-utils validate --cards "AS,KH,QD"
  card-utils validate -c "10S,JH,QC,KD,AS"

Parse a card:
  card-utils parse --card AS
  card-utils parse -c 10H --format display

Compare cards:
  card-utils compare --card1 AS --card2 KH
  card-utils compare -1 AS -2 2H --ace-low

Show constants:
  card-utils constants
"""


def _dump(obj) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False)


def cmd_create(args) -> int:
    card = create_card(args.suit, args.rank)
    print(card.display if args.format == 'display' else _dump(card.to_dict()))
    return 0


def cmd_deck(args) -> int:
    deck = create_deck()
    if args.shuffle:
        rng = np.random.RandomState(args.seed) if args.seed is not None else None
        deck = shuffle_deck(deck, rng)

    if args.count:
        print(f"Total cards: {deck.total_cards}")
        print(f"Available: {len(deck.available_cards)}")
        print(f"Used: {len(deck.used_cards)}")
    else:
        print(_dump(deck.to_dict()))
    return 0


def cmd_validate(args) -> int:
    cards = parse_cards(args.cards)
    validation = validate_cards(cards)

    if validation.is_valid:
        print("✓ Cards are valid")
        print(f"Validated {len(cards)} cards")
        return 0

    print("✗ Validation failed")
    for error in validation.errors:
        print(f"  {error.code}: {error.message}")
    return 1


def cmd_parse(args) -> int:
    card = parse_card(args.card)
    if args.format == 'display':
        print(f"{card.display} ({card.suit} {card.rank})")
    else:
        print(_dump(card.to_dict()))
    return 0


def cmd_compare(args) -> int:
    card1 = parse_card(args.card1)
    card2 = parse_card(args.card2)
    comparison = compare_cards(card1, card2, ace_high=not args.ace_low)

    print(f"Comparing {card1.display} vs {card2.display}")
    print(f"Result: {comparison.result}")
    print(f"Reasoning: {comparison.reasoning}")
    if comparison.result > 0:
        print(f"Winner: {card1.display}")
    elif comparison.result < 0:
        print(f"Winner: {card2.display}")
    else:
        print("Tie")
    return 0


def cmd_constants(args) -> int:
    print(_dump(get_constants()))
    return 0


def cmd_examples(args) -> int:
    print(EXAMPLES)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='card-utils', description='Card utilities for poker applications')
    subparsers = parser.add_subparsers(dest='command')

    create = subparsers.add_parser('create', help='Create a playing card')
    create.add_argument('-s', '--suit', type=str, required=True,
                        help='Card suit (hearts, diamonds, clubs, spades)')
    create.add_argument('-r', '--rank', type=str, required=True, help='Card rank (A, 2-10, J, Q, K)')
    create.add_argument('-f', '--format', type=str, default='json', choices=['json', 'display'])
    create.set_defaults(func=cmd_create)

    deck = subparsers.add_parser('deck', help='Create a deck of cards')
    deck.add_argument('-c', '--count', action='store_true', help='Show card count only')
    deck.add_argument('-s', '--shuffle', action='store_true', help='Shuffle the deck')
    deck.add_argument('--seed', type=int, default=None, help='Random seed for shuffling')
    deck.set_defaults(func=cmd_deck)

    validate = subparsers.add_parser('validate', help='Validate a list of cards')
    validate.add_argument('-c', '--cards', type=str, required=True,
                          help='Comma-separated card strings (e.g., "AS,KH,QD")')
    validate.set_defaults(func=cmd_validate)

    parse = subparsers.add_parser('parse', help='Parse card from string representation')
    parse.add_argument('-c', '--card', type=str, required=True, help='Card string (e.g., "AS", "10H")')
    parse.add_argument('-f', '--format', type=str, default='json', choices=['json', 'display'])
    parse.set_defaults(func=cmd_parse)

    compare = subparsers.add_parser('compare', help='Compare two cards')
    compare.add_argument('-1', '--card1', type=str, required=True, help='First card (e.g., "AS")')
    compare.add_argument('-2', '--card2', type=str, required=True, help='Second card (e.g., "KH")')
    compare.add_argument('--ace-low', action='store_true', help='Treat ace as low (1) instead of high (14)')
    compare.set_defaults(func=cmd_compare)

    constants = subparsers.add_parser('constants', help='Show poker constants')
    constants.set_defaults(func=cmd_constants)

    examples = subparsers.add_parser('examples', help='Show usage examples')
    examples.set_defaults(func=cmd_examples)

    return parser


def main(argv=None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except PokerError as e:
        print(f"Error: {e.code}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

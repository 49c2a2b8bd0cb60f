#!/usr/bin/env python3
"""
Poker Engine CLI

Texas Hold'em probability calculation and hand evaluation from the command line.

Usage:
    python poker_engine_cli.py calculate --player "AS,AH"
    python poker_engine_cli.py calculate -p "AS,AH" -c "KS,QH,JD" --stage flop -m simulation
    python poker_engine_cli.py evaluate --cards "AS,AH,KS,QH,JD"
    python poker_engine_cli.py outs -p "AH,KH" -c "QH,7H,2C" --target flush
"""

import argparse
import dataclasses
import json
import sys
import time

import numpy as np

from holdem_odds.config import EngineConfig
from holdem_odds.errors import PokerError
from holdem_odds.game.cards import parse_cards
from holdem_odds.engine.evaluation import HandStrength, hand_name
from holdem_odds.engine.poker_engine import (
    PokerEngine,
    CalculationRequest,
    evaluate_hand,
    calculate_outs,
)
from holdem_odds.logging_utils import setup_logging

EXAMPLES = """
Poker Engine CLI Examples:

Calculate pre-flop probabilities:
  poker-engine calculate --player "AS,AH"
  poker-engine calculate -p "KS,QH" --stage pre-flop

Calculate flop probabilities:
  poker-engine calculate -p "AS,AH" -c "KS,QH,JD" --stage flop

Calculate with specific method:
  poker-engine calculate -p "AS,AH" --method simulation --seed 42
  poker-engine calculate -p "AS,AH" -c "KS,QH,JD" -s flop -m exact

Evaluate a hand:
  poker-engine evaluate --cards "AS,AH,KS,QH,JD"
  poker-engine evaluate -c "10S,JS,QS,KS,AS" --format json

Count outs:
  poker-engine outs -p "AH,KH" -c "QH,7H,2C" --target flush

Check health:
  poker-engine health

Run benchmarks:
  poker-engine benchmark
  poker-engine benchmark --iterations 5000
"""


def parse_target(value: str) -> HandStrength:
    """'flush', 'FULL_HOUSE', 'full-house' or '6'"""
    if value.isdigit():
        return HandStrength(int(value))
    try:
        return HandStrength[value.upper().replace('-', '_').replace(' ', '_')]
    except KeyError:
        raise argparse.ArgumentTypeError(f"Unknown hand type: {value}")


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def cmd_calculate(args) -> int:
    config = EngineConfig()
    if args.simulations is not None:
        config = dataclasses.replace(config, num_simulations=args.simulations, exact_simulations=args.simulations)
    rng = np.random.RandomState(args.seed) if args.seed is not None else None

    player_hand = parse_cards(args.player)
    community_cards = parse_cards(args.community)

    engine = PokerEngine(config, rng)
    results = engine.calculate_probabilities(CalculationRequest(
        player_hand=player_hand,
        community_cards=community_cards,
        stage=args.stage,
        preferred_method=args.method,
    ))

    if args.format == 'json':
        print(json.dumps(results.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print("\nPoker Probability Calculation Results")
    print("=" * 37)
    print(f"Stage: {results.stage}")
    print(f"Player Hand: {' '.join(c.display for c in player_hand)}")
    if community_cards:
        print(f"Community: {' '.join(c.display for c in community_cards)}")
    print(f"Method: {results.method}")
    print(f"Calculation Time: {results.calculation_time:.2f}ms")
    print()

    print("Hand Type              Probability  Percentage   Odds     Occurrences")
    print("─" * 69)
    for prob in results.probabilities:
        print(f"{hand_name(prob.hand_type):<20} {prob.probability:>10.6f}  "
              f"{prob.percentage:>9.2f}% {prob.odds:>8}  {prob.occurrences:>10}")
    return 0


def cmd_evaluate(args) -> int:
    cards = parse_cards(args.cards)
    evaluation = evaluate_hand(cards)

    if args.format == 'json':
        print(json.dumps(evaluation.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print("\nHand Evaluation Results")
    print("=" * 22)
    print(f"Input Cards: {' '.join(c.display for c in cards)}")
    print(f"Best Hand: {' '.join(c.display for c in evaluation.best_hand)}")
    print(f"Hand Strength: {int(evaluation.hand_strength)} ({evaluation.name})")
    print(f"Description: {evaluation.description}")
    if evaluation.kickers:
        print(f"Kickers: {' '.join(c.display for c in evaluation.kickers)}")
    return 0


def cmd_outs(args) -> int:
    player_hand = parse_cards(args.player)
    community_cards = parse_cards(args.community)
    outs = calculate_outs(player_hand, community_cards, args.target)
    print(f"Outs to {hand_name(args.target)} or better: {outs}")
    return 0


def cmd_health(args) -> int:
    health = PokerEngine().check_health()

    print("\nPoker Engine Health Check")
    print("=" * 24)
    print(f"Status: {health['status']}")
    print(f"Version: {health['version']}")
    print(f"Lookup Tables Loaded: {'✓' if health['lookup_tables_loaded'] else '✗'}")
    print(f"Average Calculation Time: {health['performance']['avg_calculation_time']:.2f}ms")
    print(f"Cache Hit Rate: {health['performance']['cache_hit_rate'] * 100:.1f}%")
    return 0


def cmd_benchmark(args) -> int:
    iterations = args.iterations
    print(f"Running benchmark with {iterations:,} iterations...")

    engine = PokerEngine()
    request = CalculationRequest(player_hand=parse_cards('AS,AH'), stage='pre-flop')

    start = time.perf_counter()
    for _ in range(iterations):
        engine.calculate_probabilities(request)
    total_ms = (time.perf_counter() - start) * 1000
    avg_ms = total_ms / iterations

    print("\nBenchmark Results")
    print("=" * 16)
    print(f"Total Time: {total_ms:.2f}ms")
    print(f"Average Time: {avg_ms:.2f}ms per calculation")
    print(f"Throughput: {1000 / avg_ms if avg_ms > 0 else float('inf'):,.0f} calculations per second")

    if avg_ms > engine.config.time_budget_ms:
        print(f"WARNING: Average calculation time exceeds {engine.config.time_budget_ms:.0f}ms target")
    else:
        print(f"Performance target met (<{engine.config.time_budget_ms:.0f}ms per calculation)")
    return 0


def cmd_examples(args) -> int:
    print(EXAMPLES)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='poker-engine',
        description="Texas Hold'em probability calculation engine"
    )
    subparsers = parser.add_subparsers(dest='command')

    calc = subparsers.add_parser('calculate', help='Calculate hand probabilities')
    calc.add_argument('-p', '--player', type=str, required=True,
                      help='Player hole cards (e.g., "AS,AH")')
    calc.add_argument('-c', '--community', type=str, default='',
                      help='Community cards (e.g., "KS,QH,JD")')
    calc.add_argument('-s', '--stage', type=str, default='pre-flop',
                      choices=['pre-flop', 'flop', 'turn', 'river'],
                      help='Game stage (default: pre-flop)')
    calc.add_argument('-m', '--method', type=str, default='auto',
                      choices=['auto', 'lookup', 'simulation', 'exact'],
                      help='Calculation method (default: auto)')
    calc.add_argument('-f', '--format', type=str, default='table',
                      choices=['json', 'table'], help='Output format (default: table)')
    calc.add_argument('--simulations', type=positive_int, default=None,
                      help='Override simulation count for simulation/exact')
    calc.add_argument('--seed', type=int, default=None,
                      help='Random seed for reproducible simulations')
    calc.set_defaults(func=cmd_calculate)

    ev = subparsers.add_parser('evaluate', help='Evaluate best 5-card hand from given cards')
    ev.add_argument('-c', '--cards', type=str, required=True,
                    help='Cards to evaluate (5-7 cards, e.g., "AS,AH,KS,QH,JD")')
    ev.add_argument('-f', '--format', type=str, default='text',
                    choices=['json', 'text'], help='Output format (default: text)')
    ev.set_defaults(func=cmd_evaluate)

    outs = subparsers.add_parser('outs', help='Count cards that improve the hand')
    outs.add_argument('-p', '--player', type=str, required=True, help='Player hole cards')
    outs.add_argument('-c', '--community', type=str, default='', help='Community cards')
    outs.add_argument('-t', '--target', type=parse_target, required=True,
                      help='Target hand type (e.g., flush, straight, 5)')
    outs.set_defaults(func=cmd_outs)

    health = subparsers.add_parser('health', help='Check engine health status')
    health.set_defaults(func=cmd_health)

    bench = subparsers.add_parser('benchmark', help='Run performance benchmarks')
    bench.add_argument('-n', '--iterations', type=positive_int, default=1000,
                       help='Number of iterations (default: 1000)')
    bench.set_defaults(func=cmd_benchmark)

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

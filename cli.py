#!/usr/bin/env python3
"""
Gigaverse - Command Line Interface

CLI for generating loot scenarios, comparing search algorithms on them,
and watching a single algorithm play a run.

Usage:
    python cli.py generate --enemies 10 --count 50 --seed 1 --out scenarios.json
    python cli.py compare --scenarios scenarios.json --algorithms greedy,mcts
    python cli.py play --algorithm dp --seed 7 --enemies 5
"""

import argparse
import logging
import sys
from typing import List

from gigaverse.engine import CombatEngine, LootGenerator
from gigaverse.search import ALGORITHM_NAMES, create_algorithm
from gigaverse.simulation import (
    DEFAULT_ENEMY_STATS,
    SimulationConfig,
    compare_algorithms,
    default_run,
    generate_scenarios,
    load_scenarios,
    play_run,
    save_scenarios,
)

logger = logging.getLogger("gigaverse.cli")


# =============================================================================
# HELPERS
# =============================================================================

def parse_algorithm_list(value: str) -> List[str]:
    names = [n.strip().lower() for n in value.split(",") if n.strip()]
    unknown = [n for n in names if n not in ALGORITHM_NAMES]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown algorithm(s): {', '.join(unknown)} (choose from {', '.join(ALGORITHM_NAMES)})"
        )
    return names


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_generate(args) -> int:
    """Write a scenario file."""
    scenarios = generate_scenarios(
        count=args.count,
        enemy_count=args.enemies,
        seed=args.seed,
        options_per_enemy=args.options,
    )
    save_scenarios(args.out, scenarios)
    print(f"Wrote {len(scenarios)} scenarios ({args.enemies} enemies each) to {args.out}")
    return 0


def cmd_compare(args) -> int:
    """Compare algorithms over a scenario file."""
    try:
        scenarios = load_scenarios(args.scenarios)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    initial = default_run(args.enemies)
    results = compare_algorithms(
        initial,
        scenarios,
        args.algorithms,
        max_rounds_per_enemy=args.max_rounds,
    )
    for result in results:
        print(result.summary())
        print()
    return 0


def cmd_play(args) -> int:
    """Play one run with random loot."""
    config = SimulationConfig(
        max_rounds_per_enemy=args.max_rounds,
        loot_options_count=args.options,
        seed=args.seed,
    )
    engine = CombatEngine(seed=config.seed)
    loot = LootGenerator(rng=engine.rng)
    algorithm = create_algorithm(args.algorithm, engine=engine)

    state = default_run(args.enemies)
    result = play_run(
        state,
        algorithm,
        engine,
        loot_schedule=lambda _index: loot.generate_options(config.loot_options_count),
        max_rounds_per_enemy=config.max_rounds_per_enemy,
    )

    p = result.final_state.player
    print(f"Algorithm: {args.algorithm}")
    print(f"Enemies defeated: {result.enemies_defeated}/{len(state.enemies)}")
    print(f"Survived: {'yes' if result.survived else 'no'}")
    print(f"Rounds: {result.rounds}")
    print(f"Player HP: {p.health.current}/{p.health.max}  Armor: {p.armor.current}/{p.armor.max}")
    return 0 if result.survived else 2


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gigaverse - run engine and search algorithm CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate --enemies 10 --count 50 --seed 1 --out scenarios.json
  %(prog)s compare --scenarios scenarios.json --algorithms greedy,mcts
  %(prog)s play --algorithm dp --seed 7
        """
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    max_enemies = len(DEFAULT_ENEMY_STATS)

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate a scenario file")
    gen_parser.add_argument("--enemies", "-e", type=int, default=10, help=f"Enemies per run (1-{max_enemies})")
    gen_parser.add_argument("--count", "-n", type=int, default=20, help="Number of scenarios")
    gen_parser.add_argument("--seed", "-s", type=int, help="Master seed")
    gen_parser.add_argument("--options", type=int, default=4, help="Loot options per enemy")
    gen_parser.add_argument("--out", "-o", required=True, help="Output JSON path")

    # Compare command
    cmp_parser = subparsers.add_parser("compare", help="Compare algorithms over scenarios")
    cmp_parser.add_argument("--scenarios", required=True, help="Scenario JSON path")
    cmp_parser.add_argument("--algorithms", "-a", type=parse_algorithm_list,
                            default=list(ALGORITHM_NAMES), help="Comma-separated algorithm names")
    cmp_parser.add_argument("--enemies", "-e", type=int, default=10, help="Enemies per run")
    cmp_parser.add_argument("--max-rounds", type=int, default=100, help="Round cap per enemy")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play one run")
    play_parser.add_argument("--algorithm", "-a", default="mcts", choices=list(ALGORITHM_NAMES))
    play_parser.add_argument("--seed", "-s", type=int, help="Engine seed")
    play_parser.add_argument("--enemies", "-e", type=int, default=10, help="Enemies in the run")
    play_parser.add_argument("--options", type=int, default=3, help="Loot options after each enemy")
    play_parser.add_argument("--max-rounds", type=int, default=100, help="Round cap per enemy")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "generate": cmd_generate,
        "compare": cmd_compare,
        "play": cmd_play,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())

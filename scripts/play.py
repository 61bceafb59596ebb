#!/usr/bin/env python3
"""
Play Ricochet Robots rounds from the terminal.

Usage:
    python scripts/play.py
    python scripts/play.py configs/ricochet_robots/small.yaml --seed 7

Commands:
    <robot> <direction>   slide a robot, e.g. "0 up" or "red left"
    moves <robot>         list where a robot can go
    reset                 put robots back where the round started
    quit
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ricochet_board.games.ricochet_robots import BoardConfig, BoardError, RicochetRobotsGame
from ricochet_board.games.ricochet_robots.layout import DIRECTION_NAMES, parse_direction


def print_state(game: RicochetRobotsGame) -> None:
    state = game.state()
    names = game.config.robot_names
    print(f"Round {state.round_number}, moves so far: {state.move_count}")
    print(f"Target: {names[state.target_robot]} robot to {tuple(state.target)}")
    for idx, tile in enumerate(state.robots):
        print(f"  {idx} {names[idx]:<8} {tuple(tile)}")


def robot_index(game: RicochetRobotsGame, token: str) -> int:
    if token.isdigit():
        return int(token)
    return game.config.robot_names.index(token)


def main():
    parser = argparse.ArgumentParser(description="Play Ricochet Robots in the terminal")
    parser.add_argument("config", type=str, nargs="?", help="Path to YAML board configuration")
    parser.add_argument("--seed", type=int, help="Seed for robot and target placement")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = None
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Configuration file not found: {config_path}")
            sys.exit(1)
        config = BoardConfig.from_yaml(config_path)
        print(f"Loaded configuration from {config_path}")

    game = RicochetRobotsGame(config=config)
    game.start_game(seed=args.seed)
    print_state(game)

    for line in sys.stdin:
        words = line.split()
        if not words:
            continue
        if words[0] == "quit":
            break
        try:
            if words[0] == "reset":
                game.reset()
            elif words[0] == "moves" and len(words) == 2:
                robot = robot_index(game, words[1])
                for direction, tile in game.board.legal_moves(robot).items():
                    print(f"  {DIRECTION_NAMES[direction]:<5} -> {tuple(tile)}")
                continue
            elif len(words) == 2:
                robot = robot_index(game, words[0])
                direction = parse_direction(words[1])
                moves = game.board.legal_moves(robot)
                if direction not in moves:
                    print("That robot cannot move that way.")
                    continue
                if game.move_robot(robot, moves[direction]):
                    print(f"Round won in {game.move_count} moves!")
                    game.start_next_round()
            else:
                print("Unknown command")
                continue
        except (BoardError, ValueError, IndexError) as err:
            print(f"Error: {err}")
            continue
        print_state(game)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
对战脚本

Usage:
    python scripts/play.py --mode npc --data-dir data/   # 与 NPC 对战，获得出牌推荐
    python scripts/play.py --mode watch                  # 观看 AI 对战 (随机卡组)
    python scripts/play.py --mode watch --depth 3 --iterations 2000
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
import time

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

import numpy as np

from core.cards import Direction
from core.game import Game
from core.state import Move, Player, PLACEMENT_NAMES, DECK_SIZE
from catalog import CardCatalog, SavedDecks, load_all_data
from search import SearchConfig, recommend
from evaluation import RandomAgent, GreedyAgent, SearchAgent, make_random_game, play_game

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Triple Triad Solver")

    parser.add_argument(
        "--mode",
        type=str,
        default="npc",
        choices=["npc", "watch"],
        help="Mode: play against an NPC or watch AI",
    )
    parser.add_argument("--data-dir", type=str, default="data", help="Directory with CSV data")
    parser.add_argument("--decks", type=str, default=None, help="Saved decks JSON path")
    parser.add_argument(
        "--opponent",
        type=str,
        default="random",
        choices=["random", "greedy", "search"],
        help="Opponent type (watch mode)",
    )
    parser.add_argument("--delay", type=float, default=0.5, help="Delay between moves")
    parser.add_argument("--games", type=int, default=1, help="Number of games")

    # 搜索参数
    parser.add_argument("--depth", type=int, default=10)
    parser.add_argument("--iterations", type=int, default=100_000)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--executor", type=str, default="process", choices=["thread", "process"])
    parser.add_argument("--seed", type=int, default=None)

    return parser.parse_args(argv)


def build_config(args) -> SearchConfig:
    return SearchConfig(
        depth=args.depth,
        monte_carlo_iterations=args.iterations,
        max_workers=args.workers,
        executor=args.executor,
        seed=args.seed,
    )


def render_board(game: Game) -> str:
    """
    棋盘文本

      ┌─────┬─────┬─────┐
      │  5S │  3  │     │
      │ 2 A │ 7 1 │     │
      │  4  │  6  │     │
      ├─────┼─────┼─────┤
    """
    d = game.display_rank
    lines = ["  ┌─────┬─────┬─────┐"]
    for row in range(3):
        cells = [row * 3 + col for col in range(3)]
        north = " │ ".join(f" {d(p, Direction.NORTH)}{game.suit_display(p)}" for p in cells)
        middle = " │ ".join(f"{d(p, Direction.WEST)} {d(p, Direction.EAST)}" for p in cells)
        south = " │ ".join(f" {d(p, Direction.SOUTH)} " for p in cells)

        if row == 1:
            left = str(game.hand_size(Player.BLUE))
            right = str(game.hand_size(Player.RED))
        else:
            left, right = " ", ""
        lines.append(f"  │ {north} │")
        lines.append(f"{left} │ {middle} │ {right}".rstrip())
        lines.append(f"  │ {south} │")
        lines.append("  ├─────┼─────┼─────┤" if row < 2 else "  └─────┴─────┴─────┘")

    owners = "  " + " ".join(
        (str(cell[1])[0] if cell is not None else ".") for cell in game.current_state.board
    )
    lines.append(f"  Owners: {owners.strip()}")
    return "\n".join(lines)


def prompt_choice(prompt: str, options: List[str]) -> int:
    """列出选项并读取编号"""
    for i, option in enumerate(options):
        print(f"  {i + 1}. {option}")
    while True:
        choice = input(f"{prompt} ")
        try:
            idx = int(choice) - 1
        except ValueError:
            print("Please enter a number")
            continue
        if 0 <= idx < len(options):
            return idx
        print("Invalid choice, try again")


def pick_move(moves: List[Move], game: Game, catalog: CardCatalog) -> Move:
    """先选卡牌，再选位置"""
    card_indices = sorted({mv.card_idx for mv in moves})
    card_names = [
        game.player_hand_card_name(moves[0].player, idx, catalog) for idx in card_indices
    ]
    card_idx = card_indices[prompt_choice("What card?", card_names)]

    candidates = [mv for mv in moves if mv.card_idx == card_idx]
    placement = prompt_choice("Where?", [PLACEMENT_NAMES[mv.placement] for mv in candidates])
    return candidates[placement]


def vs_npc(args):
    """与 NPC 对战 (人类固定为 Blue)"""
    catalog = load_all_data(args.data_dir)
    saved_decks = SavedDecks(args.decks)
    config = build_config(args)

    if saved_decks.get_deck_count() == 0:
        print("You must have at least 1 registered deck to play an NPC!")
        return

    npc_names = catalog.npc_names()
    npc_name = npc_names[prompt_choice("Which NPC?", npc_names)]

    deck_names = saved_decks.get_deck_names()
    deck = saved_decks.get_deck(deck_names[prompt_choice("Which deck are you using?", deck_names)])

    current = [Player.BLUE, Player.RED][prompt_choice("Who goes first?", ["Blue", "Red"])]

    game = Game(human=Player.BLUE)
    game.set_cards_in_hand(
        Player.BLUE,
        [(card_id, catalog.require_card(card_id)) for card_id in deck],
        DECK_SIZE,
    )
    game.set_cards_for_npc(Player.RED, catalog, npc_name)
    print(f"Rules: {game.rules}")

    while not game.win_state().finished:
        print(render_board(game))
        possible_moves = game.get_possible_moves(current)

        if current is Player.RED:
            print("What did the NPC do?")
        else:
            print("Finding optimal move...")
            result = recommend(game, current, config)
            if result.move is not None:
                card_name = game.player_hand_card_name(current, result.move.card_idx, catalog)
                print(
                    f"Recommended move: Play your {card_name} card in the "
                    f"{PLACEMENT_NAMES[result.move.placement]}. (Score: {result.score})"
                )
            print("What did you actually do?")

        game.apply_move(pick_move(possible_moves, game, catalog))
        current = current.other()

    print(render_board(game))
    win_state = game.win_state()
    if win_state.is_tie:
        outcome = "Tie!"
    elif win_state.winner is Player.BLUE:
        outcome = "You win!"
    else:
        outcome = "You lose!"
    print(f"Game finished! Result: {outcome}")


def create_agent(kind: str, name: str, config: SearchConfig, seed: Optional[int]):
    """创建智能体"""
    if kind == "search":
        return SearchAgent(config, name)
    if kind == "greedy":
        return GreedyAgent(name)
    return RandomAgent(name, seed)


def watch_game(args):
    """观看 AI 对战: Blue 为搜索智能体"""
    config = build_config(args)
    rng = np.random.default_rng(args.seed)
    agents = {
        Player.BLUE: SearchAgent(config, "Search"),
        Player.RED: create_agent(args.opponent, args.opponent.capitalize(), config, args.seed),
    }

    for game_idx in range(args.games):
        print(f"\n{'='*40}")
        print(f"Game {game_idx + 1}/{args.games}")
        print("=" * 40)

        game = make_random_game(rng)
        first_player = Player.BLUE if game_idx % 2 == 0 else Player.RED

        start = time.perf_counter()
        length = play_game(game, agents, first_player)
        print(render_board(game))

        red, blue = game.current_state.scores()
        winner = game.win_state().winner
        print(f"Winner: {winner or 'tie'} (Blue {blue} - Red {red}, {length} moves, "
              f"{time.perf_counter() - start:.1f}s)")
        time.sleep(args.delay)


def main():
    args = parse_args()

    if args.mode == "npc":
        vs_npc(args)
    elif args.mode == "watch":
        watch_game(args)


if __name__ == "__main__":
    main()

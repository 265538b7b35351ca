#!/usr/bin/env python3
"""
评估脚本

Usage:
    python scripts/evaluate.py --games 20 --depth 3 --iterations 2000
    python scripts/evaluate.py --compare --opponent greedy --games 50 --workers 4
"""
import argparse
import logging
import sys
from pathlib import Path
import json
from dataclasses import replace

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

import numpy as np

from core.rules import Rules
from search import SearchConfig
from evaluation import (
    Evaluator,
    RandomAgent,
    GreedyAgent,
    SearchAgent,
    ParallelArena,
    make_random_game,
    summarize,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Triple Triad Solver Evaluation")

    # 模式
    parser.add_argument("--compare", action="store_true", help="Run a parallel arena match")

    # 评估参数
    parser.add_argument("--games", type=int, default=20, help="Number of games")
    parser.add_argument(
        "--opponent",
        type=str,
        default="random",
        choices=["random", "greedy"],
        help="Opponent type",
    )
    parser.add_argument("--rules", type=int, nargs="*", default=[], help="Rule codes")

    # 搜索参数
    parser.add_argument("--depth", type=int, default=3)
    parser.add_argument("--iterations", type=int, default=2000)
    parser.add_argument("--workers", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None)

    # 其他
    parser.add_argument("--output", type=str, help="Output file for results")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args()


def make_opponent(args):
    if args.opponent == "greedy":
        return GreedyAgent("greedy")
    return RandomAgent("random", args.seed)


def evaluate_single(args, game_fn, config):
    """评估搜索智能体"""
    agent = SearchAgent(config, "search")
    evaluator = Evaluator(game_fn=game_fn)
    result = evaluator.evaluate(
        agent=agent,
        opponent=make_opponent(args),
        n_games=args.games,
        verbose=args.verbose,
    )

    logger.info("=" * 50)
    logger.info("Evaluation Results")
    logger.info("=" * 50)
    logger.info(f"Win Rate: {result.win_rate:.2%}")
    logger.info(f"Tie Rate: {result.tie_rate:.2%}")
    logger.info(f"First Player Win Rate: {result.first_player_win_rate:.2%}")
    logger.info(f"Second Player Win Rate: {result.second_player_win_rate:.2%}")
    logger.info(f"Average Score Diff: {result.avg_score_diff:.2f}")
    logger.info("=" * 50)

    if args.output:
        with open(args.output, "w") as f:
            json.dump({
                "win_rate": result.win_rate,
                "tie_rate": result.tie_rate,
                "first_player_win_rate": result.first_player_win_rate,
                "second_player_win_rate": result.second_player_win_rate,
                "avg_score_diff": result.avg_score_diff,
                "games_played": result.games_played,
            }, f, indent=2)
        logger.info(f"Results saved to {args.output}")

    return result


def compare_agents(args, game_fn, config):
    """并行对战"""
    arena = ParallelArena(game_fn=game_fn, n_workers=args.workers)
    # 对战中的搜索只使用单个工作者，并行度留给对局
    agent = SearchAgent(replace(config, max_workers=1), "search")
    results = arena.play_match(make_opponent(args), agent, n_games=args.games)
    standings = summarize(results)

    logger.info("=" * 50)
    logger.info("Arena Results")
    logger.info("=" * 50)
    for name, stats in standings.items():
        logger.info(f"{name}: win {stats['win_rate']:.2%}, tie {stats['tie_rate']:.2%}")
    logger.info("=" * 50)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(standings, f, indent=2)

    return standings


def main():
    args = parse_args()

    config = SearchConfig(
        depth=args.depth,
        monte_carlo_iterations=args.iterations,
        seed=args.seed,
    )
    rules = Rules.from_codes(args.rules)
    rng = np.random.default_rng(args.seed)

    def game_fn():
        return make_random_game(rng, rules=rules)

    if args.compare:
        compare_agents(args, game_fn, config)
    else:
        evaluate_single(args, game_fn, config)


if __name__ == "__main__":
    main()

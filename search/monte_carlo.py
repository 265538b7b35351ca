"""
蒙特卡洛模拟

对 alpha-beta 给出的并列最优动作做随机对局，用胜率区分优劣。
每个候选动作由一个独立的工作者处理，各自持有独占的游戏副本。
"""
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Any, List, Optional, Sequence, Tuple
import logging

import numpy as np

from .base import SearchableGame
from .config import SearchConfig, TIE_WEIGHT

logger = logging.getLogger(__name__)


class SimulationResult(Enum):
    """单次随机对局结果 (相对于评估方)"""
    PLAYER_WIN = "player_win"
    TIE = "tie"
    OPPONENT_WIN = "opponent_win"


def simulate_game_once(
    game: SearchableGame,
    player: Any,
    rng: np.random.Generator,
) -> SimulationResult:
    """
    从 player 刚出完牌的局面开始，双方均匀随机出牌直到终局

    结束后撤销本次模拟的所有步数，使游戏恢复到模拟前的局面。
    如果某一方在终局前没有合法动作，按当前评估的正负判定结果。
    """
    moves_taken = 0
    current_player = player.other()

    while True:
        win_state = game.win_state()
        if win_state.finished:
            if win_state.is_tie:
                result = SimulationResult.TIE
            elif win_state.winner == player:
                result = SimulationResult.PLAYER_WIN
            else:
                result = SimulationResult.OPPONENT_WIN
            break

        possible_moves = game.get_possible_moves(current_player)
        if not possible_moves:
            value = game.evaluate_current_position_for(player)
            if value > 0:
                result = SimulationResult.PLAYER_WIN
            elif value < 0:
                result = SimulationResult.OPPONENT_WIN
            else:
                result = SimulationResult.TIE
            break

        move = possible_moves[rng.integers(len(possible_moves))]
        game.apply_move(move)
        moves_taken += 1
        current_player = current_player.other()

    game.undo_last_moves(moves_taken)
    return result


def monte_carlo(
    game: SearchableGame,
    player: Any,
    iterations: int,
    rng: Optional[np.random.Generator] = None,
    tie_weight: float = TIE_WEIGHT,
) -> float:
    """
    随机对局胜率

    Args:
        game: player 刚出完牌的局面
        player: 评估方
        iterations: 模拟次数
        rng: 随机数生成器
        tie_weight: 平局权重

    Returns:
        (胜局 + tie_weight * 平局) / iterations，取值在 [0, 1]
    """
    if iterations <= 0:
        raise ValueError(f"iterations must be > 0, got {iterations}")
    if rng is None:
        rng = np.random.default_rng()

    wins = 0
    ties = 0
    for _ in range(iterations):
        result = simulate_game_once(game, player, rng)
        if result is SimulationResult.PLAYER_WIN:
            wins += 1
        elif result is SimulationResult.TIE:
            ties += 1

    logger.debug(
        f"Monte Carlo result: {wins} wins, {ties} ties, "
        f"{iterations - wins - ties} losses"
    )
    return (wins + ties * tie_weight) / iterations


def evaluate_branch(
    game: SearchableGame,
    player: Any,
    iterations: int,
    seed: Any,
    tie_weight: float = TIE_WEIGHT,
) -> float:
    """工作者入口: 在独占的分支副本上运行模拟"""
    return monte_carlo(game, player, iterations, np.random.default_rng(seed), tie_weight)


@dataclass
class MoveSelection:
    """候选动作及其胜率"""
    move: Optional[Any]
    win_ratio: float


def no_move_selection() -> MoveSelection:
    return MoveSelection(move=None, win_ratio=float('-inf'))


def combine_move_selection(sel1: MoveSelection, sel2: MoveSelection) -> MoveSelection:
    """胜率严格更高时才替换，胜率相同保留 sel1"""
    if sel1.move is None:
        return sel2
    if sel2.move is None:
        return sel1
    if sel2.win_ratio > sel1.win_ratio:
        return sel2
    return sel1


def select_by_monte_carlo(
    game: SearchableGame,
    player: Any,
    candidates: Sequence[Any],
    config: Optional[SearchConfig] = None,
) -> Tuple[Optional[Any], float]:
    """
    并行评估所有候选动作并选出胜率最高者

    每个候选动作先在截断历史的副本上执行，再交给一个工作者。
    按候选顺序归约，胜率相同时保留更靠前的动作。

    Args:
        game: 当前局面 (不会被修改)
        player: 选择动作的一方
        candidates: 候选动作
        config: 搜索配置

    Returns:
        (最佳动作, 胜率)；没有候选动作时为 (None, -inf)
    """
    config = config or SearchConfig()
    if not candidates:
        return None, float('-inf')

    branches = []
    for move in candidates:
        branch = game.truncate_history_and_clone()
        branch.apply_move(move)
        branches.append(branch)

    seeds = np.random.SeedSequence(config.seed).spawn(len(candidates))
    n_workers = config.max_workers or len(candidates)
    executor_cls = ProcessPoolExecutor if config.executor == "process" else ThreadPoolExecutor

    with executor_cls(max_workers=n_workers) as executor:
        futures = [
            executor.submit(
                evaluate_branch,
                branch,
                player,
                config.monte_carlo_iterations,
                seed,
                config.tie_weight,
            )
            for branch, seed in zip(branches, seeds)
        ]
        ratios: List[float] = [future.result() for future in futures]

    for move, ratio in zip(candidates, ratios):
        logger.debug(f"Candidate {move}: win ratio {ratio:.4f}")

    selections = [MoveSelection(move=move, win_ratio=ratio) for move, ratio in zip(candidates, ratios)]
    best = reduce(combine_move_selection, selections, no_move_selection())
    return best.move, best.win_ratio

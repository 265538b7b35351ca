"""
出牌推荐

两阶段搜索:
1. negamax + alpha-beta 找出所有并列最优动作
2. 并列动作多于一个时，用蒙特卡洛随机对局的胜率选择
"""
from typing import Any, NamedTuple, Optional
import logging
import time

from .base import SearchableGame
from .config import SearchConfig
from .monte_carlo import select_by_monte_carlo
from .negamax import alpha_beta

logger = logging.getLogger(__name__)


class Recommendation(NamedTuple):
    """
    推荐结果

    Attributes:
        move: 推荐动作，没有合法动作时为 None
        score: alpha-beta 分数
        win_ratio: 蒙特卡洛胜率，只有一个最优动作时为 None
    """
    move: Optional[Any]
    score: float
    win_ratio: Optional[float]


def recommend(
    game: SearchableGame,
    player: Any,
    config: Optional[SearchConfig] = None,
) -> Recommendation:
    """
    为 player 推荐出牌

    在截断历史的副本上搜索，调用方的游戏不会被修改。调用前应先确认
    对局未结束，否则返回 move=None 与静态评估分数。

    Args:
        game: 当前游戏
        player: 行动方
        config: 搜索配置

    Returns:
        Recommendation(move, score, win_ratio)
    """
    config = config or SearchConfig()
    game = game.truncate_history_and_clone()

    start = time.perf_counter()
    best_moves, score = alpha_beta(game, config.depth, float('-inf'), float('inf'), player)
    logger.info(
        f"Found {len(best_moves)} moves with best score {score} "
        f"(negamax duration: {time.perf_counter() - start:.3f}s)"
    )

    if not best_moves:
        return Recommendation(move=None, score=score, win_ratio=None)
    if len(best_moves) == 1:
        return Recommendation(move=best_moves[0], score=score, win_ratio=None)

    logger.info(f"Entering Monte Carlo simulation with {len(best_moves)} moves")
    start = time.perf_counter()
    move, win_ratio = select_by_monte_carlo(game, player, best_moves, config)
    logger.info(f"Monte Carlo finished (duration: {time.perf_counter() - start:.3f}s)")

    return Recommendation(move=move, score=score, win_ratio=win_ratio)

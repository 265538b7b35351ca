"""
Search Layer - 对抗搜索 (与具体规则无关)

Modules:
    base: 可搜索游戏接口
    config: 搜索配置
    negamax: negamax + alpha-beta 剪枝
    monte_carlo: 蒙特卡洛随机对局与并行归约
    recommend: 两阶段出牌推荐
"""
from .base import SearchableGame, WinState

from .config import (
    SearchConfig,
    DEFAULT_DEPTH,
    MONTE_CARLO_ITERATIONS,
    TIE_WEIGHT,
)

from .negamax import alpha_beta

from .monte_carlo import (
    SimulationResult,
    MoveSelection,
    simulate_game_once,
    monte_carlo,
    select_by_monte_carlo,
)

from .recommend import Recommendation, recommend

__all__ = [
    # base
    "SearchableGame",
    "WinState",
    # config
    "SearchConfig",
    "DEFAULT_DEPTH",
    "MONTE_CARLO_ITERATIONS",
    "TIE_WEIGHT",
    # negamax
    "alpha_beta",
    # monte_carlo
    "SimulationResult",
    "MoveSelection",
    "simulate_game_once",
    "monte_carlo",
    "select_by_monte_carlo",
    # recommend
    "Recommendation",
    "recommend",
]

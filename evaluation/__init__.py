"""
Evaluation Layer - 评估框架

Modules:
    evaluator: 评估器和智能体
    arena: 对战竞技场
"""
from .evaluator import (
    EvalResult,
    Agent,
    RandomAgent,
    GreedyAgent,
    SearchAgent,
    Evaluator,
    play_game,
)
from .arena import (
    MatchResult,
    Arena,
    ParallelArena,
    make_random_game,
    summarize,
)

__all__ = [
    # evaluator
    "EvalResult",
    "Agent",
    "RandomAgent",
    "GreedyAgent",
    "SearchAgent",
    "Evaluator",
    "play_game",
    # arena
    "MatchResult",
    "Arena",
    "ParallelArena",
    "make_random_game",
    "summarize",
]

"""
Core Layer - 纯游戏逻辑 (无搜索、无 I/O)

Modules:
    cards: 卡牌定义与有效点数
    rules: 可选规则与翻牌判定
    state: 游戏状态
    game: 游戏引擎 (历史、悔棋、终局判定)
    errors: 异常定义
"""
from .cards import (
    Card,
    Direction,
    Suit,
    Modifiers,
    MAX_VALUE,
    EMPTY_MODIFIERS,
    SUIT_TO_STR,
    CSV_SUIT_CODES,
    suit_bonus,
    rank_to_str,
)

from .rules import Rules, RuleEngine, RULE_CODES

from .state import (
    Player,
    Move,
    GameState,
    ADJACENT_PAIRS,
    NEIGHBORS,
    PLACEMENT_NAMES,
    BOARD_SIZE,
    HAND_SLOTS,
    DECK_SIZE,
)

from .game import Game

from .errors import TriadError, UnavailableMoveError, InsufficientHistoryError

__all__ = [
    # cards
    "Card",
    "Direction",
    "Suit",
    "Modifiers",
    "MAX_VALUE",
    "EMPTY_MODIFIERS",
    "SUIT_TO_STR",
    "CSV_SUIT_CODES",
    "suit_bonus",
    "rank_to_str",
    # rules
    "Rules",
    "RuleEngine",
    "RULE_CODES",
    # state
    "Player",
    "Move",
    "GameState",
    "ADJACENT_PAIRS",
    "NEIGHBORS",
    "PLACEMENT_NAMES",
    "BOARD_SIZE",
    "HAND_SLOTS",
    "DECK_SIZE",
    # game
    "Game",
    # errors
    "TriadError",
    "UnavailableMoveError",
    "InsufficientHistoryError",
]

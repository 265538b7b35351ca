"""
卡牌定义与有效点数计算

每张卡牌有四个方向的点数 (1-10，10 显示为 "A") 以及可选的种族 (Suit)。
卡牌不可变，在各个游戏状态之间按值共享。
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


# 点数上限 (显示为 "A")
MAX_VALUE = 10

# 种族修正值的取值范围
MIN_MODIFIER = 0
MAX_MODIFIER = MAX_VALUE


class Direction(IntEnum):
    """卡牌边的方向"""
    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3

    def opposite(self) -> 'Direction':
        return _OPPOSITE[self]


_OPPOSITE: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
    Direction.EAST: Direction.WEST,
}


class Suit(IntEnum):
    """卡牌种族 (Ascension/Decension 规则使用)"""
    PRIMAL = 0
    BEASTMAN = 1
    SCION = 2
    GARLEAN = 3


# 种族到显示字符的映射
SUIT_TO_STR: Dict[Suit, str] = {
    Suit.PRIMAL: 'P',
    Suit.BEASTMAN: 'B',
    Suit.SCION: 'S',
    Suit.GARLEAN: 'G',
}

# 数据表中的种族编码 ("0" 表示无种族)
CSV_SUIT_CODES: Dict[str, Optional[Suit]] = {
    '0': None,
    '1': Suit.PRIMAL,
    '2': Suit.SCION,
    '3': Suit.BEASTMAN,
    '4': Suit.GARLEAN,
}

# 种族修正值，按 Suit 的值索引
Modifiers = Tuple[int, int, int, int]

EMPTY_MODIFIERS: Modifiers = (0, 0, 0, 0)


@dataclass(frozen=True, slots=True)
class Card:
    """
    不可变卡牌

    Attributes:
        values: 四个方向的基础点数，按 Direction 索引 (北, 南, 西, 东)
        suit: 种族，None 表示无种族
    """
    values: Tuple[int, int, int, int]
    suit: Optional[Suit] = None

    @classmethod
    def new(cls, n: int, s: int, w: int, e: int, suit: Optional[Suit] = None) -> 'Card':
        """按 北/南/西/东 顺序创建卡牌"""
        return cls(values=(n, s, w, e), suit=suit)

    def value(self, direction: Direction) -> int:
        """基础点数"""
        return self.values[direction]

    def get_modified_value(self, modifiers: Modifiers, direction: Direction) -> int:
        """
        有效点数 = 基础点数 + 种族修正值

        修正值先被限制在 [0, 10]，相加后的结果不再限制，
        因此有效点数可以超过 10。

        Args:
            modifiers: 当前的种族修正值
            direction: 方向

        Returns:
            有效点数
        """
        return self.values[direction] + suit_bonus(modifiers, self.suit)

    def get_modified_value_display(self, modifiers: Modifiers, direction: Direction) -> str:
        return rank_to_str(self.get_modified_value(modifiers, direction))

    @property
    def suit_str(self) -> str:
        return SUIT_TO_STR[self.suit] if self.suit is not None else ' '

    def __str__(self) -> str:
        n, s, w, e = (rank_to_str(v) for v in self.values)
        return f"[{n}{s}{w}{e}{self.suit_str.strip()}]"


def suit_bonus(modifiers: Modifiers, suit: Optional[Suit]) -> int:
    """种族修正值 (限制在 [0, 10])，无种族时为 0"""
    if suit is None:
        return 0
    return min(max(modifiers[suit], MIN_MODIFIER), MAX_MODIFIER)


def rank_to_str(value: int) -> str:
    """点数显示，10 及以上显示为 A"""
    if value >= MAX_VALUE:
        return 'A'
    return str(value)


def adjust_modifiers(modifiers: Modifiers, suit: Suit, delta: int) -> Modifiers:
    """返回某个种族修正值变化后的新修正值元组"""
    adjusted = list(modifiers)
    adjusted[suit] += delta
    return tuple(adjusted)

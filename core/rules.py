"""
可选规则与翻牌判定

RuleEngine 的方法都是纯函数，无状态
"""
from dataclasses import dataclass, fields
from typing import Iterable, Dict, FrozenSet
import logging

from .cards import Card, Direction, Modifiers, MAX_VALUE

logger = logging.getLogger(__name__)


# 数据表中的规则编码 -> Rules 字段
RULE_CODES: Dict[int, str] = {
    4: "same",
    6: "plus",
    8: "order",
    9: "chaos",
    10: "reverse",
    11: "fallen_ace",
    12: "ascension",
    13: "decension",
    14: "swap",
}

# 已知但不影响对局的规则编码
# 0: 无规则, 1: roulette, 2: all open, 3: three open, 5: sudden death, 7: random, 15: draft
IGNORED_RULE_CODES: FrozenSet[int] = frozenset({0, 1, 2, 3, 5, 7, 15})


@dataclass
class Rules:
    """
    对局可选规则

    只有 order / reverse / fallen_ace / ascension / decension 会影响对局，
    same / plus / chaos / swap 仅被解析和保存。

    Attributes:
        same: 两条及以上相邻边点数相同时翻牌
        plus: 两条及以上相邻边点数之和相同时翻牌
        order: 必须按卡组顺序出牌 (仅约束人类玩家)
        chaos: 按对局前随机决定的顺序出牌
        reverse: 小点数翻大点数
        fallen_ace: 1 可以翻 A；reverse 下 A 可以翻 1
        ascension: 同种族卡牌每打出一张，该种族点数 +1
        decension: 同种族卡牌每打出一张，该种族点数 -1
        swap: 对局前双方随机交换一张卡
    """
    same: bool = False
    plus: bool = False
    order: bool = False
    chaos: bool = False
    reverse: bool = False
    fallen_ace: bool = False
    ascension: bool = False
    decension: bool = False
    swap: bool = False

    def add_rule_code(self, code: int) -> None:
        """根据数据表中的规则编码打开对应规则，未知编码只记录警告"""
        name = RULE_CODES.get(code)
        if name is not None:
            setattr(self, name, True)
        elif code not in IGNORED_RULE_CODES:
            logger.warning(f"Found unknown rule {code}")

    @classmethod
    def from_codes(cls, codes: Iterable[int]) -> 'Rules':
        rules = cls()
        for code in codes:
            rules.add_rule_code(code)
        return rules

    @property
    def active(self) -> Dict[str, bool]:
        """已开启的规则"""
        return {f.name: True for f in fields(self) if getattr(self, f.name)}

    def __str__(self) -> str:
        return ", ".join(self.active) or "none"


class RuleEngine:
    """
    翻牌规则引擎

    所有方法都是静态方法，无状态
    """

    @staticmethod
    def is_flipped_by(
        defender: Card,
        attacker: Card,
        direction: Direction,
        modifiers: Modifiers,
        rules: Rules,
    ) -> bool:
        """
        判断已在场上的卡牌是否被相邻位置刚打出的卡牌翻转

        direction 是打出位置相对于被判定卡牌的方向，例如:
            [defender][attacker]  -> Direction.EAST
            [attacker]
            [defender]            -> Direction.NORTH

        Args:
            defender: 场上的卡牌
            attacker: 刚打出的卡牌
            direction: 打出位置相对于 defender 的方向
            modifiers: 当前的种族修正值
            rules: 对局规则

        Returns:
            是否翻转
        """
        defender_value = defender.get_modified_value(modifiers, direction)
        attacker_value = attacker.get_modified_value(modifiers, direction.opposite())
        return RuleEngine.compare_values(defender_value, attacker_value, rules)

    @staticmethod
    def compare_values(defender_value: int, attacker_value: int, rules: Rules) -> bool:
        """比较两条相对边的有效点数"""
        if not rules.reverse:
            # Fallen Ace: 1 翻 A
            if rules.fallen_ace and defender_value == MAX_VALUE and attacker_value == 1:
                return True
            return attacker_value > defender_value

        # Reverse 下 Fallen Ace: A 翻 1
        if rules.fallen_ace and defender_value == 1 and attacker_value == MAX_VALUE:
            return True
        return attacker_value < defender_value

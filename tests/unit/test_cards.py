"""卡牌与有效点数测试"""
import pytest

from core.cards import (
    Card,
    Direction,
    Suit,
    EMPTY_MODIFIERS,
    SUIT_TO_STR,
    CSV_SUIT_CODES,
    suit_bonus,
    rank_to_str,
    adjust_modifiers,
)


class TestDirection:
    """Direction 枚举测试"""

    def test_values(self):
        assert Direction.NORTH == 0
        assert Direction.SOUTH == 1
        assert Direction.WEST == 2
        assert Direction.EAST == 3

    def test_opposite(self):
        assert Direction.NORTH.opposite() == Direction.SOUTH
        assert Direction.SOUTH.opposite() == Direction.NORTH
        assert Direction.WEST.opposite() == Direction.EAST
        assert Direction.EAST.opposite() == Direction.WEST


class TestSuit:
    """Suit 测试"""

    def test_display(self):
        assert SUIT_TO_STR[Suit.PRIMAL] == 'P'
        assert SUIT_TO_STR[Suit.BEASTMAN] == 'B'
        assert SUIT_TO_STR[Suit.SCION] == 'S'
        assert SUIT_TO_STR[Suit.GARLEAN] == 'G'

    def test_csv_codes(self):
        assert CSV_SUIT_CODES['0'] is None
        assert CSV_SUIT_CODES['1'] == Suit.PRIMAL
        assert CSV_SUIT_CODES['2'] == Suit.SCION
        assert CSV_SUIT_CODES['3'] == Suit.BEASTMAN
        assert CSV_SUIT_CODES['4'] == Suit.GARLEAN


class TestCard:
    """Card 测试"""

    def test_new(self):
        card = Card.new(1, 2, 3, 4)
        assert card.values == (1, 2, 3, 4)
        assert card.suit is None
        assert card.value(Direction.NORTH) == 1
        assert card.value(Direction.SOUTH) == 2
        assert card.value(Direction.WEST) == 3
        assert card.value(Direction.EAST) == 4

    def test_immutable(self):
        card = Card.new(1, 2, 3, 4)
        with pytest.raises(AttributeError):
            card.suit = Suit.PRIMAL

    def test_equality_by_value(self):
        assert Card.new(1, 2, 3, 4, Suit.SCION) == Card.new(1, 2, 3, 4, Suit.SCION)
        assert Card.new(1, 2, 3, 4) != Card.new(1, 2, 3, 4, Suit.SCION)

    def test_str(self):
        assert str(Card.new(10, 1, 2, 3, Suit.SCION)) == "[A123S]"
        assert str(Card.new(5, 5, 5, 5)) == "[5555]"

    def test_suit_str(self):
        assert Card.new(1, 1, 1, 1, Suit.GARLEAN).suit_str == 'G'
        assert Card.new(1, 1, 1, 1).suit_str == ' '


class TestEffectiveRank:
    """有效点数测试"""

    def test_no_modifiers(self):
        card = Card.new(3, 4, 5, 6, Suit.PRIMAL)
        assert card.get_modified_value(EMPTY_MODIFIERS, Direction.EAST) == 6

    def test_no_suit_ignores_modifiers(self):
        card = Card.new(5, 5, 5, 5)
        assert card.get_modified_value((3, 3, 3, 3), Direction.NORTH) == 5

    def test_suit_modifier_added(self):
        card = Card.new(5, 5, 5, 5, Suit.BEASTMAN)
        # 只加本种族的修正值
        assert card.get_modified_value((4, 2, 7, 1), Direction.NORTH) == 7

    def test_modifier_clamped_to_ten(self):
        card = Card.new(9, 1, 1, 1, Suit.PRIMAL)
        # 修正值 15 被限制为 10，结果 19 不再限制
        assert card.get_modified_value((15, 0, 0, 0), Direction.NORTH) == 19

    def test_negative_modifier_clamped_to_zero(self):
        card = Card.new(4, 1, 1, 1, Suit.SCION)
        assert card.get_modified_value((0, 0, -3, 0), Direction.NORTH) == 4

    def test_result_exceeds_ten(self):
        card = Card.new(9, 9, 9, 9, Suit.GARLEAN)
        assert card.get_modified_value((0, 0, 0, 3), Direction.WEST) == 12
        assert card.get_modified_value_display((0, 0, 0, 3), Direction.WEST) == 'A'

    def test_suit_bonus(self):
        assert suit_bonus((2, 0, 0, 0), None) == 0
        assert suit_bonus((2, 0, 0, 0), Suit.PRIMAL) == 2
        assert suit_bonus((11, 0, 0, 0), Suit.PRIMAL) == 10
        assert suit_bonus((-1, 0, 0, 0), Suit.PRIMAL) == 0


class TestDisplay:
    """点数显示测试"""

    def test_rank_to_str(self):
        assert rank_to_str(1) == '1'
        assert rank_to_str(9) == '9'
        assert rank_to_str(10) == 'A'
        assert rank_to_str(12) == 'A'


class TestAdjustModifiers:
    """修正值调整测试"""

    def test_increment(self):
        assert adjust_modifiers(EMPTY_MODIFIERS, Suit.SCION, 1) == (0, 0, 1, 0)

    def test_decrement_below_zero_kept(self):
        # 原始值可以为负，只在计算有效点数时限制
        assert adjust_modifiers(EMPTY_MODIFIERS, Suit.PRIMAL, -1) == (-1, 0, 0, 0)

    def test_returns_new_tuple(self):
        modifiers = (1, 2, 3, 4)
        adjusted = adjust_modifiers(modifiers, Suit.GARLEAN, 1)
        assert modifiers == (1, 2, 3, 4)
        assert adjusted == (1, 2, 3, 5)

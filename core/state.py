"""
游戏状态定义

使用不可变数据结构，支持:
- 回溯搜索 (每一步产生新快照)
- 分支之间互不影响
- 线程安全
"""
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple
from enum import Enum

from .cards import Card, Direction, Modifiers, EMPTY_MODIFIERS, adjust_modifiers
from .rules import Rules, RuleEngine


BOARD_SIZE = 9
HAND_SLOTS = 10
# 前 5 个位置是固定卡组，后 5 个位置是 NPC 的可变卡
FIXED_SLOTS = 5
DECK_SIZE = 5

# 棋盘位置名称 (行优先)
#   0 1 2
#   3 4 5
#   6 7 8
PLACEMENT_NAMES: Tuple[str, ...] = ("NW", "N", "NE", "W", "Center", "E", "SW", "S", "SE")


class Player(Enum):
    """玩家"""
    RED = 0
    BLUE = 1

    def other(self) -> 'Player':
        return Player.BLUE if self is Player.RED else Player.RED

    def __str__(self) -> str:
        return self.name.capitalize()


# 相邻格子 (a, b, b 相对于 a 的方向)
ADJACENT_PAIRS: Tuple[Tuple[int, int, Direction], ...] = (
    (0, 1, Direction.EAST), (1, 2, Direction.EAST),
    (3, 4, Direction.EAST), (4, 5, Direction.EAST),
    (6, 7, Direction.EAST), (7, 8, Direction.EAST),
    (0, 3, Direction.SOUTH), (1, 4, Direction.SOUTH), (2, 5, Direction.SOUTH),
    (3, 6, Direction.SOUTH), (4, 7, Direction.SOUTH), (5, 8, Direction.SOUTH),
)


def _build_neighbors() -> Dict[int, Tuple[Tuple[int, Direction], ...]]:
    """
    打出位置 -> ((相邻位置, 打出位置相对于相邻位置的方向), ...)
    """
    neighbors: Dict[int, List[Tuple[int, Direction]]] = {pos: [] for pos in range(BOARD_SIZE)}
    for a, b, direction in ADJACENT_PAIRS:
        # 在 b 打出时，a 看到的打出方向就是 direction
        neighbors[b].append((a, direction))
        neighbors[a].append((b, direction.opposite()))
    return {pos: tuple(sorted(items)) for pos, items in neighbors.items()}


NEIGHBORS: Dict[int, Tuple[Tuple[int, Direction], ...]] = _build_neighbors()


@dataclass(frozen=True, slots=True)
class Move:
    """
    不可变出牌动作

    Attributes:
        player: 出牌玩家
        card_idx: 手牌位置 (0-9)
        placement: 棋盘位置 (0-8)
    """
    player: Player
    card_idx: int
    placement: int

    def __str__(self) -> str:
        return f"{self.player} slot {self.card_idx} -> {PLACEMENT_NAMES[self.placement]}"


# 手牌位置: (卡牌 ID, 卡牌) 或 None
HandSlot = Optional[Tuple[int, Card]]
# 棋盘格子: (卡牌, 拥有者) 或 None
Cell = Optional[Tuple[Card, Player]]

EMPTY_BOARD: Tuple[Cell, ...] = (None,) * BOARD_SIZE
EMPTY_HAND: Tuple[HandSlot, ...] = (None,) * HAND_SLOTS


@dataclass(frozen=True)
class GameState:
    """
    不可变游戏状态快照

    Attributes:
        board: 9 个格子，行优先
        hands: 双方手牌，按 Player 的值索引，每方 10 个位置
        modifiers: 种族修正值 (未限制的原始值)
        actual_hand_sizes: 双方尚未打出的卡牌数，仅用于显示与计分
    """
    board: Tuple[Cell, ...] = EMPTY_BOARD
    hands: Tuple[Tuple[HandSlot, ...], Tuple[HandSlot, ...]] = (EMPTY_HAND, EMPTY_HAND)
    modifiers: Modifiers = EMPTY_MODIFIERS
    actual_hand_sizes: Tuple[int, int] = (0, 0)

    def get_hand(self, player: Player) -> Tuple[HandSlot, ...]:
        return self.hands[player.value]

    @property
    def is_game_over(self) -> bool:
        return all(cell is not None for cell in self.board)

    @property
    def empty_cells(self) -> List[int]:
        return [pos for pos, cell in enumerate(self.board) if cell is None]

    def scores(self) -> Tuple[int, int]:
        """双方得分 = 场上拥有的卡牌数 + 剩余手牌数"""
        scores = list(self.actual_hand_sizes)
        for cell in self.board:
            if cell is not None:
                scores[cell[1].value] += 1
        return scores[0], scores[1]

    def board_count(self, player: Player) -> int:
        """场上属于该玩家的卡牌数"""
        return sum(1 for cell in self.board if cell is not None and cell[1] is player)

    def eval_position(self, player: Player) -> float:
        """
        局面评估

        未结束: 双方得分之差
        已结束: 胜 +100，负 -100，平局 -30 (让搜索在可以取胜时避开平局)
        """
        scores = self.scores()
        mine = scores[player.value]
        theirs = scores[player.other().value]

        if self.is_game_over:
            if mine > theirs:
                return 100.0
            if mine < theirs:
                return -100.0
            return -30.0

        return float(mine - theirs)

    def get_possible_moves(self, player: Player, first_card_only: bool = False) -> List[Move]:
        """
        生成所有候选出牌

        按格子升序、手牌位置升序输出；first_card_only 时每个格子只使用
        第一张仍在手中的卡牌 (order 规则)。

        Args:
            player: 出牌玩家
            first_card_only: 是否只能出第一张手牌

        Returns:
            出牌列表，没有可出的牌时为空
        """
        hand = self.hands[player.value]
        card_indices = [idx for idx, slot in enumerate(hand) if slot is not None]
        if first_card_only:
            card_indices = card_indices[:1]

        moves = []
        for placement, cell in enumerate(self.board):
            if cell is not None:
                continue
            for card_idx in card_indices:
                moves.append(Move(player=player, card_idx=card_idx, placement=placement))
        return moves

    def with_move(self, move: Move, rules: Rules) -> 'GameState':
        """
        出牌后的新状态

        1. 从手牌移除卡牌，剩余手牌数 -1
        2. 与相邻的已占用格子进行翻牌判定
        3. Ascension / Decension 调整该种族修正值
        4. 放置卡牌

        调用方保证手牌位置有卡且目标格子为空。

        Args:
            move: 出牌动作
            rules: 对局规则

        Returns:
            新状态
        """
        player_idx = move.player.value
        hand = list(self.hands[player_idx])
        _, played_card = hand[move.card_idx]
        hand[move.card_idx] = None

        hands = list(self.hands)
        hands[player_idx] = tuple(hand)

        sizes = list(self.actual_hand_sizes)
        sizes[player_idx] -= 1

        # 翻牌判定使用出牌前的修正值
        board = list(self.board)
        for neighbor, direction in NEIGHBORS[move.placement]:
            cell = board[neighbor]
            if cell is None:
                continue
            card, owner = cell
            if RuleEngine.is_flipped_by(card, played_card, direction, self.modifiers, rules):
                board[neighbor] = (card, move.player)

        # same / plus 不参与翻牌判定
        modifiers = self.modifiers
        if played_card.suit is not None:
            if rules.ascension:
                modifiers = adjust_modifiers(modifiers, played_card.suit, 1)
            if rules.decension:
                modifiers = adjust_modifiers(modifiers, played_card.suit, -1)

        board[move.placement] = (played_card, move.player)

        return GameState(
            board=tuple(board),
            hands=(hands[0], hands[1]),
            modifiers=modifiers,
            actual_hand_sizes=(sizes[0], sizes[1]),
        )

    def with_hand(
        self,
        player: Player,
        slots: Tuple[HandSlot, ...],
        actual_size: int,
    ) -> 'GameState':
        """替换某一方的手牌"""
        if len(slots) != HAND_SLOTS:
            raise ValueError(f"Hand must have {HAND_SLOTS} slots, got {len(slots)}")

        hands = list(self.hands)
        hands[player.value] = tuple(slots)
        sizes = list(self.actual_hand_sizes)
        sizes[player.value] = actual_size
        return replace(self, hands=(hands[0], hands[1]), actual_hand_sizes=(sizes[0], sizes[1]))

"""
游戏引擎

持有只追加的状态历史 (最后一个为当前状态)、对局规则以及哪一方是人类玩家。
历史同时用于对局中的悔棋和搜索中的回溯。
"""
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from search.base import SearchableGame, WinState

from .cards import Card, Direction, rank_to_str
from .errors import UnavailableMoveError, InsufficientHistoryError
from .rules import Rules
from .state import (
    GameState,
    Move,
    Player,
    Cell,
    HandSlot,
    BOARD_SIZE,
    HAND_SLOTS,
    DECK_SIZE,
)

if TYPE_CHECKING:
    from catalog.loader import CardCatalog


class Game(SearchableGame):
    """
    游戏引擎

    Args:
        human: 人类玩家 (order 规则只约束人类玩家)，None 表示双方都不是人类
        rules: 对局规则
    """

    def __init__(self, human: Optional[Player] = None, rules: Optional[Rules] = None):
        self._history: List[GameState] = [GameState()]
        self.rules = rules if rules is not None else Rules()
        self.humans: Tuple[bool, bool] = (human is Player.RED, human is Player.BLUE)

    @classmethod
    def from_state(
        cls,
        state: GameState,
        rules: Optional[Rules] = None,
        humans: Tuple[bool, bool] = (False, False),
    ) -> 'Game':
        """从给定快照创建历史深度为 1 的引擎"""
        game = cls(rules=rules)
        game._history = [state]
        game.humans = humans
        return game

    @property
    def current_state(self) -> GameState:
        return self._history[-1]

    @property
    def history_depth(self) -> int:
        return len(self._history)

    def is_human(self, player: Player) -> bool:
        return self.humans[player.value]

    # ------------------------------------------------------------------
    # 对局准备 (直接修改当前状态，不增加历史)
    # ------------------------------------------------------------------

    def set_cards_in_hand(
        self,
        player: Player,
        cards: Sequence[Tuple[int, Card]],
        actual_size: int = DECK_SIZE,
    ) -> None:
        """
        设置一方的已知卡组

        Args:
            player: 玩家
            cards: 5 张 (卡牌 ID, 卡牌)，顺序即 order 规则下的出牌顺序
            actual_size: 剩余手牌数
        """
        if len(cards) != DECK_SIZE:
            raise ValueError(f"Deck must have {DECK_SIZE} cards, got {len(cards)}")

        slots: List[HandSlot] = list(cards) + [None] * (HAND_SLOTS - DECK_SIZE)
        self._history[-1] = self.current_state.with_hand(player, tuple(slots), actual_size)

    def set_cards_for_npc(self, player: Player, catalog: 'CardCatalog', npc_name: str) -> None:
        """
        设置 NPC 的固定卡与可变卡，并采用该 NPC 的规则

        固定卡放在 0-4，可变卡放在 5-9；卡牌 ID 为 0 表示空位。
        """
        npc = catalog.npcs_by_name[npc_name]
        slots: List[HandSlot] = []
        for card_id in list(npc.fixed_cards) + list(npc.variable_cards):
            if card_id != 0:
                slots.append((card_id, catalog.require_card(card_id)))
            else:
                slots.append(None)

        self._history[-1] = self.current_state.with_hand(player, tuple(slots), DECK_SIZE)
        self.rules = replace(npc.rules)

    # ------------------------------------------------------------------
    # SearchableGame
    # ------------------------------------------------------------------

    def get_possible_moves(self, player: Player) -> List[Move]:
        first_card_only = self.humans[player.value] and self.rules.order
        return self.current_state.get_possible_moves(player, first_card_only)

    def evaluate_current_position_for(self, player: Player) -> float:
        return self.current_state.eval_position(player)

    def apply_move(self, move: Move) -> None:
        state = self.current_state
        if not 0 <= move.placement < BOARD_SIZE or state.board[move.placement] is not None:
            raise UnavailableMoveError(f"Cell {move.placement} is not available")
        if not 0 <= move.card_idx < HAND_SLOTS or state.get_hand(move.player)[move.card_idx] is None:
            raise UnavailableMoveError(f"{move.player} has no card in slot {move.card_idx}")

        self._history.append(state.with_move(move, self.rules))

    def undo_last_moves(self, n: int) -> None:
        """
        撤销最近 n 步

        至少保留一个状态；n 超过可撤销步数时抛出异常且不修改历史。
        """
        if n < 0 or n >= len(self._history):
            raise InsufficientHistoryError(
                f"Cannot undo {n} moves with history depth {len(self._history)}"
            )
        if n:
            del self._history[-n:]

    def win_state(self) -> WinState:
        state = self.current_state
        if not state.is_game_over:
            return WinState.not_finished()

        red, blue = state.scores()
        if red > blue:
            return WinState.won_by(Player.RED)
        if blue > red:
            return WinState.won_by(Player.BLUE)
        return WinState.tie()

    def truncate_history_and_clone(self) -> 'Game':
        return Game.from_state(self.current_state, rules=replace(self.rules), humans=self.humans)

    # ------------------------------------------------------------------
    # 显示用只读接口
    # ------------------------------------------------------------------

    def cell(self, pos: int) -> Cell:
        return self.current_state.board[pos]

    def display_rank(self, pos: int, direction: Direction) -> str:
        """格子中卡牌在某方向的有效点数，空格子返回空格"""
        cell = self.cell(pos)
        if cell is None:
            return " "
        return rank_to_str(cell[0].get_modified_value(self.current_state.modifiers, direction))

    def suit_display(self, pos: int) -> str:
        cell = self.cell(pos)
        return cell[0].suit_str if cell is not None else " "

    def hand_size(self, player: Player) -> int:
        return self.current_state.actual_hand_sizes[player.value]

    def hand_card_id(self, player: Player, idx: int) -> int:
        slot = self.current_state.get_hand(player)[idx]
        if slot is None:
            raise UnavailableMoveError(f"{player} has no card in slot {idx}")
        return slot[0]

    def player_hand_card_name(self, player: Player, idx: int, catalog: 'CardCatalog') -> str:
        return catalog.card_names[self.hand_card_id(player, idx)]

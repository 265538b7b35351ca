"""
可搜索游戏的接口

搜索算法只通过这些方法访问游戏，不依赖具体规则
"""
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class WinState:
    """
    终局状态

    Attributes:
        finished: 是否结束
        winner: 赢家，平局或未结束时为 None
    """
    finished: bool
    winner: Optional[Any] = None

    @classmethod
    def not_finished(cls) -> 'WinState':
        return cls(finished=False)

    @classmethod
    def tie(cls) -> 'WinState':
        return cls(finished=True)

    @classmethod
    def won_by(cls, player: Any) -> 'WinState':
        return cls(finished=True, winner=player)

    @property
    def is_tie(self) -> bool:
        return self.finished and self.winner is None


class SearchableGame:
    """
    可搜索游戏基类

    两人零和、轮流行动；玩家对象需提供 other() 方法。
    apply_move / undo_last_moves 原地修改游戏，用于回溯搜索。
    """

    def get_possible_moves(self, player: Any) -> List[Any]:
        """当前玩家的所有合法动作，没有时返回空列表"""
        raise NotImplementedError

    def evaluate_current_position_for(self, player: Any) -> float:
        """从 player 的视角评估当前局面"""
        raise NotImplementedError

    def win_state(self) -> WinState:
        raise NotImplementedError

    def truncate_history_and_clone(self) -> 'SearchableGame':
        """只保留当前局面的独立副本"""
        raise NotImplementedError

    def apply_move(self, move: Any) -> None:
        raise NotImplementedError

    def undo_last_moves(self, n: int) -> None:
        raise NotImplementedError

"""
对战竞技场

组织两个智能体之间的多局对战
"""
from typing import Callable, Dict, List, Optional
from dataclasses import dataclass
from collections import defaultdict
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from core.cards import Card, Suit
from core.game import Game
from core.rules import Rules
from core.state import Player, DECK_SIZE

from .evaluator import Agent, play_game

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """对局结果"""
    red_agent: str
    blue_agent: str
    first_player: Player
    winner: Optional[Player]
    red_score: int
    blue_score: int
    length: int

    @property
    def is_tie(self) -> bool:
        return self.winner is None


def make_random_game(
    rng: Optional[np.random.Generator] = None,
    rules: Optional[Rules] = None,
    suit_prob: float = 0.3,
) -> Game:
    """
    创建双方各 5 张随机卡牌的对局

    Args:
        rng: 随机数生成器
        rules: 对局规则
        suit_prob: 每张卡牌带种族的概率

    Returns:
        已设置手牌的游戏
    """
    if rng is None:
        rng = np.random.default_rng()

    game = Game(rules=rules)
    card_id = 1
    for player in Player:
        cards = []
        for _ in range(DECK_SIZE):
            values = rng.integers(1, 11, size=4)
            suit = Suit(int(rng.integers(len(Suit)))) if rng.random() < suit_prob else None
            cards.append((card_id, Card.new(*(int(v) for v in values), suit=suit)))
            card_id += 1
        game.set_cards_in_hand(player, cards, DECK_SIZE)
    return game


class Arena:
    """
    对战竞技场

    组织智能体之间的对战
    """

    def __init__(self, game_fn: Callable[[], Game]):
        self.game_fn = game_fn

    def _play_single_game(
        self,
        red_agent: Agent,
        blue_agent: Agent,
        first_player: Player,
    ) -> MatchResult:
        """单局对战"""
        game = self.game_fn()
        agents = {Player.RED: red_agent, Player.BLUE: blue_agent}
        length = play_game(game, agents, first_player)
        red_score, blue_score = game.current_state.scores()

        return MatchResult(
            red_agent=red_agent.name,
            blue_agent=blue_agent.name,
            first_player=first_player,
            winner=game.win_state().winner,
            red_score=red_score,
            blue_score=blue_score,
            length=length,
        )

    def play_match(
        self,
        red_agent: Agent,
        blue_agent: Agent,
        n_games: int = 1,
        first_player: Optional[Player] = None,
    ) -> List[MatchResult]:
        """
        进行对局

        Args:
            red_agent: Red 方智能体
            blue_agent: Blue 方智能体
            n_games: 对局数
            first_player: 先手，None 表示轮流先手

        Returns:
            对局结果列表
        """
        results = []
        for game_idx in range(n_games):
            starter = first_player or (Player.BLUE if game_idx % 2 == 0 else Player.RED)
            results.append(self._play_single_game(red_agent, blue_agent, starter))
        return results


class ParallelArena(Arena):
    """
    并行对战竞技场

    使用多线程同时进行多局对战；每局使用独立的游戏实例
    """

    def __init__(self, game_fn: Callable[[], Game], n_workers: int = 4):
        super().__init__(game_fn)
        self.n_workers = n_workers

    def play_match(
        self,
        red_agent: Agent,
        blue_agent: Agent,
        n_games: int = 1,
        first_player: Optional[Player] = None,
    ) -> List[MatchResult]:
        """并行对局"""
        if n_games <= 1:
            return super().play_match(red_agent, blue_agent, n_games, first_player)

        results = []
        with ThreadPoolExecutor(max_workers=self.n_workers) as executor:
            futures = [
                executor.submit(
                    self._play_single_game,
                    red_agent,
                    blue_agent,
                    first_player or (Player.BLUE if i % 2 == 0 else Player.RED),
                )
                for i in range(n_games)
            ]
            for future in as_completed(futures):
                results.append(future.result())

        return results


def summarize(results: List[MatchResult]) -> Dict[str, Dict[str, float]]:
    """
    统计各智能体的胜率

    Returns:
        智能体名称 -> {"games", "wins", "ties", "win_rate", "tie_rate"}
    """
    standings: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(float))

    for result in results:
        for player, name in ((Player.RED, result.red_agent), (Player.BLUE, result.blue_agent)):
            stats = standings[name]
            stats["games"] += 1
            if result.is_tie:
                stats["ties"] += 1
            elif result.winner is player:
                stats["wins"] += 1

    for name, stats in standings.items():
        stats["win_rate"] = stats["wins"] / stats["games"]
        stats["tie_rate"] = stats["ties"] / stats["games"]

    logger.debug(f"Summarized {len(results)} games")
    return {name: dict(stats) for name, stats in standings.items()}

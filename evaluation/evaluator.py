"""
评估器

评估出牌策略的表现
"""
from typing import Callable, List, Optional
from dataclasses import dataclass, field
import logging

import numpy as np

from core.game import Game
from core.state import Move, Player
from search.config import SearchConfig
from search.recommend import recommend

logger = logging.getLogger(__name__)


@dataclass
class EvalResult:
    """评估结果"""
    win_rate: float
    tie_rate: float
    avg_score_diff: float
    games_played: int
    first_player_win_rate: float = 0.0
    second_player_win_rate: float = 0.0
    extra_stats: dict = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"EvalResult(win_rate={self.win_rate:.2%}, "
            f"tie_rate={self.tie_rate:.2%}, "
            f"games={self.games_played})"
        )


class Agent:
    """智能体基类"""

    def __init__(self, name: str = "agent"):
        self.name = name

    def act(self, game: Game, player: Player, legal_moves: List[Move]) -> Move:
        """选择动作"""
        raise NotImplementedError

    def reset(self):
        """重置状态"""
        pass


class RandomAgent(Agent):
    """随机智能体"""

    def __init__(self, name: str = "random", seed: Optional[int] = None):
        super().__init__(name)
        self.rng = np.random.default_rng(seed)

    def act(self, game: Game, player: Player, legal_moves: List[Move]) -> Move:
        return legal_moves[self.rng.integers(len(legal_moves))]


class GreedyAgent(Agent):
    """贪心智能体: 选择出牌后立即评估最高的动作"""

    def __init__(self, name: str = "greedy"):
        super().__init__(name)

    def act(self, game: Game, player: Player, legal_moves: List[Move]) -> Move:
        best_move = legal_moves[0]
        best_value = float('-inf')
        for move in legal_moves:
            game.apply_move(move)
            value = game.evaluate_current_position_for(player)
            game.undo_last_moves(1)
            if value > best_value:
                best_value = value
                best_move = move
        return best_move


class SearchAgent(Agent):
    """搜索智能体: alpha-beta + 蒙特卡洛"""

    def __init__(self, config: Optional[SearchConfig] = None, name: str = "search"):
        super().__init__(name)
        self.config = config or SearchConfig()

    def act(self, game: Game, player: Player, legal_moves: List[Move]) -> Move:
        result = recommend(game, player, self.config)
        if result.move is None:
            return legal_moves[0]
        return result.move


def play_game(
    game: Game,
    agents: dict,
    first_player: Player = Player.BLUE,
) -> int:
    """
    进行一局对局直到结束

    Args:
        game: 已设置好手牌的游戏 (会被修改)
        agents: Player -> Agent
        first_player: 先手

    Returns:
        对局步数
    """
    current = first_player
    length = 0
    while not game.win_state().finished:
        legal_moves = game.get_possible_moves(current)
        if not legal_moves:
            break
        move = agents[current].act(game, current, legal_moves)
        game.apply_move(move)
        current = current.other()
        length += 1
    return length


class Evaluator:
    """
    评估器

    让待评估智能体与对手交替先后手对战
    """

    def __init__(self, game_fn: Callable[[], Game]):
        self.game_fn = game_fn

    def evaluate(
        self,
        agent: Agent,
        opponent: Optional[Agent] = None,
        n_games: int = 100,
        verbose: bool = False,
    ) -> EvalResult:
        """
        评估智能体

        Args:
            agent: 待评估智能体 (始终为 Blue)
            opponent: 对手，默认随机智能体
            n_games: 游戏数量
            verbose: 是否输出详情

        Returns:
            评估结果
        """
        if opponent is None:
            opponent = RandomAgent("opponent")

        agents = {Player.BLUE: agent, Player.RED: opponent}
        wins = 0
        ties = 0
        score_diffs = []
        first_wins = 0
        first_games = 0
        second_wins = 0
        second_games = 0

        for game_idx in range(n_games):
            game = self.game_fn()
            agent.reset()
            opponent.reset()

            # 轮流先手
            first_player = Player.BLUE if game_idx % 2 == 0 else Player.RED
            play_game(game, agents, first_player)

            win_state = game.win_state()
            won = win_state.winner is Player.BLUE
            wins += int(won)
            ties += int(win_state.is_tie)

            red, blue = game.current_state.scores()
            score_diffs.append(blue - red)

            if first_player is Player.BLUE:
                first_games += 1
                first_wins += int(won)
            else:
                second_games += 1
                second_wins += int(won)

            if verbose and (game_idx + 1) % 10 == 0:
                logger.info(f"Game {game_idx + 1}/{n_games}, Win rate: {wins/(game_idx+1):.2%}")

        return EvalResult(
            win_rate=wins / n_games if n_games > 0 else 0.0,
            tie_rate=ties / n_games if n_games > 0 else 0.0,
            avg_score_diff=float(np.mean(score_diffs)) if score_diffs else 0.0,
            games_played=n_games,
            first_player_win_rate=first_wins / first_games if first_games > 0 else 0.0,
            second_player_win_rate=second_wins / second_games if second_games > 0 else 0.0,
        )

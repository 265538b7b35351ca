"""完整对局集成测试"""
import pytest
import numpy as np

from core.game import Game
from core.rules import Rules
from core.state import Player


def small_config(**kwargs):
    from search import SearchConfig

    return SearchConfig(depth=kwargs.pop("depth", 3), monte_carlo_iterations=50, seed=0, **kwargs)


class TestSearchVersusRandom:
    """搜索智能体与随机智能体完整对局"""

    @pytest.mark.parametrize("rules", [
        Rules(),
        Rules(reverse=True),
        Rules(fallen_ace=True, ascension=True),
        Rules(decension=True),
    ])
    def test_complete_games(self, rules):
        from evaluation import Arena, RandomAgent, SearchAgent, make_random_game

        rng = np.random.default_rng(17)
        arena = Arena(game_fn=lambda: make_random_game(rng, rules=rules))
        results = arena.play_match(
            RandomAgent("random", 3),
            SearchAgent(small_config(), "search"),
            n_games=2,
        )

        for r in results:
            assert r.length == 9
            assert r.red_score + r.blue_score == 10

    def test_search_beats_random(self):
        from evaluation import Evaluator, RandomAgent, SearchAgent, make_random_game

        rng = np.random.default_rng(2024)
        evaluator = Evaluator(game_fn=lambda: make_random_game(rng))
        result = evaluator.evaluate(
            SearchAgent(small_config(), "search"),
            RandomAgent("random", 5),
            n_games=6,
        )
        assert result.avg_score_diff > 0


class TestRecommendDuringGame:
    """对局中逐步推荐"""

    def test_human_with_order_rule(self):
        from evaluation import make_random_game
        from search import recommend

        rng = np.random.default_rng(99)
        template = make_random_game(rng)
        game = Game(human=Player.BLUE, rules=Rules(order=True))
        for player in Player:
            hand = template.current_state.get_hand(player)
            game.set_cards_in_hand(player, [slot for slot in hand if slot is not None])

        player = Player.RED
        while not game.win_state().finished:
            result = recommend(game, player, small_config())
            assert result.move is not None
            if player is Player.BLUE:
                # order 规则下人类玩家只能出第一张手牌
                hand = game.current_state.get_hand(Player.BLUE)
                first = min(idx for idx, slot in enumerate(hand) if slot is not None)
                assert result.move.card_idx == first
            depth = game.history_depth
            game.apply_move(result.move)
            assert game.history_depth == depth + 1
            player = player.other()

        assert sum(game.current_state.scores()) == 10

    def test_undo_after_recommendation(self):
        from evaluation import make_random_game
        from search import recommend

        game = make_random_game(np.random.default_rng(5))
        initial = game.current_state
        for player in (Player.RED, Player.BLUE):
            game.apply_move(recommend(game, player, small_config(depth=2)).move)
        game.undo_last_moves(2)
        assert game.current_state == initial

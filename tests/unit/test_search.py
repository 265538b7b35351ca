"""搜索层测试"""
import pytest
import numpy as np

from core.cards import Card
from core.game import Game
from core.rules import Rules
from core.state import GameState, Move, Player, EMPTY_HAND


def random_card(rng):
    return Card.new(*map(int, rng.integers(1, 11, size=4)))


def random_position(seed, n_moves):
    """双方各 5 张随机卡牌，随机走 n_moves 步后的局面与行动方"""
    rng = np.random.default_rng(seed)
    rules = Rules(
        reverse=bool(rng.integers(2)),
        fallen_ace=bool(rng.integers(2)),
        ascension=bool(rng.integers(2)),
    )
    game = Game(rules=rules)
    game.set_cards_in_hand(Player.RED, [(i, random_card(rng)) for i in range(1, 6)])
    game.set_cards_in_hand(Player.BLUE, [(i, random_card(rng)) for i in range(11, 16)])

    player = Player.RED
    for _ in range(n_moves):
        moves = game.get_possible_moves(player)
        game.apply_move(moves[rng.integers(len(moves))])
        player = player.other()
    return game.truncate_history_and_clone(), player


def last_cell_position(red_cards, red_owned=4):
    """
    只剩格子 8 为空，轮到 Red 出最后一张牌

    格子 0..7 中前 red_owned 个属于 Red，其余属于 Blue，都是 [5555]。
    red_cards 放在 Red 的手牌位置中 (可以多于实际手牌数，和 NPC 的可变卡一样)，
    双方剩余手牌数都是 1。
    """
    filler = Card.new(5, 5, 5, 5)
    board = tuple(
        (filler, Player.RED if pos < red_owned else Player.BLUE)
        for pos in range(8)
    ) + (None,)
    hand = list(EMPTY_HAND)
    for idx, card in enumerate(red_cards):
        hand[idx] = (idx + 1, card)
    state = GameState(
        board=board,
        hands=(tuple(hand), EMPTY_HAND),
        actual_hand_sizes=(1, 1),
    )
    return Game.from_state(state)


def brute_force(game, depth, player):
    """不剪枝的 negamax，返回 (每个动作的分数, 最优分数)"""
    moves = game.get_possible_moves(player)
    if depth == 0 or not moves:
        return {}, game.evaluate_current_position_for(player)

    values = {}
    for move in moves:
        game.apply_move(move)
        _, child = brute_force(game, depth - 1, player.other())
        game.undo_last_moves(1)
        values[move] = -child
    return values, max(values.values())


class TestWinState:
    """WinState 测试"""

    def test_constructors(self):
        from search import WinState

        assert not WinState.not_finished().finished
        assert WinState.tie().is_tie
        assert WinState.won_by(Player.RED).winner is Player.RED
        assert not WinState.won_by(Player.RED).is_tie
        assert not WinState.not_finished().is_tie


class TestSearchConfig:
    """SearchConfig 测试"""

    def test_defaults(self):
        from search import SearchConfig

        config = SearchConfig()
        assert config.depth == 10
        assert config.monte_carlo_iterations == 100_000
        assert config.tie_weight == 0.3
        assert config.executor == "thread"

    def test_from_dict_ignores_unknown(self):
        from search import SearchConfig

        config = SearchConfig.from_dict({"depth": 4, "monte_carlo_iterations": 50, "foo": 1})
        assert config.depth == 4
        assert config.monte_carlo_iterations == 50

    @pytest.mark.parametrize("kwargs", [
        {"depth": -1},
        {"depth": 0},
        {"monte_carlo_iterations": 0},
        {"executor": "gpu"},
    ])
    def test_invalid(self, kwargs):
        from search import SearchConfig

        with pytest.raises(ValueError):
            SearchConfig(**kwargs)


class TestAlphaBeta:
    """negamax + alpha-beta 测试"""

    @pytest.mark.parametrize("seed", range(6))
    @pytest.mark.parametrize("n_moves", [5, 6])
    def test_matches_brute_force(self, seed, n_moves):
        from search import alpha_beta

        game, player = random_position(seed, n_moves)
        values, expected = brute_force(game, 10, player)

        best_moves, best_value = alpha_beta(game, 10, float('-inf'), float('inf'), player)

        assert best_value == expected
        optimal = [move for move, value in values.items() if value == expected]
        for move in optimal:
            assert move in best_moves

    def test_restores_game(self):
        from search import alpha_beta

        game, player = random_position(42, 4)
        state = game.current_state
        alpha_beta(game, 10, float('-inf'), float('inf'), player)
        assert game.current_state == state
        assert game.history_depth == 1

    def test_depth_zero(self):
        from search import alpha_beta

        game, player = random_position(1, 3)
        moves, value = alpha_beta(game, 0, float('-inf'), float('inf'), player)
        assert moves == []
        assert value == game.evaluate_current_position_for(player)

    def test_no_moves(self):
        from search import alpha_beta

        game = last_cell_position([Card.new(5, 5, 5, 5)])
        game.apply_move(Move(Player.RED, 0, 8))
        moves, value = alpha_beta(game, 10, float('-inf'), float('inf'), Player.BLUE)
        assert moves == []
        assert value == game.evaluate_current_position_for(Player.BLUE)

    def test_collects_ties(self):
        from search import alpha_beta

        card = Card.new(5, 5, 5, 5)
        game = last_cell_position([card, card])
        moves, _ = alpha_beta(game, 10, float('-inf'), float('inf'), Player.RED)
        assert moves == [Move(Player.RED, 0, 8), Move(Player.RED, 1, 8)]

    def test_prefers_winning_move(self):
        from search import alpha_beta

        game = last_cell_position([Card.new(1, 1, 1, 1), Card.new(9, 9, 9, 9)])
        moves, value = alpha_beta(game, 10, float('-inf'), float('inf'), Player.RED)
        assert moves == [Move(Player.RED, 1, 8)]
        assert value == 100.0


class TestMonteCarlo:
    """蒙特卡洛模拟测试"""

    def test_ratio_bounds_and_restores(self):
        from search import monte_carlo

        game, player = random_position(3, 3)
        state = game.current_state
        ratio = monte_carlo(game, player.other(), 200, np.random.default_rng(0))
        assert 0.0 <= ratio <= 1.0
        assert game.current_state == state
        assert game.history_depth == 1

    def test_forced_win(self):
        from search import monte_carlo

        game = last_cell_position([Card.new(9, 9, 9, 9)])
        game.apply_move(Move(Player.RED, 0, 8))
        assert monte_carlo(game, Player.RED, 50, np.random.default_rng(0)) == 1.0
        assert monte_carlo(game, Player.BLUE, 50, np.random.default_rng(0)) == 0.0

    def test_forced_tie(self):
        from search import monte_carlo

        game = last_cell_position([Card.new(5, 5, 5, 5)])
        game.apply_move(Move(Player.RED, 0, 8))
        assert game.win_state().is_tie
        assert monte_carlo(game, Player.RED, 50) == pytest.approx(0.3)

    def test_tie_weight(self):
        from search import monte_carlo

        game = last_cell_position([Card.new(5, 5, 5, 5)])
        game.apply_move(Move(Player.RED, 0, 8))
        assert monte_carlo(game, Player.RED, 10, tie_weight=0.5) == pytest.approx(0.5)

    @pytest.mark.parametrize("iterations", [0, -5])
    def test_requires_iterations(self, iterations):
        from search import monte_carlo

        game, player = random_position(3, 3)
        state = game.current_state
        with pytest.raises(ValueError):
            monte_carlo(game, player.other(), iterations)
        assert game.current_state == state

    def test_simulate_once_restores(self):
        from search import simulate_game_once, SimulationResult

        game, player = random_position(5, 1)
        state = game.current_state
        result = simulate_game_once(game, player.other(), np.random.default_rng(1))
        assert isinstance(result, SimulationResult)
        assert game.current_state == state

    def test_reproducible_with_seed(self):
        from search import monte_carlo

        game, player = random_position(8, 2)
        first = monte_carlo(game, player.other(), 300, np.random.default_rng(123))
        second = monte_carlo(game, player.other(), 300, np.random.default_rng(123))
        assert first == second


class TestSelectByMonteCarlo:
    """并行候选选择测试"""

    def test_picks_stronger(self):
        from search import SearchConfig, select_by_monte_carlo

        game = last_cell_position([Card.new(1, 1, 1, 1), Card.new(9, 9, 9, 9)])
        candidates = game.get_possible_moves(Player.RED)
        config = SearchConfig(monte_carlo_iterations=20, seed=0)

        move, ratio = select_by_monte_carlo(game, Player.RED, candidates, config)
        assert move == Move(Player.RED, 1, 8)
        assert ratio == 1.0
        assert game.history_depth == 1

    def test_equal_ratio_keeps_first(self):
        from search import SearchConfig, select_by_monte_carlo

        card = Card.new(5, 5, 5, 5)
        game = last_cell_position([card, card, card])
        candidates = game.get_possible_moves(Player.RED)
        config = SearchConfig(monte_carlo_iterations=20, max_workers=2)

        move, _ = select_by_monte_carlo(game, Player.RED, candidates, config)
        assert move == candidates[0]

    def test_no_candidates(self):
        from search import select_by_monte_carlo

        move, ratio = select_by_monte_carlo(last_cell_position([]), Player.RED, [])
        assert move is None
        assert ratio == float('-inf')

    def test_seed_is_deterministic(self):
        from search import SearchConfig, select_by_monte_carlo

        game, player = random_position(11, 2)
        candidates = game.get_possible_moves(player)[:4]
        config = SearchConfig(monte_carlo_iterations=100, seed=7)

        first = select_by_monte_carlo(game, player, candidates, config)
        second = select_by_monte_carlo(game, player, candidates, config)
        assert first == second

    def test_process_executor(self):
        from search import SearchConfig, select_by_monte_carlo

        game = last_cell_position([Card.new(1, 1, 1, 1), Card.new(9, 9, 9, 9)])
        candidates = game.get_possible_moves(Player.RED)
        config = SearchConfig(monte_carlo_iterations=10, executor="process", max_workers=2, seed=0)

        move, ratio = select_by_monte_carlo(game, Player.RED, candidates, config)
        assert move == Move(Player.RED, 1, 8)
        assert ratio == 1.0

    def test_combine(self):
        from search import MoveSelection
        from search.monte_carlo import combine_move_selection, no_move_selection

        a = MoveSelection(move="a", win_ratio=0.5)
        b = MoveSelection(move="b", win_ratio=0.5)
        c = MoveSelection(move="c", win_ratio=0.6)
        assert combine_move_selection(no_move_selection(), a) is a
        assert combine_move_selection(a, no_move_selection()) is a
        assert combine_move_selection(a, b) is a
        assert combine_move_selection(a, c) is c


class TestRecommend:
    """出牌推荐测试"""

    def test_no_move(self):
        from search import SearchConfig, recommend

        game = last_cell_position([Card.new(5, 5, 5, 5)])
        game.apply_move(Move(Player.RED, 0, 8))
        result = recommend(game, Player.BLUE, SearchConfig(monte_carlo_iterations=10))
        assert result.move is None
        assert result.score == game.evaluate_current_position_for(Player.BLUE)
        assert result.win_ratio is None

    def test_single_best_move(self):
        from search import SearchConfig, recommend

        game = last_cell_position([Card.new(1, 1, 1, 1), Card.new(9, 9, 9, 9)])
        result = recommend(game, Player.RED, SearchConfig(monte_carlo_iterations=10))
        assert result.move == Move(Player.RED, 1, 8)
        assert result.score == 100.0
        assert result.win_ratio is None

    def test_depth_one_on_live_board(self):
        from search import SearchConfig, recommend

        game, player = random_position(11, 2)
        config = SearchConfig(depth=1, monte_carlo_iterations=5, seed=0, max_workers=1)
        result = recommend(game, player, config)
        assert result.move in game.get_possible_moves(player)

    def test_tied_moves_use_monte_carlo(self):
        from search import SearchConfig, recommend

        card = Card.new(5, 5, 5, 5)
        game = last_cell_position([card, card])
        result = recommend(game, Player.RED, SearchConfig(monte_carlo_iterations=10, seed=0))
        assert result.move == Move(Player.RED, 0, 8)
        assert result.win_ratio == pytest.approx(0.3)

    def test_does_not_modify_game(self):
        from search import SearchConfig, recommend

        game, player = random_position(9, 5)
        game.apply_move(game.get_possible_moves(player)[0])
        state = game.current_state
        recommend(game, player.other(), SearchConfig(monte_carlo_iterations=20, seed=1))
        assert game.current_state == state
        assert game.history_depth == 2

    def test_logs_progress(self, caplog):
        import logging
        from search import SearchConfig, recommend

        card = Card.new(5, 5, 5, 5)
        game = last_cell_position([card, card])
        with caplog.at_level(logging.INFO, logger="search.recommend"):
            recommend(game, Player.RED, SearchConfig(monte_carlo_iterations=10))
        assert "Found 2 moves with best score" in caplog.text
        assert "Entering Monte Carlo simulation with 2 moves" in caplog.text

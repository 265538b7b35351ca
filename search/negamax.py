"""
Negamax + alpha-beta 剪枝

在同一个游戏实例上原地回溯: 出牌 -> 递归 (窗口取反、换边) -> 撤销一步。
同分的最优动作全部保留，由蒙特卡洛阶段再做区分。
"""
from typing import Any, List, Tuple

from .base import SearchableGame


def alpha_beta(
    game: SearchableGame,
    depth: int,
    alpha: float,
    beta: float,
    player: Any,
) -> Tuple[List[Any], float]:
    """
    深度受限的 negamax 搜索

    Args:
        game: 游戏 (搜索过程中被原地修改，返回时恢复原状)
        depth: 剩余深度
        alpha: 窗口下界
        beta: 窗口上界
        player: 当前行动方 (评估视角)

    Returns:
        (所有并列最优动作, 最优分数)；深度为 0 或无合法动作时返回 ([], 静态评估)
    """
    if depth == 0:
        return [], game.evaluate_current_position_for(player)

    possible_moves = game.get_possible_moves(player)
    if not possible_moves:
        return [], game.evaluate_current_position_for(player)

    best_value = float('-inf')
    best_moves: List[Any] = []

    for move in possible_moves:
        game.apply_move(move)
        _, child_value = alpha_beta(game, depth - 1, -beta, -alpha, player.other())
        game.undo_last_moves(1)
        move_value = -child_value

        if move_value > best_value:
            best_value = move_value
            best_moves = [move]
        elif move_value == best_value:
            best_moves.append(move)

        alpha = max(alpha, best_value)
        if alpha >= beta:
            break

    return best_moves, best_value

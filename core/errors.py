"""
异常定义

调用方违反约定 (非法出牌、撤销步数超过历史) 属于编程错误；
"没有合法出牌" 不是异常，用空列表表示。
"""


class TriadError(Exception):
    """所有异常的基类"""


class UnavailableMoveError(TriadError, ValueError):
    """出牌引用了空的手牌位置或已被占用的格子"""


class InsufficientHistoryError(TriadError, IndexError):
    """撤销的步数超过了历史深度"""

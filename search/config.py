"""
搜索配置

定义 alpha-beta 深度与蒙特卡洛模拟相关的参数
"""
from dataclasses import dataclass
from typing import Optional


# alpha-beta 搜索深度
DEFAULT_DEPTH = 10

# 每个候选动作的随机对局次数
MONTE_CARLO_ITERATIONS = 100_000

# 平局计为 0.3 胜
TIE_WEIGHT = 0.3

EXECUTORS = ("thread", "process")


@dataclass
class SearchConfig:
    """
    搜索配置

    Attributes:
        depth: alpha-beta 搜索深度
        monte_carlo_iterations: 每个并列最优动作的随机对局次数
        tie_weight: 平局在胜率中的权重
        max_workers: 并行工作者数量，None 表示每个候选动作一个
        executor: "thread" 使用线程池，"process" 使用进程池
        seed: 随机种子，None 表示不固定
    """
    depth: int = DEFAULT_DEPTH
    monte_carlo_iterations: int = MONTE_CARLO_ITERATIONS
    tie_weight: float = TIE_WEIGHT
    max_workers: Optional[int] = None
    executor: str = "thread"
    seed: Optional[int] = None

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"depth must be >= 1, got {self.depth}")
        if self.monte_carlo_iterations <= 0:
            raise ValueError(
                f"monte_carlo_iterations must be > 0, got {self.monte_carlo_iterations}"
            )
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}")

    @classmethod
    def from_dict(cls, d: dict) -> 'SearchConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

"""
Catalog Layer - 外部数据 (卡牌目录、NPC、已保存卡组)

Modules:
    loader: CSV 数据加载
    decks: 卡组存储
"""
from .loader import (
    CardCatalog,
    NpcDefinition,
    LoadError,
    UnknownSuitError,
    MissingCardDataError,
    MissingNamesError,
    load_all_data,
)

from .decks import SavedDecks, SavedDeckError, default_decks_path

__all__ = [
    # loader
    "CardCatalog",
    "NpcDefinition",
    "LoadError",
    "UnknownSuitError",
    "MissingCardDataError",
    "MissingNamesError",
    "load_all_data",
    # decks
    "SavedDecks",
    "SavedDeckError",
    "default_decks_path",
]

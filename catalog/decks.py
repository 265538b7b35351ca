"""
已保存的卡组

JSON 文件格式:
    {"decks": {"<name>": {"created": "<ISO 8601>", "cards": [id, id, id, id, id]}}}

卡组顺序有意义 (order 规则下按此顺序出牌)。每次修改都会立即写回文件。
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union
import json
import logging

from core.errors import TriadError
from core.state import DECK_SIZE

logger = logging.getLogger(__name__)

DECKS_FILE = "decks.json"


class SavedDeckError(TriadError):
    """读写卡组文件失败"""


def default_decks_path() -> Path:
    return Path.home() / ".config" / "triad-solver" / DECKS_FILE


class SavedDecks:
    """
    卡组存储

    Args:
        path: JSON 文件路径，不存在时创建空文件
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else default_decks_path()
        self._decks: Dict[str, Dict] = {}

        if self.path.exists():
            try:
                with open(self.path, encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise SavedDeckError(f"Could not parse config file {self.path}") from e
            self._decks = data.get("decks", {})
        else:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise SavedDeckError(f"Could not create {self.path.parent}") from e
            self.save()

    def add_deck(self, name: str, cards: Sequence[int]) -> None:
        if len(cards) != DECK_SIZE:
            raise ValueError(f"Deck must have {DECK_SIZE} cards, got {len(cards)}")

        self._decks[name] = {
            "created": datetime.now(timezone.utc).isoformat(),
            "cards": [int(c) for c in cards],
        }
        self.save()
        logger.info(f"Saved deck {name}")

    def remove_deck(self, name: str) -> None:
        self._decks.pop(name, None)
        self.save()

    def get_deck(self, name: str) -> Tuple[int, ...]:
        """卡组的 5 个卡牌 ID，未知名称抛出 KeyError"""
        return tuple(self._decks[name]["cards"])

    def get_deck_names(self) -> List[str]:
        return sorted(self._decks)

    def get_deck_count(self) -> int:
        return len(self._decks)

    def save(self) -> None:
        try:
            with open(self.path, "w", encoding='utf-8') as f:
                json.dump({"decks": self._decks}, f, indent=2)
        except OSError as e:
            raise SavedDeckError(f"Could not write config file {self.path}") from e

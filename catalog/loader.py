"""
卡牌与 NPC 数据加载

数据来自游戏导出的 CSV 表:
- TripleTriadCard.csv: 卡牌名称
- TripleTriadCardResident.csv: 卡牌点数与种族
- TripleTriad.csv: NPC 的固定卡、可变卡与规则
- ENpcBase.csv: NPC ID 映射
- ENpcResident.csv: NPC 名称

每个文件第一行丢弃，第二行为表头，之后的类型行与占位行也跳过。
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union
import csv
import logging

from core.cards import Card, CSV_SUIT_CODES
from core.errors import TriadError
from core.rules import Rules

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

CARD_NAMES_FILE = "TripleTriadCard.csv"
CARD_RESIDENT_FILE = "TripleTriadCardResident.csv"
NPC_DATA_FILE = "TripleTriad.csv"
NPC_BASE_FILE = "ENpcBase.csv"
NPC_RESIDENT_FILE = "ENpcResident.csv"

# 表头之后需要跳过的行数 (类型行 + 占位行)
SKIPPED_ROWS = 2

# ENpcBase 中数据列的数量
NPC_BASE_DATA_COLUMNS = 32


class LoadError(TriadError):
    """数据加载失败"""


class UnknownSuitError(LoadError):
    """未知的种族编码"""


class MissingCardDataError(LoadError):
    """找不到卡牌数据"""


class MissingNamesError(LoadError):
    """部分卡牌缺少名称"""


@dataclass(frozen=True)
class NpcDefinition:
    """
    NPC 定义

    Attributes:
        fixed_cards: 5 张固定卡的 ID (0 表示空)
        variable_cards: 5 张可变卡的 ID (0 表示空)
        rules: 对局规则
    """
    fixed_cards: Tuple[int, ...]
    variable_cards: Tuple[int, ...]
    rules: Rules = field(default_factory=Rules)


@dataclass
class CardCatalog:
    """
    卡牌目录

    Attributes:
        cards_by_id: 卡牌 ID -> 卡牌
        card_names: 卡牌 ID -> 名称
        npcs_by_name: NPC 名称 -> NPC 定义
    """
    cards_by_id: Dict[int, Card] = field(default_factory=dict)
    card_names: Dict[int, str] = field(default_factory=dict)
    npcs_by_name: Dict[str, NpcDefinition] = field(default_factory=dict)

    @property
    def cards_by_name(self) -> Dict[str, Card]:
        return {name: self.cards_by_id[card_id] for card_id, name in self.card_names.items()}

    def get_card(self, card_id: int) -> Optional[Card]:
        return self.cards_by_id.get(card_id)

    def require_card(self, card_id: int) -> Card:
        card = self.cards_by_id.get(card_id)
        if card is None:
            raise MissingCardDataError(f"No data for card with ID {card_id}")
        return card

    def get_npc(self, name: str) -> Optional[NpcDefinition]:
        return self.npcs_by_name.get(name)

    def npc_names(self) -> List[str]:
        return sorted(self.npcs_by_name)

    def cards_sorted_by_id(self) -> List[Tuple[int, str]]:
        """(卡牌 ID, 名称)，按 ID 排序"""
        return sorted(self.card_names.items())


def _read_records(path: PathLike) -> Iterator[List[str]]:
    """读取 CSV 数据行 (跳过首行、表头与类型/占位行)"""
    try:
        with open(path, newline='', encoding='utf-8-sig') as f:
            f.readline()
            reader = csv.reader(f)
            next(reader, None)
            for i, record in enumerate(reader):
                if i < SKIPPED_ROWS:
                    continue
                yield record
    except OSError as e:
        raise LoadError(f"Could not read {path}") from e


def _parse_int(value: str, path: PathLike) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise LoadError(f"Couldn't parse integer {value!r} in {path}") from e


def load_card_names(path: PathLike) -> Dict[int, str]:
    """卡牌 ID -> 名称"""
    result = {}
    for record in _read_records(path):
        result[_parse_int(record[0], path)] = record[1]
    return result


def load_cards_resident(path: PathLike) -> Dict[int, Card]:
    """卡牌 ID -> 卡牌 (点数与种族)"""
    result = {}
    for record in _read_records(path):
        card_id = _parse_int(record[0], path)
        n, s, w, e = (_parse_int(v, path) for v in record[2:6])
        suit_code = record[7]
        if suit_code not in CSV_SUIT_CODES:
            raise UnknownSuitError(f"Found card with unknown suit {suit_code}")
        result[card_id] = Card.new(n, s, w, e, CSV_SUIT_CODES[suit_code])
    return result


def load_tt_npc_data(path: PathLike) -> Dict[int, NpcDefinition]:
    """NPC ID -> NPC 定义"""
    result = {}
    for record in _read_records(path):
        npc_id = _parse_int(record[0], path)
        fixed_cards = tuple(_parse_int(v, path) for v in record[1:6])
        variable_cards = tuple(_parse_int(v, path) for v in record[6:11])
        rules = Rules.from_codes(_parse_int(v, path) for v in record[11:13])
        result[npc_id] = NpcDefinition(
            fixed_cards=fixed_cards,
            variable_cards=variable_cards,
            rules=rules,
        )
    return result


def load_npc_id_map(path: PathLike, npc_ids: Set[int]) -> Dict[int, int]:
    """TripleTriad NPC ID -> ENpcBase ID"""
    result = {}
    for record in _read_records(path):
        top_id = _parse_int(record[0], path)
        for i in range(NPC_BASE_DATA_COLUMNS):
            data_id = _parse_int(record[i + 3], path)
            if data_id == 0:
                break
            if data_id in npc_ids:
                result[data_id] = top_id
                break
    return result


def load_npc_names(path: PathLike, ids: Set[int]) -> Dict[int, str]:
    """ENpcBase ID -> NPC 名称 (只保留 ids 中的 NPC)"""
    result = {}
    for record in _read_records(path):
        if not record[1]:
            continue
        npc_id = _parse_int(record[0], path)
        if npc_id in ids:
            result[npc_id] = record[1]
    return result


def load_all_data(base_path: PathLike) -> CardCatalog:
    """
    从目录加载全部数据

    Args:
        base_path: CSV 文件所在目录

    Returns:
        卡牌目录
    """
    base_path = Path(base_path)

    card_names = load_card_names(base_path / CARD_NAMES_FILE)
    cards_by_id = load_cards_resident(base_path / CARD_RESIDENT_FILE)

    for card_id in card_names:
        if card_id not in cards_by_id:
            raise MissingCardDataError(f"No data for card with ID {card_id}")
    ids_by_name = {name: card_id for card_id, name in card_names.items()}
    if len(ids_by_name) != len(cards_by_id):
        raise MissingNamesError("Missing name data for card(s)")

    npcs_by_id = load_tt_npc_data(base_path / NPC_DATA_FILE)
    npc_id_map = load_npc_id_map(base_path / NPC_BASE_FILE, set(npcs_by_id))
    npc_names = load_npc_names(base_path / NPC_RESIDENT_FILE, set(npc_id_map.values()))

    npcs_by_name = {}
    for npc_id, npc in npcs_by_id.items():
        mapped_id = npc_id_map.get(npc_id)
        if mapped_id is None:
            logger.warning(f"Missing ID mapping for NPC {npc_id}")
            continue
        name = npc_names.get(mapped_id)
        if name is None:
            logger.warning(f"Missing name for NPC {npc_id} (mapped: {mapped_id})")
            continue
        npcs_by_name[name] = npc

    logger.info(f"Loaded {len(cards_by_id)} cards and {len(npcs_by_name)} NPCs")
    return CardCatalog(
        cards_by_id=cards_by_id,
        card_names=card_names,
        npcs_by_name=npcs_by_name,
    )

#!/usr/bin/env python3
"""
卡组管理脚本

Usage:
    python scripts/decks.py list
    python scripts/decks.py show "My Deck" --data-dir data/
    python scripts/decks.py add "My Deck" 12 45 3 77 101
    python scripts/decks.py remove "My Deck"
"""
import argparse
import logging
import sys
from pathlib import Path

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from core.cards import Direction, EMPTY_MODIFIERS
from core.state import DECK_SIZE
from catalog import SavedDecks, load_all_data

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Manage saved decks")
    parser.add_argument("--decks", type=str, default=None, help="Saved decks JSON path")
    parser.add_argument("--data-dir", type=str, default="data", help="Directory with CSV data")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List saved decks")

    show = sub.add_parser("show", help="Show the cards of a deck")
    show.add_argument("name")

    add = sub.add_parser("add", help="Register a deck (order matters!)")
    add.add_argument("name")
    add.add_argument("cards", type=int, nargs=DECK_SIZE, help="Card IDs in play order")

    remove = sub.add_parser("remove", help="Delete a deck")
    remove.add_argument("name")

    return parser.parse_args()


def show_deck(args, saved_decks: SavedDecks):
    catalog = load_all_data(args.data_dir)
    for card_id in saved_decks.get_deck(args.name):
        card = catalog.require_card(card_id)
        ranks = " ".join(
            card.get_modified_value_display(EMPTY_MODIFIERS, d) for d in Direction
        )
        print(f"  {catalog.card_names.get(card_id, card_id):<30} N/S/W/E: {ranks} {card.suit_str}")


def main():
    args = parse_args()
    saved_decks = SavedDecks(args.decks)

    if args.command == "list":
        print(f"You have {saved_decks.get_deck_count()} registered decks.")
        for name in saved_decks.get_deck_names():
            print(f"  {name}")
    elif args.command == "show":
        show_deck(args, saved_decks)
    elif args.command == "add":
        saved_decks.add_deck(args.name, args.cards)
        print("Deck saved!")
    elif args.command == "remove":
        saved_decks.remove_deck(args.name)
        print(f"{args.name} deleted.")


if __name__ == "__main__":
    main()

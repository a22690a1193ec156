"""
Chat command grammar

    masuk <amount>
    keluar <amount> [note ...]
    /start

Text is lower-cased and trimmed before matching. Amounts are plain digits
with an optional decimal part: no thousands separators, signs or currency
symbols.
"""

import re
from dataclasses import dataclass
from typing import List, Literal, Optional

from schemas import EXPENSE, INCOME, NewRecord

INCOME_NOTE = "Pemasukan dari Telegram"
EXPENSE_NOTE = "Pengeluaran"

AMOUNT_PATTERN = re.compile(r"(masuk|keluar)\s+(\d+(?:\.\d+)?)")


class CommandFormatError(ValueError):
    """An entry command whose amount is missing, malformed or not positive."""

    def __init__(self, keyword: str):
        super().__init__(f"invalid amount for '{keyword}'")
        self.keyword = keyword


@dataclass(frozen=True)
class Tokens:
    keyword: str
    amount: Optional[float]
    remainder: List[str]


@dataclass(frozen=True)
class Command:
    action: Literal["record", "start", "unknown"]
    record: Optional[NewRecord] = None


def normalize(text: Optional[str]) -> str:
    return (text or "").lower().strip()


def tokenize(text: str) -> Tokens:
    """Split normalized text into keyword, amount and the words after the amount."""
    words = text.split()
    keyword = words[0] if words else ""
    match = AMOUNT_PATTERN.search(text)
    amount = float(match.group(2)) if match else None
    return Tokens(keyword=keyword, amount=amount, remainder=words[2:])


def build_record(tokens: Tokens, chat_id: Optional[str] = None) -> NewRecord:
    kind = INCOME if tokens.keyword.startswith(INCOME) else EXPENSE
    if tokens.amount is None or tokens.amount <= 0:
        raise CommandFormatError(kind)

    if kind == INCOME:
        note = INCOME_NOTE
    else:
        note = " ".join(tokens.remainder) or EXPENSE_NOTE
    return NewRecord(type=kind, amount=tokens.amount, note=note, chat_id=chat_id)


def parse_command(text: Optional[str], chat_id: Optional[str] = None) -> Command:
    """Map a chat message to a Command. Raises CommandFormatError for bad entries."""
    text = normalize(text)
    if text.startswith(INCOME) or text.startswith(EXPENSE):
        return Command("record", build_record(tokenize(text), chat_id))
    if text == "/start":
        return Command("start")
    return Command("unknown")

"""
Schemas for the finance tracker

Records live in the MongoDB collection "transaction". Response models mirror
the JSON returned by the HTTP API.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

INCOME = "masuk"
EXPENSE = "keluar"

RecordType = Literal["masuk", "keluar"]


class NewRecord(BaseModel):
    type: RecordType = Field(..., description="masuk (income) or keluar (expense)")
    amount: float = Field(..., gt=0, description="Positive Rupiah amount")
    note: str = Field(..., description="Free text note")
    chat_id: Optional[str] = Field(None, description="Telegram chat the record came from")


class FinancialRecord(NewRecord):
    id: int = Field(..., description="Monotonic record id")
    date: datetime = Field(..., description="When the record was created (UTC)")


class Summary(BaseModel):
    totalIncome: float = 0
    totalExpense: float = 0
    balance: float = 0


class DailyPoint(BaseModel):
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")
    income: float = 0
    expense: float = 0


class Dashboard(BaseModel):
    summary: Summary
    recentTransactions: List[FinancialRecord]
    chartData: List[DailyPoint]

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import List
from app.schemas.ledger import ExpenseRecord, Money, PaymentRecord
from app.schemas.settlements import Settlement

class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    member_emails: List[EmailStr] = Field(default_factory=list)

class GroupOut(BaseModel):
    id: int
    name: str
    created_by: str
    created_at: datetime | None = None
    member_emails: List[str]

class GroupView(BaseModel):
    """Everything the group page shows, seen from one member."""
    member_emails: List[str]
    expenses: List[ExpenseRecord]
    payments: List[PaymentRecord]
    balances: dict[str, Money]
    settlements: List[Settlement]
    acting_member: str
    my_balance: Money
    i_owe: List[Settlement]
    owed_to_me: List[Settlement]
    is_settled: bool

class GroupDetailOut(GroupView):
    id: int
    name: str
    created_by: str

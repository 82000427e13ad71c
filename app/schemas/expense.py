from pydantic import BaseModel, EmailStr
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from app.schemas.ledger import Money

class SplitOut(BaseModel):
    member: str
    amount: Money

class ExpenseCreate(BaseModel):
    description: str
    amount: Decimal
    paid_by: Optional[EmailStr] = None

class ExpenseOut(BaseModel):
    id: int
    group_id: int
    description: str
    amount: Money
    paid_by: str
    created_at: datetime | None = None
    splits: List[SplitOut]
    my_share: Money = 0

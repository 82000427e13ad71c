from pydantic import BaseModel, EmailStr
from datetime import datetime
from decimal import Decimal
from typing import Optional
from app.schemas.ledger import Money

class Settlement(BaseModel):
    from_member: str
    to_member: str
    amount: Money

class PaymentCreate(BaseModel):
    to_member: EmailStr
    amount: Decimal
    expense_description: Optional[str] = None

class PaymentOut(BaseModel):
    id: int
    group_id: int
    from_member: str
    to_member: str
    amount: Money
    expense_description: Optional[str] = None
    created_at: datetime | None = None
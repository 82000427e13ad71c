from pydantic import BaseModel
from typing import List
from app.schemas.ledger import Money
from app.schemas.settlements import Settlement

class MemberBalance(BaseModel):
    member: str
    amount: Money
    status: str
    label: str

class GroupBalanceOut(BaseModel):
    net: dict[str, Money]
    balances: List[MemberBalance]
    settlements: List[Settlement]
    is_settled: bool

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from app.core.utils import coerce_cents, from_cents, to_cents

# Integer minor units internally, "12.50" in JSON responses
Money = Annotated[int, PlainSerializer(lambda c: str(from_cents(c)), return_type=str, when_used="json")]


def _cents_map(value, convert) -> dict:
    if not isinstance(value, dict):
        return {}
    return {str(k): convert(v) for k, v in value.items()}


class ExpenseRecord(BaseModel):
    description: str = ""
    amount: Money = 0
    paid_by: Optional[str] = None
    split: dict[str, Money] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value):
        return coerce_cents(value)

    @field_validator("split", mode="before")
    @classmethod
    def _split(cls, value):
        return _cents_map(value, coerce_cents)


class PaymentRecord(BaseModel):
    from_member: Optional[str] = None
    to_member: Optional[str] = None
    amount: Money = 0
    expense_description: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value):
        return coerce_cents(value)


class GroupLedger(BaseModel):
    member_emails: List[str] = Field(default_factory=list)
    expenses: List[ExpenseRecord] = Field(default_factory=list)
    # absent on ledgers written before payments were tracked
    payments: List[PaymentRecord] = Field(default_factory=list)

    @field_validator("member_emails", "expenses", "payments", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return [] if value is None else value


def _parse_timestamp(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class ExpenseDocument(BaseModel):
    """Expense as stored in a group document: camelCase keys, major-unit amounts."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: str = ""
    amount: int = 0
    paid_by: Optional[str] = Field(default=None, alias="paidBy")
    split: dict[str, int] = Field(default_factory=dict)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value):
        return "" if value is None else str(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value):
        return to_cents(value)

    @field_validator("split", mode="before")
    @classmethod
    def _split(cls, value):
        return _cents_map(value, to_cents)

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, value):
        return _parse_timestamp(value)

    def to_record(self) -> ExpenseRecord:
        return ExpenseRecord(
            description=self.description,
            amount=self.amount,
            paid_by=self.paid_by,
            split=self.split,
            created_at=self.created_at,
        )


class PaymentDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_member: Optional[str] = Field(default=None, alias="from")
    to_member: Optional[str] = Field(default=None, alias="to")
    amount: int = 0
    expense_description: Optional[str] = Field(default=None, alias="expenseDescription")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value):
        return to_cents(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, value):
        return _parse_timestamp(value)

    def to_record(self) -> PaymentRecord:
        return PaymentRecord(
            from_member=self.from_member,
            to_member=self.to_member,
            amount=self.amount,
            expense_description=self.expense_description,
            created_at=self.created_at,
        )


class GroupDocument(BaseModel):
    """
    A whole group in document form:

        {id, name, memberEmails, createdBy, expenses: [...], payments?: [...]}

    Malformed numbers degrade to 0 and a missing payments list is empty.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: str = ""
    member_emails: List[str] = Field(default_factory=list, alias="memberEmails")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    expenses: List[ExpenseDocument] = Field(default_factory=list)
    payments: List[PaymentDocument] = Field(default_factory=list)

    @field_validator("member_emails", "expenses", "payments", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return [] if value is None else value

    def to_ledger(self) -> GroupLedger:
        return GroupLedger(
            member_emails=self.member_emails,
            expenses=[e.to_record() for e in self.expenses],
            payments=[p.to_record() for p in self.payments],
        )

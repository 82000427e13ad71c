import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from app.core.exceptions import LedgerValidationError
from app.core.utils import is_storable_amount, to_cents
from app.models.expense import Expense
from app.models.expense_split import ExpenseSplit
from app.schemas.expense import ExpenseCreate, ExpenseOut, SplitOut
from app.schemas.ledger import ExpenseRecord
from app.services.group_services import get_active_group, ensure_group_member, get_member_emails

logger = logging.getLogger("splitledger.expenses")


def split_equally(amount_cents: int, members: Sequence[str]) -> Dict[str, int]:
    """
    Fair split in whole cents. The first `amount_cents % n` members pay one
    cent more, so the shares always add up to exactly `amount_cents`.

    Expects validated input: a positive amount and at least one member.
    """
    n = len(members)
    base, remainder = divmod(amount_cents, n)

    return {
        email: base + (1 if idx < remainder else 0)
        for idx, email in enumerate(members)
    }


def validate_expense_input(description, amount, paid_by, members: Sequence[str]) -> int:
    """Checks a new expense and returns its amount in cents."""
    if not isinstance(description, str) or not description.strip():
        raise LedgerValidationError("Enter a description.", field="description")

    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise LedgerValidationError("Enter a valid positive amount.", field="amount")

    if isinstance(amount, bool) or not value.is_finite() or value <= 0:
        raise LedgerValidationError("Enter a valid positive amount.", field="amount")

    if not is_storable_amount(value):
        raise LedgerValidationError("Amount is too large.", field="amount")

    amount_cents = to_cents(value)
    if amount_cents <= 0:
        raise LedgerValidationError("Amount is smaller than the currency's minor unit.", field="amount")

    if not paid_by or paid_by not in members:
        raise LedgerValidationError("Select a valid payer.", field="paid_by")

    return amount_cents


def default_payer(members: Sequence[str], acting_member: Optional[str]) -> Optional[str]:
    # the acting member pays by default, otherwise the first member
    if acting_member and acting_member in members:
        return acting_member
    return members[0] if members else None


def build_expense(
    description: str,
    amount,
    paid_by: str,
    members: Sequence[str],
    created_at: Optional[datetime] = None,
) -> ExpenseRecord:
    amount_cents = validate_expense_input(description, amount, paid_by, members)

    return ExpenseRecord(
        description=description.strip(),
        amount=amount_cents,
        paid_by=paid_by,
        split=split_equally(amount_cents, members),
        created_at=created_at or datetime.now(timezone.utc),
    )


def expense_to_record(expense: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        description=expense.description,
        amount=expense.amount_cents,
        paid_by=expense.paid_by,
        split={s.member_email: s.amount_cents for s in expense.splits},
        created_at=expense.created_at,
    )


def expense_to_out(expense: Expense, acting_member: str) -> ExpenseOut:
    splits = [SplitOut(member=s.member_email, amount=s.amount_cents) for s in expense.splits]

    return ExpenseOut(
        id=expense.id,
        group_id=expense.group_id,
        description=expense.description,
        amount=expense.amount_cents,
        paid_by=expense.paid_by,
        created_at=expense.created_at,
        splits=splits,
        my_share=sum(s.amount for s in splits if s.member == acting_member),
    )


async def fetch_group_expenses(db: AsyncSession, group_id: int) -> List[Expense]:
    q = (
        select(Expense)
        .options(selectinload(Expense.splits))
        .where(Expense.group_id == group_id)
        .order_by(Expense.id)
    )
    res = await db.execute(q)
    return list(res.scalars().all())


async def create_expense(db: AsyncSession, data: ExpenseCreate, group_id: int, acting_member: str):
    group = await get_active_group(db, group_id)
    members = await get_member_emails(db, group.id)
    ensure_group_member(members, acting_member)

    paid_by = data.paid_by or default_payer(members, acting_member)
    record = build_expense(data.description, data.amount, paid_by, members)

    expense = Expense(
        group_id=group.id,
        description=record.description,
        amount_cents=record.amount,
        paid_by=record.paid_by,
        created_at=record.created_at,
    )

    db.add(expense)
    await db.flush()  # generates expense.id

    db.add_all([
        ExpenseSplit(
            expense_id=expense.id,
            member_email=email,
            amount_cents=share
        )
        for email, share in record.split.items()
    ])

    await db.commit()

    logger.info(
        "Expense %s added to group %s: %s cents paid by %s",
        expense.id, group.id, record.amount, record.paid_by
    )

    q = (
        select(Expense)
        .options(selectinload(Expense.splits))
        .where(Expense.id == expense.id)
        .execution_options(populate_existing=True)
    )
    expense = (await db.execute(q)).scalar_one()

    return expense_to_out(expense, acting_member)


async def get_expenses_by_group(db: AsyncSession, group_id: int, acting_member: str):
    group = await get_active_group(db, group_id)
    members = await get_member_emails(db, group.id)
    ensure_group_member(members, acting_member)

    expenses = await fetch_group_expenses(db, group.id)
    return [expense_to_out(e, acting_member) for e in expenses]

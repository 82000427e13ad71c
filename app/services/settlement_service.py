import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.core.exceptions import LedgerValidationError
from app.core.utils import is_storable_amount, to_cents
from app.models.payment import Payment
from app.schemas.balances import GroupBalanceOut, MemberBalance
from app.schemas.group import GroupDetailOut
from app.schemas.ledger import GroupLedger, PaymentRecord
from app.schemas.settlements import PaymentCreate, PaymentOut
from app.services.balance_service import balance_label, balance_status, build_group_view, compute_balances, compute_settlements, is_settled
from app.services.expense_services import expense_to_record, fetch_group_expenses
from app.services.group_services import ensure_group_member, get_active_group, get_member_emails

logger = logging.getLogger("splitledger.settlements")


def build_payment(
    from_member: str,
    to_member: str,
    amount,
    members: Sequence[str],
    expense_description: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> PaymentRecord:
    if from_member not in members:
        raise LedgerValidationError("Payer is not a member of this group", field="from_member")

    if to_member not in members:
        raise LedgerValidationError("Receiver is not a member of this group", field="to_member")

    if from_member == to_member:
        raise LedgerValidationError("You cannot pay yourself", field="to_member")

    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise LedgerValidationError("Enter a valid positive amount.", field="amount")

    if not value.is_finite() or value <= 0:
        raise LedgerValidationError("Enter a valid positive amount.", field="amount")

    if not is_storable_amount(value):
        raise LedgerValidationError("Amount is too large.", field="amount")

    if to_cents(value) <= 0:
        raise LedgerValidationError("Enter a valid positive amount.", field="amount")

    if expense_description is not None:
        expense_description = expense_description.strip() or None

    return PaymentRecord(
        from_member=from_member,
        to_member=to_member,
        amount=to_cents(value),
        expense_description=expense_description,
        created_at=created_at or datetime.now(timezone.utc),
    )


def payment_to_record(payment: Payment) -> PaymentRecord:
    return PaymentRecord(
        from_member=payment.from_member,
        to_member=payment.to_member,
        amount=payment.amount_cents,
        expense_description=payment.expense_description,
        created_at=payment.created_at,
    )


def payment_to_out(payment: Payment) -> PaymentOut:
    return PaymentOut(
        id=payment.id,
        group_id=payment.group_id,
        from_member=payment.from_member,
        to_member=payment.to_member,
        amount=payment.amount_cents,
        expense_description=payment.expense_description,
        created_at=payment.created_at,
    )


async def load_ledger(db: AsyncSession, group_id: int) -> GroupLedger:
    """The group's members, expenses and payments in ledger (insertion) order."""
    members = await get_member_emails(db, group_id)
    expenses = await fetch_group_expenses(db, group_id)

    q = select(Payment).where(Payment.group_id == group_id).order_by(Payment.id)
    payments = (await db.execute(q)).scalars().all()

    return GroupLedger(
        member_emails=members,
        expenses=[expense_to_record(e) for e in expenses],
        payments=[payment_to_record(p) for p in payments],
    )


async def compute_group_settlements(db: AsyncSession, group_id: int, acting_member: str) -> GroupBalanceOut:
    group = await get_active_group(db, group_id)
    ledger = await load_ledger(db, group.id)
    ensure_group_member(ledger.member_emails, acting_member)

    balances = compute_balances(ledger.member_emails, ledger.expenses, ledger.payments)

    return GroupBalanceOut(
        net=balances,
        balances=[
            MemberBalance(member=m, amount=amt, status=balance_status(amt), label=balance_label(amt))
            for m, amt in balances.items()
        ],
        settlements=compute_settlements(balances),
        is_settled=is_settled(balances),
    )


async def get_group_detail(db: AsyncSession, group_id: int, acting_member: str) -> GroupDetailOut:
    group = await get_active_group(db, group_id)
    ledger = await load_ledger(db, group.id)
    ensure_group_member(ledger.member_emails, acting_member)

    view = build_group_view(ledger, acting_member)

    return GroupDetailOut(
        id=group.id,
        name=group.name,
        created_by=group.created_by,
        **view.model_dump(),
    )


async def add_payment(db: AsyncSession, group_id: int, acting_member: str, data: PaymentCreate) -> PaymentOut:
    group = await get_active_group(db, group_id)
    members = await get_member_emails(db, group.id)
    ensure_group_member(members, acting_member)

    # the acting member is always the one paying
    record = build_payment(
        acting_member,
        data.to_member,
        data.amount,
        members,
        expense_description=data.expense_description,
    )

    payment = Payment(
        group_id=group.id,
        from_member=record.from_member,
        to_member=record.to_member,
        amount_cents=record.amount,
        expense_description=record.expense_description,
        created_at=record.created_at,
    )

    db.add(payment)
    await db.commit()
    await db.refresh(payment)

    logger.info(
        "Payment %s recorded in group %s: %s -> %s, %s cents",
        payment.id, group.id, record.from_member, record.to_member, record.amount
    )

    return payment_to_out(payment)


async def get_payment_history(db: AsyncSession, group_id: int, acting_member: str):
    group = await get_active_group(db, group_id)
    members = await get_member_emails(db, group.id)
    ensure_group_member(members, acting_member)

    q = (
        select(Payment)
        .where(Payment.group_id == group.id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    )

    result = await db.execute(q)
    return [payment_to_out(p) for p in result.scalars().all()]

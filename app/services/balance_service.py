"""
Net balances and settle-up suggestions for a group ledger.

Everything here is pure: no I/O, no shared state, amounts in integer cents.
A positive balance means the member should receive money, a negative one
means they owe.
"""

from collections import deque
from typing import Dict, Iterable, List, Sequence

from app.core.utils import coerce_cents, format_amount
from app.schemas.group import GroupView
from app.schemas.ledger import ExpenseRecord, GroupLedger, PaymentRecord
from app.schemas.settlements import Settlement


def compute_balances(
    members: Sequence[str],
    expenses: Iterable[ExpenseRecord],
    payments: Iterable[PaymentRecord] = (),
) -> Dict[str, int]:
    """
    Returns:
        {
            member_email: net_balance_cents
        }

    Every member is present, in the given order, even with no activity.
    A payer or payment endpoint that is no longer a member is skipped.
    """
    balances: Dict[str, int] = {m: 0 for m in members}

    for exp in expenses or ():
        paid = exp.paid_by
        amt = coerce_cents(exp.amount)
        split = exp.split or {}

        for m in balances:
            share = coerce_cents(split.get(m, 0))
            if m == paid:
                # payer fronted everyone else's share
                balances[m] += amt - share
            else:
                balances[m] -= share

    for p in payments or ():
        if p.from_member not in balances or p.to_member not in balances:
            continue
        amt = coerce_cents(p.amount)
        balances[p.from_member] += amt
        balances[p.to_member] -= amt

    return balances


def compute_settlements(balances: Dict[str, int]) -> List[Settlement]:
    """
    Greedy matching of the largest debtor against the largest creditor.

    Not guaranteed minimal, but never emits more than
    len(creditors) + len(debtors) - 1 transfers. Equal amounts keep the
    order of the balance mapping.
    """
    creditors = []
    debtors = []

    for member, bal in balances.items():
        bal = coerce_cents(bal)
        if bal > 0:
            creditors.append([member, bal])
        elif bal < 0:
            debtors.append([member, -bal])

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    creditors = deque(creditors)
    debtors = deque(debtors)

    transfers: List[Settlement] = []

    while creditors and debtors:
        cred_id, cred_amt = creditors[0]
        debt_id, debt_amt = debtors[0]

        pay_amt = min(cred_amt, debt_amt)
        transfers.append(Settlement(from_member=debt_id, to_member=cred_id, amount=pay_amt))

        creditors[0][1] -= pay_amt
        debtors[0][1] -= pay_amt

        if creditors[0][1] == 0:
            creditors.popleft()
        if debtors[0][1] == 0:
            debtors.popleft()

    return transfers


def apply_settlements(balances: Dict[str, int], settlements: Iterable[Settlement]) -> Dict[str, int]:
    """Balances after every suggested transfer has been paid."""
    result = dict(balances)
    for s in settlements:
        result[s.from_member] = result.get(s.from_member, 0) + s.amount
        result[s.to_member] = result.get(s.to_member, 0) - s.amount
    return result


def is_settled(balances: Dict[str, int]) -> bool:
    return all(coerce_cents(b) == 0 for b in balances.values())


def balance_status(amount: int) -> str:
    if amount > 0:
        return "should receive"
    if amount < 0:
        return "owes"
    return "is settled"


def balance_label(amount: int) -> str:
    if amount == 0:
        return balance_status(amount)
    return f"{balance_status(amount)} {format_amount(amount)}"


def build_group_view(ledger: GroupLedger, acting_member: str) -> GroupView:
    """
    Balances and settle-up suggestions for one group, from the point of view
    of `acting_member`. The acting member is never looked up implicitly.
    """
    balances = compute_balances(ledger.member_emails, ledger.expenses, ledger.payments)
    settlements = compute_settlements(balances)

    return GroupView(
        member_emails=list(ledger.member_emails),
        expenses=list(ledger.expenses),
        payments=list(ledger.payments),
        balances=balances,
        settlements=settlements,
        acting_member=acting_member,
        my_balance=balances.get(acting_member, 0),
        i_owe=[s for s in settlements if s.from_member == acting_member],
        owed_to_me=[s for s in settlements if s.to_member == acting_member],
        is_settled=is_settled(balances),
    )

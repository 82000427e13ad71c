import logging
from app.db.session import engine
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.group import Group
from app.models.expense import Expense
from app.models.payment import Payment

logger = logging.getLogger("splitledger.system")

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message":"Database is connected"}
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed: %s", e)
        return {"db": False, "error": str(e)}

async def system_health():
    return {
        "status": "ok"
    }

async def system_metrics(db: AsyncSession):
    groups_q = select(func.count(Group.id)).where(Group.is_deleted == False)
    expenses_q = select(func.count(Expense.id))
    payments_q = select(func.count(Payment.id))

    groups_res = await db.execute(groups_q)
    expenses_res = await db.execute(expenses_q)
    payments_res = await db.execute(payments_q)

    return {
        "groups": groups_res.scalar(),
        "expenses": expenses_res.scalar(),
        "payments": payments_res.scalar()
    }

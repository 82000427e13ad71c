from sqlalchemy import BigInteger, Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.session import Base

class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    paid_by = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    splits = relationship(
        "ExpenseSplit",
        back_populates="expense",
        cascade="all, delete",
        order_by="ExpenseSplit.id"
    )

from sqlalchemy import BigInteger, Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.db.session import Base

class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    from_member = Column(String, nullable=False)
    to_member = Column(String, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    expense_description = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

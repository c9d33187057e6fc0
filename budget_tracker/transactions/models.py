import uuid

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from budget_tracker.database import Base


def new_transaction_id() -> str:
    return uuid.uuid4().hex


class Transaction(Base):
    __tablename__ = "transactions"

    # insertion order within the owner's collection
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False, default=new_transaction_id)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    type = Column(String(10), nullable=False)           # income / expense
    category = Column(String(100), nullable=False)
    amount = Column(Float, nullable=False)
    description = Column(String, nullable=True)
    date = Column(String(10), nullable=False)           # YYYY-MM-DD

    version = Column(Integer, nullable=False)

    owner = relationship("User", back_populates="transactions")

    __mapper_args__ = {"version_id_col": version}

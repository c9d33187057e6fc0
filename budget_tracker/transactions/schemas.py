import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, validator


# =========================
# Input
# =========================
class TransactionIn(BaseModel):
    """Body for both create and update. Both paths validate the same fields."""
    type: Literal["income", "expense"]
    category: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    description: Optional[str] = None
    date: Optional[datetime.date] = None

    @validator("date", pre=True)
    def blank_date_is_omitted(cls, v):
        # "" keeps the stored date on update, same as leaving it out
        if v == "" or v is None:
            return None
        return v

    @validator("category", pre=True)
    def strip_category(cls, v):
        return v.strip() if isinstance(v, str) else v


# =========================
# Output
# =========================
class TransactionOut(BaseModel):
    id: str = Field(..., serialization_alias="_id")
    type: str
    category: str
    amount: float
    description: Optional[str] = None
    date: str

    class Config:
        from_attributes = True


class MessageOut(BaseModel):
    message: str


class SuggestedCategories(BaseModel):
    income: List[str]
    expense: List[str]


SUGGESTED_CATEGORIES: Dict[str, List[str]] = {
    "income": ["Salary", "Freelance", "Investment", "Gift", "Other"],
    "expense": ["Food", "Transport", "Entertainment", "Bills", "Shopping", "Health", "Education", "Other"],
}

from datetime import date
from typing import List

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from budget_tracker.errors import Conflict, InternalError, NotFound
from budget_tracker.transactions import models, schemas
from budget_tracker.users import crud as user_crud
from budget_tracker.users.models import User


# =========================
# Helpers
# =========================
def _get_owner(db: Session, user_id: int) -> User:
    user = user_crud.get_user_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def _get_owned_transaction(db: Session, user_id: int, transaction_id: str) -> models.Transaction:
    # Lookup is always scoped to the owner; a foreign id resolves to 404
    transaction = (
        db.query(models.Transaction)
        .filter(
            models.Transaction.user_id == user_id,
            models.Transaction.id == transaction_id,
        )
        .first()
    )
    if not transaction:
        raise NotFound("Transaction not found")
    return transaction


def _commit(db: Session, action: str, user_id: int, transaction_id: str):
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.warning(f"Concurrent {action} on transaction {transaction_id} for user {user_id}")
        raise Conflict("Transaction was modified by another request")
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Could not {action} transaction {transaction_id} for user {user_id}: {exc}")
        raise InternalError()


# =========================
# Create Transaction
# =========================
def create_transaction(db: Session, user_id: int, data: schemas.TransactionIn) -> str:
    owner = _get_owner(db, user_id)

    transaction = models.Transaction(
        id=models.new_transaction_id(),
        type=data.type,
        category=data.category,
        amount=data.amount,
        description=data.description,
        date=(data.date or date.today()).isoformat(),
    )
    owner.transactions.append(transaction)

    _commit(db, "create", user_id, transaction.id)
    logger.info(f"Transaction {transaction.id} added for user {user_id}")
    return transaction.id


# =========================
# List Transactions
# =========================
def list_transactions(db: Session, user_id: int) -> List[models.Transaction]:
    """The owner's whole collection in insertion order. Filtering and sorting happen client side."""
    owner = _get_owner(db, user_id)
    return list(owner.transactions)


# =========================
# Update Transaction
# =========================
def update_transaction(
    db: Session,
    user_id: int,
    transaction_id: str,
    data: schemas.TransactionIn,
) -> None:
    _get_owner(db, user_id)
    transaction = _get_owned_transaction(db, user_id, transaction_id)

    # Full replace, except an omitted date keeps the stored one
    transaction.type = data.type
    transaction.category = data.category
    transaction.amount = data.amount
    transaction.description = data.description
    if data.date:
        transaction.date = data.date.isoformat()

    _commit(db, "update", user_id, transaction_id)
    logger.info(f"Transaction {transaction_id} updated for user {user_id}")


# =========================
# Delete Transaction
# =========================
def delete_transaction(db: Session, user_id: int, transaction_id: str) -> None:
    owner = _get_owner(db, user_id)
    transaction = _get_owned_transaction(db, user_id, transaction_id)

    owner.transactions.remove(transaction)

    _commit(db, "delete", user_id, transaction_id)
    logger.info(f"Transaction {transaction_id} deleted for user {user_id}")

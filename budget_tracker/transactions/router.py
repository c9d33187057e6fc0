from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from budget_tracker.database import get_db
from budget_tracker.users.auth import get_current_user
from budget_tracker.users.schemas import CurrentUser
from . import schemas, service

# Every route here sits behind the access guard
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post(
    "/create",
    response_model=schemas.MessageOut,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    transaction: schemas.TransactionIn,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    service.create_transaction(db, current_user.id, transaction)
    return {"message": "Transaction added"}


@router.get("/transactions", response_model=List[schemas.TransactionOut])
def list_transactions(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return service.list_transactions(db, current_user.id)


@router.put("/update/{transaction_id}", response_model=schemas.MessageOut)
def update_transaction(
    transaction_id: str,
    transaction: schemas.TransactionIn,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    service.update_transaction(db, current_user.id, transaction_id, transaction)
    return {"message": "Transaction updated"}


@router.delete("/delete/{transaction_id}", response_model=schemas.MessageOut)
def delete_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    service.delete_transaction(db, current_user.id, transaction_id)
    return {"message": "Transaction deleted"}

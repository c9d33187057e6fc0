from typing import Optional

from sqlalchemy.orm import Session

from budget_tracker.users.models import User


def create_user(db: Session, username: str, hashed_password: str) -> User:
    new_user = User(username=username, hashed_password=hashed_password)
    db.add(new_user)
    db.flush()
    return new_user


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_refresh_token(db: Session, refresh_token: str) -> Optional[User]:
    return db.query(User).filter(User.refresh_token == refresh_token).first()

# app/modules/users/repository.py
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional

from app.shared.database.models import Role, Transfer, User


class UsersRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[User]:
        return self.db.query(User).options(joinedload(User.role)).order_by(User.id.asc()).all()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).options(joinedload(User.role)).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_roles(self) -> List[Role]:
        return self.db.query(Role).order_by(Role.id.asc()).all()

    def get_role(self, role_id: int) -> Optional[Role]:
        return self.db.query(Role).filter(Role.id == role_id).first()

    def has_transfers(self, user_id: int) -> bool:
        return self.db.query(Transfer.id).filter(Transfer.user_id == user_id).first() is not None

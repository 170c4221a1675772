"""
User persistence backed by SQLAlchemy.
"""
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.errors import ConflictError
from app.extensions import db
from app.models import User


class UserRepository:

    def find_by_id(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        return db.session.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return User.query.filter_by(email=email).first()

    def list(self, role: Optional[str] = None) -> List[User]:
        query = User.query
        if role:
            query = query.filter(User.role == role)
        return query.order_by(User.name.asc()).all()

    def insert(self, user: User) -> User:
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError('User with this email already exists')
        return user

    def save(self, user: User) -> User:
        db.session.commit()
        return user

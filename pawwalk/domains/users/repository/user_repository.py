from sqlalchemy.orm import Session
from typing import Optional

from pawwalk.models.user import User


class UserRepository:

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------------------------
    # Basic user lookups
    # -------------------------------------------------

    def get_user_by_firebase_uid(self, firebase_uid: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.firebase_uid == firebase_uid)
            .first()
        )

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.user_id == user_id)
            .first()
        )

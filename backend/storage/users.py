# backend/storage/users.py
import logging
from typing import Optional

from sqlalchemy import select

from models.users import User
from schemas.user import UserInsert, UserResponse, UserWithPassword
from storage.base import BaseQueries

logger = logging.getLogger(__name__)


class UserQueries(BaseQueries):

    def get_user(self, user_id: int) -> Optional[UserResponse]:
        with self._session() as db:
            user = db.get(User, user_id)
            return UserResponse.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserResponse]:
        with self._session() as db:
            user = db.scalars(select(User).where(User.username == username)).first()
            return UserResponse.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserResponse]:
        with self._session() as db:
            user = db.scalars(select(User).where(User.email == email)).first()
            return UserResponse.model_validate(user) if user else None

    def get_user_credentials(self, username: str) -> Optional[UserWithPassword]:
        # Only the login flow needs the hash; everything else gets UserResponse
        with self._session() as db:
            user = db.scalars(select(User).where(User.username == username)).first()
            return UserWithPassword.model_validate(user) if user else None

    def create_user(self, payload: UserInsert) -> UserResponse:
        with self._session() as db:
            user = User(**payload.model_dump())
            db.add(user)
            db.flush()
            db.refresh(user)
            logger.info("Created user %s (%s)", user.id, user.username)
            return UserResponse.model_validate(user)

import logging
from typing import Union

from pydantic import SecretStr
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import EmailTaken, InvalidCredentials
from core.security import hash_password, password_needs_rehash, verify_password
from models.user import User
from repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepository(db)


    def register(self, *, email: str, username: str, password: Union[str, SecretStr]) -> User:
        if self.repo.get_by_email(email):
            raise EmailTaken()
        try:
            user = self.repo.create(email=email, username=username, password_hash=hash_password(password))
        except IntegrityError as exc:
            # another sign-up with the same email committed first
            raise EmailTaken() from exc
        logger.info("Registered user %s", user.id)
        return user


    def login(self, *, email: str, password: Union[str, SecretStr]) -> User:
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        if password_needs_rehash(user.password_hash):
            user = self.repo.update_password_hash(user, hash_password(password))
        return user


    def get_user(self, user_id: int) -> User | None:
        return self.repo.get_by_id(user_id)

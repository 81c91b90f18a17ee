"""
User accounts: registration, profile changes and password handling.
"""
from typing import Any, Dict, List

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from database import transactional
from errors import AuthError, ConflictError, NotFoundError
from logging_config import get_logger
from mappers import apply_changes
from models import User, Wishlist
from repositories import UserRepository

logger = get_logger("users")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def get_all(self) -> List[User]:
        return self.users.find_all()

    def get_by_id(self, user_id: int) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found.")
        return user

    def get_by_email(self, email: str) -> User:
        user = self.users.find_by_email(email)
        if user is None:
            raise NotFoundError(f"User with email {email} not found.")
        return user

    @transactional
    def create_user(self, data: Dict[str, Any]) -> User:
        """Register a user with a hashed password and an empty wishlist."""
        if self.users.exists_by_email(data["email"]):
            logger.warning("Registration rejected: %s is already registered", data["email"])
            raise ConflictError("Email already registered")
        values = dict(data)
        values["password"] = get_password_hash(values["password"])
        user = User(**values)
        user.wishlist = Wishlist()
        self.users.save(user)
        logger.info("User %s registered", user.id)
        return user

    @transactional
    def update_user(self, user_id: int, changes: Dict[str, Any]) -> User:
        user = self.get_by_id(user_id)
        email = changes.get("email")
        if email and email != user.email:
            owner = self.users.find_by_email(email)
            if owner is not None and owner.id != user.id:
                logger.warning("Email change rejected for user %s: %s is taken", user_id, email)
                raise ConflictError("Email already registered")
        apply_changes(user, changes)
        self.users.save(user)
        logger.info("User %s updated: fields=%s", user_id, sorted(changes))
        return user

    @transactional
    def update_password(self, user_id: int, old_password: str, new_password: str) -> User:
        user = self.get_by_id(user_id)
        if not verify_password(old_password, user.password):
            raise AuthError("Incorrect current password")
        user.password = get_password_hash(new_password)
        self.users.save(user)
        logger.info("Password changed for user %s", user_id)
        return user

    def verify_password(self, user_id: int, password: str) -> bool:
        user = self.get_by_id(user_id)
        if not verify_password(password, user.password):
            raise AuthError("Incorrect password")
        return True

    @transactional
    def reset_password(self, user_id: int, new_password: str) -> User:
        user = self.get_by_id(user_id)
        user.password = get_password_hash(new_password)
        self.users.save(user)
        logger.info("Password reset for user %s", user_id)
        return user

    @transactional
    def update_address(self, user_id: int, address: str) -> User:
        user = self.get_by_id(user_id)
        user.address = address
        self.users.save(user)
        return user

    @transactional
    def update_phone(self, user_id: int, phone: str) -> User:
        user = self.get_by_id(user_id)
        user.phone = phone
        self.users.save(user)
        return user

    @transactional
    def delete_user(self, user_id: int) -> None:
        """Delete a user together with their orders and wishlist."""
        user = self.get_by_id(user_id)
        self.users.delete(user)
        logger.info("User %s deleted", user_id)

"""
User accounts in the ``users`` collection.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from threadcart.core.exceptions import InternalError, InvalidArgumentError
from threadcart.models.user import User
from threadcart.utils.helpers import format_document, object_id_to_str

logger = logging.getLogger(__name__)


class UserStore:

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.users

    async def ensure_indexes(self):
        """One account per email address."""
        await self.collection.create_index([("email", ASCENDING)], unique=True)

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            document = await self.collection.find_one({"email": email.strip().lower()})
        except PyMongoError as e:
            logger.error(f"Failed to look up user by email: {str(e)}")
            raise InternalError("Failed to load user")

        if not document:
            return None
        return User.model_validate(format_document(document))

    async def insert(self, user: User) -> User:
        """
        Store a new account.

        Raises:
            InvalidArgumentError: If the email is already registered
        """
        user.email = user.email.lower()
        document = user.model_dump(exclude={"id"})

        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            raise InvalidArgumentError("User already exists")
        except PyMongoError as e:
            logger.error(f"Failed to create user: {str(e)}")
            raise InternalError("Failed to create user")

        user.id = object_id_to_str(result.inserted_id)
        return user

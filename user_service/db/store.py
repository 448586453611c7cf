import logging
import uuid
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.base import Executable
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.core.exceptions import RecordNotFoundError, StoreError
from user_service.db.models import User, UserContacts, UserDetails
from user_service.schemas.user import (
    UserContactsCreate,
    UserContactsRow,
    UserDetailsCreate,
    UserDetailsRow,
)

logger = logging.getLogger(__name__)

DETAILS_ENTITY = "user details"
CONTACTS_ENTITY = "user contacts"


class UserStore:
    """Доступ к таблицам users, users_details и users_contacts.

    Каждый метод выполняет ровно один SQL-запрос в собственной сессии.
    Ошибки SQLAlchemy превращаются в StoreError, отсутствие строки в RecordNotFoundError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _execute(self, stmt: Executable, action: str, returning: bool = True) -> Any:
        async with self._session_factory() as session:
            try:
                result = await session.execute(stmt)
                value = result.scalar_one_or_none() if returning else None
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Failed to %s: %s", action, e)
                raise StoreError(str(e)) from e
        return value

    async def _one_details(self, stmt: Executable, action: str) -> UserDetailsRow:
        details = await self._execute(stmt, action)
        if details is None:
            raise RecordNotFoundError(DETAILS_ENTITY)
        return UserDetailsRow.model_validate(details)

    async def _one_contacts(self, stmt: Executable, action: str) -> UserContactsRow:
        contacts = await self._execute(stmt, action)
        if contacts is None:
            raise RecordNotFoundError(CONTACTS_ENTITY)
        return UserContactsRow.model_validate(contacts)

    # --- USERS ---
    async def create_user(self, user_uuid: uuid.UUID) -> uuid.UUID:
        stmt = insert(User).values(uuid=user_uuid).returning(User.uuid)
        return await self._execute(stmt, "create user")

    async def delete_user(self, user_uuid: uuid.UUID) -> None:
        # details и contacts удаляет каскад на стороне БД
        stmt = delete(User).where(User.uuid == user_uuid)
        await self._execute(stmt, "delete user", returning=False)

    # --- DETAILS ---
    async def get_user_details(self, user_uuid: uuid.UUID) -> UserDetailsRow:
        stmt = select(UserDetails).where(UserDetails.user_uuid == user_uuid).limit(1)
        return await self._one_details(stmt, "get user details")

    async def create_user_details(self, params: UserDetailsCreate) -> UserDetailsRow:
        stmt = insert(UserDetails).values(**params.model_dump()).returning(UserDetails)
        return await self._one_details(stmt, "create user details")

    async def _update_details(self, user_uuid: uuid.UUID, action: str, **values: Any) -> UserDetailsRow:
        stmt = (
            update(UserDetails)
            .where(UserDetails.user_uuid == user_uuid)
            .values(**values)
            .returning(UserDetails)
            .execution_options(synchronize_session=False)
        )
        return await self._one_details(stmt, action)

    async def update_user_name(self, user_uuid: uuid.UUID, name: str) -> UserDetailsRow:
        return await self._update_details(user_uuid, "update user name", name=name)

    async def update_user_surname(self, user_uuid: uuid.UUID, surname: str) -> UserDetailsRow:
        return await self._update_details(user_uuid, "update user surname", surname=surname)

    async def update_user_patronymic(self, user_uuid: uuid.UUID, patronymic: str | None) -> UserDetailsRow:
        return await self._update_details(user_uuid, "update user patronymic", patronymic=patronymic)

    async def update_user_group_code(self, user_uuid: uuid.UUID, group_code: str) -> UserDetailsRow:
        return await self._update_details(user_uuid, "update user group code", group_code=group_code)

    # --- CONTACTS ---
    async def get_user_contacts(self, user_uuid: uuid.UUID) -> UserContactsRow:
        stmt = select(UserContacts).where(UserContacts.user_uuid == user_uuid).limit(1)
        return await self._one_contacts(stmt, "get user contacts")

    async def create_user_contacts(self, params: UserContactsCreate) -> UserContactsRow:
        stmt = insert(UserContacts).values(**params.model_dump()).returning(UserContacts)
        return await self._one_contacts(stmt, "create user contacts")

    async def _update_contacts(self, user_uuid: uuid.UUID, action: str, **values: Any) -> UserContactsRow:
        stmt = (
            update(UserContacts)
            .where(UserContacts.user_uuid == user_uuid)
            .values(**values)
            .returning(UserContacts)
            .execution_options(synchronize_session=False)
        )
        return await self._one_contacts(stmt, action)

    async def update_user_phone_number(self, user_uuid: uuid.UUID, phone_number: str) -> UserContactsRow:
        return await self._update_contacts(user_uuid, "update phone number", phone_number=phone_number)

    async def update_user_email(self, user_uuid: uuid.UUID, email: str | None) -> UserContactsRow:
        return await self._update_contacts(user_uuid, "update email", email=email)

    async def update_user_telegram_id(self, user_uuid: uuid.UUID, telegram_id: int) -> UserContactsRow:
        return await self._update_contacts(user_uuid, "update telegram ID", telegram_id=telegram_id)

import uuid

from pydantic import BaseModel, ConfigDict


# Базовые схемы (поля строк в таблицах)
class UserDetailsBase(BaseModel):
    name: str
    surname: str
    patronymic: str | None = None
    group_code: str


class UserContactsBase(BaseModel):
    phone_number: str
    email: str | None = None
    telegram_id: int | None = None


# Схемы для СОЗДАНИЯ (параметры INSERT)
class UserDetailsCreate(UserDetailsBase):
    user_uuid: uuid.UUID


class UserContactsCreate(UserContactsBase):
    user_uuid: uuid.UUID


# Схемы строк, которые возвращает хранилище
class UserDetailsRow(UserDetailsBase):
    user_uuid: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class UserContactsRow(UserContactsBase):
    user_uuid: uuid.UUID

    model_config = ConfigDict(from_attributes=True)

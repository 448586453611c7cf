"""gRPC-обработчики UserService.

Все RPC устроены одинаково: разбор UUID, проверка полей, один вызов хранилища,
перевод ошибок хранилища в статусы gRPC. Общая часть вынесена в UserServicer._handle.
"""
import logging
import uuid
from functools import partial
from typing import Any, Awaitable, Callable, Iterable, TypeVar

import grpc
from opentelemetry import trace
from opentelemetry.propagate import extract
from opentelemetry.trace import SpanKind, Status, StatusCode

from user_service.core.exceptions import RecordNotFoundError, StoreError
from user_service.core.validators import (
    parse_uuid,
    validate_alphabetic_string,
    validate_group_code,
    validate_phone_number,
    validate_telegram_id,
)
from user_service.db.store import UserStore
from user_service.protos import user_service_pb2, user_service_pb2_grpc
from user_service.schemas.user import (
    UserContactsCreate,
    UserContactsRow,
    UserDetailsCreate,
    UserDetailsRow,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("user-service")

T = TypeVar("T")

# (валидатор, значение, сообщение); значение None означает, что поле не передано
Check = tuple[Callable[[Any], bool], Any, str]


def _optional(request: Any, field: str) -> Any:
    return getattr(request, field) if request.HasField(field) else None


def _details_message(details: UserDetailsRow) -> user_service_pb2.UserDetails:
    # None-поля не передаются, чтобы optional остался неустановленным
    return user_service_pb2.UserDetails(**details.model_dump(mode="json", exclude_none=True))


def _contacts_message(contacts: UserContactsRow) -> user_service_pb2.UserContacts:
    return user_service_pb2.UserContacts(**contacts.model_dump(mode="json", exclude_none=True))


class UserServicer(user_service_pb2_grpc.UserServiceServicer):
    def __init__(self, store: UserStore):
        self.store = store

    async def _handle(
            self,
            context: grpc.aio.ServicerContext,
            method: str,
            raw_uuid: str,
            operation: Callable[[uuid.UUID], Awaitable[T]],
            action: str,
            checks: Iterable[Check] = (),
            attributes: dict[str, str] | None = None,
    ) -> T:
        parent = extract(dict(context.invocation_metadata() or ()))
        with tracer.start_as_current_span(
                method,
                context=parent,
                kind=SpanKind.SERVER,
                record_exception=False,
                set_status_on_exception=False,
        ) as span:
            span.set_attribute("user.uuid", raw_uuid)
            span.set_attribute("grpc.method", method)
            for key, value in (attributes or {}).items():
                span.set_attribute(key, value)

            # 1. UUID
            try:
                user_uuid = parse_uuid(raw_uuid)
            except ValueError as e:
                logger.warning("%s: failed to parse uuid %r: %s", method, raw_uuid, e)
                span.set_status(Status(StatusCode.ERROR, "invalid UUID format"))
                span.record_exception(e)
                await context.abort(grpc.StatusCode.INVALID_ARGUMENT, f"invalid UUID format: {e}")

            # 2. Формат полей, до первой ошибки
            for validator, value, message in checks:
                if value is not None and not validator(value):
                    logger.warning("%s: %s for user %s", method, message, user_uuid)
                    span.set_status(Status(StatusCode.ERROR, message))
                    await context.abort(grpc.StatusCode.INVALID_ARGUMENT, message)

            # 3. Хранилище
            try:
                result = await operation(user_uuid)
            except RecordNotFoundError as e:
                logger.warning("%s: %s for user %s", method, e, user_uuid)
                span.set_status(Status(StatusCode.ERROR, "not found"))
                await context.abort(grpc.StatusCode.NOT_FOUND, str(e))
            except StoreError as e:
                logger.error("%s: failed to %s for user %s: %s", method, action, user_uuid, e)
                span.set_status(Status(StatusCode.ERROR, "database error"))
                span.record_exception(e)
                await context.abort(grpc.StatusCode.INTERNAL, f"failed to {action}: {e}")

            span.set_status(Status(StatusCode.OK))
            return result

    # --- USERS ---
    async def CreateUser(self, request, context):
        created = await self._handle(
            context, "CreateUser", request.uuid, self.store.create_user, "create user",
        )
        return user_service_pb2.CreateUserResponse(user=user_service_pb2.User(uuid=str(created)))

    async def DeleteUser(self, request, context):
        # отсутствующий пользователь не ошибка: удаление идемпотентно
        await self._handle(
            context, "DeleteUser", request.uuid, self.store.delete_user, "delete user",
        )
        return user_service_pb2.DeleteUserResponse()

    # --- DETAILS ---
    async def GetUserDetails(self, request, context):
        details = await self._handle(
            context, "GetUserDetails", request.user_uuid,
            self.store.get_user_details, "get user details",
        )
        return user_service_pb2.GetUserDetailsResponse(details=_details_message(details))

    async def CreateUserDetails(self, request, context):
        patronymic = _optional(request, "patronymic")

        def create(user_uuid: uuid.UUID):
            return self.store.create_user_details(UserDetailsCreate(
                name=request.name,
                surname=request.surname,
                patronymic=patronymic,
                group_code=request.group_code,
                user_uuid=user_uuid,
            ))

        details = await self._handle(
            context, "CreateUserDetails", request.user_uuid, create, "create user details",
            checks=[
                (validate_alphabetic_string, request.name, "invalid name format"),
                (validate_alphabetic_string, request.surname, "invalid surname format"),
                (validate_alphabetic_string, patronymic, "invalid patronymic format"),
                (validate_group_code, request.group_code, "invalid group code format"),
            ],
            attributes={"user.group_code": request.group_code},
        )
        return user_service_pb2.CreateUserDetailsResponse(details=_details_message(details))

    async def UpdateUserName(self, request, context):
        details = await self._handle(
            context, "UpdateUserName", request.user_uuid,
            partial(self.store.update_user_name, name=request.name), "update user name",
            checks=[(validate_alphabetic_string, request.name, "invalid name format")],
        )
        return user_service_pb2.UpdateUserNameResponse(details=_details_message(details))

    async def UpdateUserSurname(self, request, context):
        details = await self._handle(
            context, "UpdateUserSurname", request.user_uuid,
            partial(self.store.update_user_surname, surname=request.surname), "update user surname",
            checks=[(validate_alphabetic_string, request.surname, "invalid surname format")],
        )
        return user_service_pb2.UpdateUserSurnameResponse(details=_details_message(details))

    async def UpdateUserPatronymic(self, request, context):
        patronymic = _optional(request, "patronymic")
        details = await self._handle(
            context, "UpdateUserPatronymic", request.user_uuid,
            partial(self.store.update_user_patronymic, patronymic=patronymic), "update user patronymic",
            checks=[(validate_alphabetic_string, patronymic, "invalid patronymic format")],
        )
        return user_service_pb2.UpdateUserPatronymicResponse(details=_details_message(details))

    async def UpdateUserGroupCode(self, request, context):
        details = await self._handle(
            context, "UpdateUserGroupCode", request.user_uuid,
            partial(self.store.update_user_group_code, group_code=request.group_code),
            "update user group code",
            checks=[(validate_group_code, request.group_code, "invalid group code format")],
            attributes={"user.group_code": request.group_code},
        )
        return user_service_pb2.UpdateUserGroupCodeResponse(details=_details_message(details))

    # --- CONTACTS ---
    async def GetUserContacts(self, request, context):
        contacts = await self._handle(
            context, "GetUserContacts", request.user_uuid,
            self.store.get_user_contacts, "get user contacts",
        )
        return user_service_pb2.GetUserContactsResponse(contacts=_contacts_message(contacts))

    async def CreateUserContacts(self, request, context):
        email = _optional(request, "email")
        telegram_id = _optional(request, "telegram_id")

        def create(user_uuid: uuid.UUID):
            return self.store.create_user_contacts(UserContactsCreate(
                phone_number=request.phone_number,
                email=email,
                telegram_id=telegram_id,
                user_uuid=user_uuid,
            ))

        contacts = await self._handle(
            context, "CreateUserContacts", request.user_uuid, create, "create user contacts",
            checks=[
                (validate_phone_number, request.phone_number, "invalid phone number format"),
                (validate_telegram_id, telegram_id, "telegram ID must be positive"),
            ],
        )
        return user_service_pb2.CreateUserContactsResponse(contacts=_contacts_message(contacts))

    async def UpdateUserPhoneNumber(self, request, context):
        contacts = await self._handle(
            context, "UpdateUserPhoneNumber", request.user_uuid,
            partial(self.store.update_user_phone_number, phone_number=request.phone_number),
            "update phone number",
            checks=[(validate_phone_number, request.phone_number, "invalid phone number format")],
        )
        return user_service_pb2.UpdateUserPhoneNumberResponse(contacts=_contacts_message(contacts))

    async def UpdateUserEmail(self, request, context):
        contacts = await self._handle(
            context, "UpdateUserEmail", request.user_uuid,
            partial(self.store.update_user_email, email=_optional(request, "email")), "update email",
        )
        return user_service_pb2.UpdateUserEmailResponse(contacts=_contacts_message(contacts))

    async def UpdateUserTelegramID(self, request, context):
        contacts = await self._handle(
            context, "UpdateUserTelegramID", request.user_uuid,
            partial(self.store.update_user_telegram_id, telegram_id=request.telegram_id),
            "update telegram ID",
            checks=[(validate_telegram_id, request.telegram_id, "telegram ID must be positive")],
        )
        return user_service_pb2.UpdateUserTelegramIDResponse(contacts=_contacts_message(contacts))

"""Проверки формата входных данных.

Дублируют check-ограничения таблиц, чтобы отклонять запросы до обращения к БД.
"""
import re
import uuid

_SEPARATORS = frozenset("_-. ")

# \d в Python матчит любые юникодные цифры, поэтому только [0-9]
_GROUP_CODE_RE = re.compile(r"(\w{2,3})-[0-9]{1,2}-[0-9]{1,2}")
_PHONE_NUMBER_RE = re.compile(r"\+[1-9][0-9]{1,14}")

# uuid.UUID выкидывает дефисы в любых местах, поэтому форма проверяется заранее
_UUID_HEX = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
_UUID_RE = re.compile(
    r"(?:urn:uuid:)?" + _UUID_HEX + r"|\{" + _UUID_HEX + r"\}|[0-9a-fA-F]{32}"
)


def validate_alphabetic_string(value: str) -> bool:
    """Буквы любого алфавита, `_`, `-`, `.` и пробел. Пустая строка не проходит."""
    if not value:
        return False
    return all(ch.isalpha() or ch in _SEPARATORS for ch in value)


def validate_group_code(value: str) -> bool:
    match = _GROUP_CODE_RE.fullmatch(value)
    return match is not None and match.group(1).isalpha()


def validate_phone_number(value: str) -> bool:
    return _PHONE_NUMBER_RE.fullmatch(value) is not None


def validate_telegram_id(value: int) -> bool:
    return value > 0


def parse_uuid(value: str) -> uuid.UUID:
    """UUID в одной из записей: с дефисами, 32 hex-символа, `{...}` или `urn:uuid:...`."""
    if _UUID_RE.fullmatch(value) is None:
        raise ValueError(f"malformed UUID {value!r}")
    return uuid.UUID(value)

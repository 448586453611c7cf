"""
Тесты для проверок формата полей.
"""

import uuid

import pytest

from user_service.core.validators import (
    parse_uuid,
    validate_alphabetic_string,
    validate_group_code,
    validate_phone_number,
    validate_telegram_id,
)


@pytest.mark.parametrize("value", [
    "Иванов",
    "Иван Петров",
    "Иван Петрович Сидоров",
    "Петров-Водкин",
    "Иванов И.П.",
    "Иван_Петрович",
    "Ivanov Иван",
    "Шевченко Тарас",
    "ИВАНОВ ИВАН",
    "иванов иван",
    "Семён Алёшин",
    "Smith",
    "John Smith",
    "Smith-Johnson",
])
def test_alphabetic_string_valid(value):
    assert validate_alphabetic_string(value) is True


@pytest.mark.parametrize("value", [
    "",
    "Иванов123",
    "12345",
    "Иванов@mail",
    "Иванов()",
    'Иванов"',
    "Иванов/Петров",
    "Иванов*",
    "Иванов\n",
    "Иванов½",
])
def test_alphabetic_string_invalid(value):
    assert validate_alphabetic_string(value) is False


@pytest.mark.parametrize("value", [
    "ИТ-1-1",
    "МАТ-12-34",
    "ФИ-99-99",
    "ПМ-5-7",
    "КИ-1-2",
    "IT-1-1",
    "MAT-12-34",
])
def test_group_code_valid(value):
    assert validate_group_code(value) is True


@pytest.mark.parametrize("value", [
    "",
    "И-1-1",
    "ИТИТ-1-1",
    "ИТ11",
    "ИТ-111-1",
    "ИТ-1-111",
    "ИТ-А-Б",
    "1-ИТ-1",
    "ИТ-11",
    "ИТ-1-1-1",
    "ИТ -1-1",
    " ИТ-1-1",
    "ИТ-1-1\n",
    "И1-1-1",
    "И_-1-1",
    "ИТ-١-1",
])
def test_group_code_invalid(value):
    assert validate_group_code(value) is False


@pytest.mark.parametrize("value", [
    "+71234567890",
    "+79991234567",
    "+12025551234",
    "+380123456789",
    "+77001234567",
    "+4915112345678",
    "+8613812345678",
    "+12",
    "+123",
    "+123456789012345",
])
def test_phone_number_valid(value):
    assert validate_phone_number(value) is True


@pytest.mark.parametrize("value", [
    "",
    "79991234567",
    "+09991234567",
    "+1",
    "+1234567890123456",
    "+7 999 123 45 67",
    "+7-999-123-45-67",
    "+7(999)1234567",
    "+7999ABC4567",
    "+",
    "7+9991234567",
    "+79991234567\n",
    "+7٩٩٩1234567",
])
def test_phone_number_invalid(value):
    assert validate_phone_number(value) is False


@pytest.mark.parametrize("value, expected", [
    (1234567890, True),
    (1, True),
    (0, False),
    (-1, False),
])
def test_telegram_id(value, expected):
    assert validate_telegram_id(value) is expected


CANONICAL_UUID = uuid.UUID("6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e5f")


@pytest.mark.parametrize("value", [
    "6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e5f",
    "6F1C2D3E-4A5B-4C6D-8E7F-0A1B2C3D4E5F",
    "6f1c2d3e4a5b4c6d8e7f0a1b2c3d4e5f",
    "{6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e5f}",
    "urn:uuid:6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e5f",
])
def test_parse_uuid_accepted_forms(value):
    assert parse_uuid(value) == CANONICAL_UUID


@pytest.mark.parametrize("value", [
    "",
    "not-a-uuid",
    "6f1c-2d3e4a5b4c6d8e7f0a1b2c3d4e5f",
    "-6f1c2d3e4a5b4c6d8e7f0a1b2c3d4e5f-",
    "6f1c2d3e-4a5b4c6d-8e7f-0a1b2c3d4e5f",
    "urn:uuid:{6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e5f}",
    "{6f1c2d3e4a5b4c6d8e7f0a1b2c3d4e5f}",
    "6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e5f\n",
    "6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e5g",
])
def test_parse_uuid_rejects_malformed(value):
    """Тест: дефисы не на своих местах и смешанные записи не принимаются."""
    with pytest.raises(ValueError):
        parse_uuid(value)

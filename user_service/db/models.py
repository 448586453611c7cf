from sqlalchemy import BigInteger, CheckConstraint, Column, ForeignKey, Text, Uuid

from user_service.db.database import Base

# POSIX-классы вместо \p{L}: регулярки PostgreSQL не знают юникодных свойств
# двоеточия экранированы, иначе text() примет ":alph" за bind-параметр
# [[:alpha:]] видит не-ASCII буквы только при UTF-8 LC_CTYPE базы (не C/POSIX)
ALPHABETIC_PATTERN = r"^[[\:alpha\:]_. -]+$"
GROUP_CODE_PATTERN = r"^[[\:alpha\:]]{2,3}-[0-9]{1,2}-[0-9]{1,2}$"
PHONE_NUMBER_PATTERN = r"^\+[1-9][0-9]{1,14}$"


def _pg_check(sqltext: str, name: str) -> CheckConstraint:
    # оператор ~ есть только в PostgreSQL
    return CheckConstraint(sqltext, name=name).ddl_if(dialect="postgresql")


class User(Base):
    __tablename__ = "users"

    uuid = Column(Uuid, primary_key=True)


class UserDetails(Base):
    __tablename__ = "users_details"

    name = Column(Text, nullable=False)
    surname = Column(Text, nullable=False)
    patronymic = Column(Text, nullable=True)
    group_code = Column(Text, nullable=False)
    user_uuid = Column(
        Uuid,
        ForeignKey("users.uuid", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )

    __table_args__ = (
        _pg_check(f"name ~ '{ALPHABETIC_PATTERN}'", "name_check"),
        _pg_check(f"surname ~ '{ALPHABETIC_PATTERN}'", "surname_check"),
        _pg_check(f"patronymic ~ '{ALPHABETIC_PATTERN}'", "patronymic_check"),
        _pg_check(f"group_code ~ '{GROUP_CODE_PATTERN}'", "group_code_check"),
    )


class UserContacts(Base):
    __tablename__ = "users_contacts"

    phone_number = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    telegram_id = Column(BigInteger, nullable=True)
    user_uuid = Column(
        Uuid,
        ForeignKey("users.uuid", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )

    __table_args__ = (
        _pg_check(f"phone_number ~ '{PHONE_NUMBER_PATTERN}'", "phone_number_check"),
        CheckConstraint("telegram_id > 0", name="telegram_id_check"),
    )

"""Create user tables

Revision ID: 0001_create_user_tables
Revises:
Create Date: 2025-12-10 12:00:00.000000

База должна быть создана с UTF-8 LC_CTYPE, отличным от C/POSIX: иначе [[:alpha:]]
в регулярках PostgreSQL совпадает только с ASCII-буквами и кириллица не проходит
check-ограничения.

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_user_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# двоеточия экранированы от разбора bind-параметров в text()
ALPHABETIC_PATTERN = r"^[[\:alpha\:]_. -]+$"
GROUP_CODE_PATTERN = r"^[[\:alpha\:]]{2,3}-[0-9]{1,2}-[0-9]{1,2}$"
PHONE_NUMBER_PATTERN = r"^\+[1-9][0-9]{1,14}$"


def upgrade() -> None:
    # --- Пользователи ---
    op.create_table('users',
        sa.Column('uuid', sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint('uuid', name='users_pk')
    )

    # --- Учебные данные (ФИО, группа) ---
    op.create_table('users_details',
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('surname', sa.Text(), nullable=False),
        sa.Column('patronymic', sa.Text(), nullable=True),
        sa.Column('group_code', sa.Text(), nullable=False),
        sa.Column('user_uuid', sa.Uuid(), nullable=False),
        sa.CheckConstraint(f"name ~ '{ALPHABETIC_PATTERN}'", name='name_check'),
        sa.CheckConstraint(f"surname ~ '{ALPHABETIC_PATTERN}'", name='surname_check'),
        sa.CheckConstraint(f"patronymic ~ '{ALPHABETIC_PATTERN}'", name='patronymic_check'),
        sa.CheckConstraint(f"group_code ~ '{GROUP_CODE_PATTERN}'", name='group_code_check'),
        sa.ForeignKeyConstraint(['user_uuid'], ['users.uuid'], name='users_details_user_uuid_fkey',
                                ondelete='CASCADE', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('user_uuid', name='users_details_pk')
    )

    # --- Контакты ---
    op.create_table('users_contacts',
        sa.Column('phone_number', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('telegram_id', sa.BigInteger(), nullable=True),
        sa.Column('user_uuid', sa.Uuid(), nullable=False),
        sa.CheckConstraint(f"phone_number ~ '{PHONE_NUMBER_PATTERN}'", name='phone_number_check'),
        sa.CheckConstraint('telegram_id > 0', name='telegram_id_check'),
        sa.ForeignKeyConstraint(['user_uuid'], ['users.uuid'], name='users_contacts_user_uuid_fkey',
                                ondelete='CASCADE', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('user_uuid', name='users_contacts_pk')
    )


def downgrade() -> None:
    op.drop_table('users_contacts')
    op.drop_table('users_details')
    op.drop_table('users')

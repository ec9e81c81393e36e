import os
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from kiraya.db.base import Base
from kiraya.models.property import Property
from kiraya.models.unit import Unit
from kiraya.models.government_id_type import GovernmentIdType
from kiraya.models.tenant import Tenant
from kiraya.models.expense_type import ExpenseType
from kiraya.models.expense_cycle import ExpenseCycle
from kiraya.models.tenant_expense import TenantExpense
from kiraya.models.paid_expense import PaidExpense

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata

def get_url():
    url = os.environ.get("DATABASE_URL")
    if url:
        return url
    return config.get_main_option("sqlalchemy.url")

def run_migrations_offline():
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

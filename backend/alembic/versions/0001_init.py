from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_properties_owner_id", "properties", ["owner_id"], unique=False)

    op.create_table(
        "units",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
    )
    op.create_index("ix_units_property_id", "units", ["property_id"], unique=False)

    government_id_types = op.create_table(
        "government_id_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
    )

    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("units.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("contact_number", sa.String(length=15), nullable=False),
        sa.Column("government_id", sa.String(length=50), nullable=True),
        sa.Column("government_id_type_id", sa.Integer(), sa.ForeignKey("government_id_types.id"), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_tenants_unit_id", "tenants", ["unit_id"], unique=False)

    expense_types = op.create_table(
        "expense_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("is_advance_payment", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    expense_cycles = op.create_table(
        "expense_cycles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
    )

    op.create_table(
        "tenant_expenses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("expense_type_id", sa.Integer(), sa.ForeignKey("expense_types.id"), nullable=False),
        sa.Column("expense_cycle_id", sa.Integer(), sa.ForeignKey("expense_cycles.id"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("comments", sa.String(length=500), nullable=True),
    )
    op.create_index("ix_tenant_expenses_tenant_id", "tenant_expenses", ["tenant_id"], unique=False)
    op.create_index("ix_tenant_expenses_start_date", "tenant_expenses", ["start_date"], unique=False)

    op.create_table(
        "paid_expenses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("expense_type_id", sa.Integer(), sa.ForeignKey("expense_types.id"), nullable=False),
        sa.Column("tenant_expense_id", sa.Integer(), sa.ForeignKey("tenant_expenses.id"), nullable=True),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("comments", sa.String(length=500), nullable=True),
    )
    op.create_index("ix_paid_expenses_tenant_id", "paid_expenses", ["tenant_id"], unique=False)
    op.create_index("ix_paid_expenses_tenant_expense_id", "paid_expenses", ["tenant_expense_id"], unique=False)
    op.create_index("ix_paid_expenses_payment_date", "paid_expenses", ["payment_date"], unique=False)

    op.bulk_insert(
        expense_cycles,
        [
            {"id": 1, "name": "OneTime"},
            {"id": 2, "name": "Month"},
            {"id": 3, "name": "Quarter"},
            {"id": 4, "name": "HalfYear"},
            {"id": 5, "name": "Annual"},
        ],
    )
    op.bulk_insert(
        expense_types,
        [
            {"id": 1, "name": "Rent", "is_advance_payment": True},
            {"id": 2, "name": "SecurityDeposit", "is_advance_payment": False},
            {"id": 3, "name": "Electricity", "is_advance_payment": False},
            {"id": 4, "name": "Water", "is_advance_payment": False},
            {"id": 100, "name": "Others", "is_advance_payment": False},
        ],
    )
    op.bulk_insert(
        government_id_types,
        [
            {"id": 1, "name": "Aadhar"},
            {"id": 2, "name": "Pancard"},
            {"id": 3, "name": "DrivingLicense"},
        ],
    )

def downgrade():
    op.drop_index("ix_paid_expenses_payment_date", table_name="paid_expenses")
    op.drop_index("ix_paid_expenses_tenant_expense_id", table_name="paid_expenses")
    op.drop_index("ix_paid_expenses_tenant_id", table_name="paid_expenses")
    op.drop_table("paid_expenses")

    op.drop_index("ix_tenant_expenses_start_date", table_name="tenant_expenses")
    op.drop_index("ix_tenant_expenses_tenant_id", table_name="tenant_expenses")
    op.drop_table("tenant_expenses")

    op.drop_table("expense_cycles")
    op.drop_table("expense_types")

    op.drop_index("ix_tenants_unit_id", table_name="tenants")
    op.drop_table("tenants")
    op.drop_table("government_id_types")

    op.drop_index("ix_units_property_id", table_name="units")
    op.drop_table("units")

    op.drop_index("ix_properties_owner_id", table_name="properties")
    op.drop_table("properties")

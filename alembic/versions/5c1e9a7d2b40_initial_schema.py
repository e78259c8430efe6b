"""initial schema

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:41.318204

Clients, jobs, the three resource catalogs, quotes and their line tables.
Tables that already exist (created by Base.metadata.create_all()) are skipped.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


MATERIAL_TYPE = sa.Enum("BITUMEN", "ASPHALT", "ROADBASE", "STONE", name="materialtype")
PHASE = sa.Enum("PREPARATION", "SEAL", "ASPHALT", name="phase")


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    if not _table_exists("clients"):
        op.create_table(
            "clients",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("first_name", sa.String(), nullable=False),
            sa.Column("last_name", sa.String(), nullable=False),
            sa.Column("email", sa.String(), nullable=True),
            sa.Column("phone", sa.String(), nullable=True),
            sa.Column("client_type", sa.Enum("PRIVATE", "CONTRACTOR", "GOVERNMENT", name="clienttype"), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
        )
        op.create_index("ix_clients_id", "clients", ["id"])

    if not _table_exists("jobs"):
        op.create_table(
            "jobs",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("job_name", sa.String(), nullable=False),
            sa.Column("site_address", sa.String(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("job_dates", sa.JSON(), nullable=True),
            sa.Column("client_id", sa.Integer(), sa.ForeignKey("clients.id"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_jobs_id", "jobs", ["id"])

    if not _table_exists("labour_resources"):
        op.create_table(
            "labour_resources",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("role", sa.Enum("GENERAL_LABOUR", "FOREMAN", name="labourrole"), nullable=True),
            sa.Column("cost_rate", sa.Float(), nullable=True),
            sa.Column("charge_out_rate", sa.Float(), nullable=True),
            sa.Column("night_rate", sa.Float(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
        )
        op.create_index("ix_labour_resources_id", "labour_resources", ["id"])

    if not _table_exists("equipment_resources"):
        op.create_table(
            "equipment_resources",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("category", sa.String(), nullable=True),
            sa.Column("charge_out_rate", sa.Float(), nullable=True),
            sa.Column("night_rate", sa.Float(), nullable=True),
            sa.Column("owned_or_hired", sa.Enum("OWNED", "HIRED", name="ownership"), nullable=True),
            sa.Column("supplier", sa.String(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
        )
        op.create_index("ix_equipment_resources_id", "equipment_resources", ["id"])

    if not _table_exists("material_resources"):
        op.create_table(
            "material_resources",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("purchase_price", sa.Float(), nullable=True),
            sa.Column("material_type", MATERIAL_TYPE, nullable=False),
            sa.Column("measurement_unit", sa.String(), nullable=True),
            sa.Column("formula", sa.Float(), nullable=True),
            sa.Column("supplier", sa.String(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
        )
        op.create_index("ix_material_resources_id", "material_resources", ["id"])

    if not _table_exists("quotes"):
        op.create_table(
            "quotes",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("quote_number", sa.String(), nullable=False, unique=True),
            sa.Column("client_id", sa.Integer(), sa.ForeignKey("clients.id"), nullable=False),
            sa.Column("title", sa.String(), nullable=True),
            sa.Column("summary", sa.String(), nullable=True),
            sa.Column("job_site_address", sa.String(), nullable=True),
            sa.Column(
                "status",
                sa.Enum("DRAFT", "READY", "SENT", "ACCEPTED", "REJECTED", name="quotestatus"),
                nullable=True,
            ),
            sa.Column("date_created", sa.DateTime(), nullable=True),
            sa.Column("total_area", sa.Float(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("preparation", sa.Boolean(), nullable=True),
            sa.Column("asphalt", sa.Boolean(), nullable=True),
            sa.Column("two_coat_seal", sa.Boolean(), nullable=True),
            sa.Column("profiling", sa.Boolean(), nullable=True),
            sa.Column("markup", sa.Float(), nullable=True),
            sa.Column("cost_base", sa.Float(), nullable=True),
            sa.Column("markup_amount", sa.Float(), nullable=True),
            sa.Column("subtotal", sa.Float(), nullable=True),
            sa.Column("gst", sa.Float(), nullable=True),
            sa.Column("total", sa.Float(), nullable=True),
            sa.Column("profit", sa.Float(), nullable=True),
            sa.Column("margin", sa.Float(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_quotes_id", "quotes", ["id"])

    for table_name, fk_column, fk_target in [
        ("quote_labour_lines", "labour_id", "labour_resources.id"),
        ("quote_equipment_lines", "equipment_id", "equipment_resources.id"),
    ]:
        if not _table_exists(table_name):
            op.create_table(
                table_name,
                sa.Column("id", sa.Integer(), primary_key=True),
                sa.Column("quote_id", sa.Integer(), sa.ForeignKey("quotes.id"), nullable=False),
                sa.Column("position", sa.Integer(), nullable=True),
                sa.Column(fk_column, sa.Integer(), sa.ForeignKey(fk_target), nullable=True),
                sa.Column("quantity", sa.Float(), nullable=False),
                sa.Column("charge_rate", sa.Float(), nullable=False),
                sa.Column("total", sa.Float(), nullable=False),
                sa.Column("required_for", PHASE, nullable=False),
                sa.Column("is_night", sa.Boolean(), nullable=True),
            )
            op.create_index(f"ix_{table_name}_id", table_name, ["id"])

    if not _table_exists("quote_material_lines"):
        op.create_table(
            "quote_material_lines",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("quote_id", sa.Integer(), sa.ForeignKey("quotes.id"), nullable=False),
            sa.Column("position", sa.Integer(), nullable=True),
            sa.Column("material_id", sa.Integer(), sa.ForeignKey("material_resources.id"), nullable=True),
            sa.Column("material_type", MATERIAL_TYPE, nullable=False),
            sa.Column("sqm", sa.Float(), nullable=False),
            sa.Column("depth", sa.Float(), nullable=False),
            sa.Column("quantity", sa.Float(), nullable=False),
            sa.Column("sell_price", sa.Float(), nullable=False),
            sa.Column("charge", sa.Float(), nullable=False),
        )
        op.create_index("ix_quote_material_lines_id", "quote_material_lines", ["id"])


def downgrade() -> None:
    for table_name in [
        "quote_material_lines",
        "quote_equipment_lines",
        "quote_labour_lines",
        "quotes",
        "material_resources",
        "equipment_resources",
        "labour_resources",
        "jobs",
        "clients",
    ]:
        if _table_exists(table_name):
            op.drop_table(table_name)

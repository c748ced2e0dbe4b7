"""create prices table

Revision ID: 0001_create_prices_table
Revises:
Create Date: 2022-04-21 17:18:06.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_prices_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # the table may already exist if init_db ran first
    if sa.inspect(op.get_bind()).has_table('prices'):
        return
    op.create_table(
        'prices',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ticker', sa.Text(), nullable=False),
        sa.Column('date', sa.Text(), nullable=False),
        sa.Column('price', sa.Text(), nullable=False),
        sa.UniqueConstraint('ticker', 'date', name='uq_prices_ticker_date'),
        sqlite_autoincrement=True,
    )


def downgrade():
    op.drop_table('prices')

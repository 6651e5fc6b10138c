"""create custom_deck table

Revision ID: 5c2a9e71d0b4
Revises: 
Create Date: 2026-10-18 11:20:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9e71d0b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Fresh installs may already have the table from `flask db-reset`
    if 'custom_deck' in set(insp.get_table_names()):
        return

    op.create_table(
        'custom_deck',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('cards', sa.Text(), nullable=True),
        sa.Column('rules', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_custom_deck_name', 'custom_deck', ['name'], unique=False)


def downgrade():
    op.drop_index('ix_custom_deck_name', table_name='custom_deck')
    op.drop_table('custom_deck')

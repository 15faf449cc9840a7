"""Create donors table

Revision ID: 4f1c2b7a9d10
Revises: 
Create Date: 2025-07-05 01:38:59.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f1c2b7a9d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'donors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('gender', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('generated_id', sa.String(), nullable=False),
        sa.Column('number_of_donations', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index(op.f('ix_donors_id'), 'donors', ['id'], unique=False)
    # generatedId is the human-facing identifier; duplicates surface as 409
    op.create_index(op.f('ix_donors_generated_id'), 'donors', ['generated_id'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_donors_generated_id'), table_name='donors')
    op.drop_index(op.f('ix_donors_id'), table_name='donors')
    op.drop_table('donors')

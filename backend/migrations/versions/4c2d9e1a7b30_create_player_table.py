"""create player table

Revision ID: 4c2d9e1a7b30
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2d9e1a7b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    # Databases bootstrapped with db.create_all() already have the table
    if 'player' in set(insp.get_table_names()):
        return
    op.create_table(
        'player',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('wins', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_player_username'), 'player', ['username'], unique=True)


def downgrade():
    op.drop_index(op.f('ix_player_username'), table_name='player')
    op.drop_table('player')

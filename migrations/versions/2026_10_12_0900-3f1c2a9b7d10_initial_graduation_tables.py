"""initial_graduation_tables

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-12 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a9b7d10"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "app_users",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("salutation", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.Enum("user", "admin", name="participant_role_enum"), nullable=False),
        sa.Column("invited_to_dinner", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_app_users_username", "app_users", ["username"], unique=True)
    op.create_index("ix_app_users_role", "app_users", ["role"])

    op.create_table(
        "rsvp_responses",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("will_attend", sa.Boolean(), nullable=True),
        sa.Column("will_attend_dinner", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["app_users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_rsvp_responses_user_id", "rsvp_responses", ["user_id"], unique=True)

    op.create_table(
        "wishes",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["app_users.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_wishes_user_id", "wishes", ["user_id"])

    op.create_table(
        "wish_reactions",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("wish_id", sa.UUID(), nullable=False),
        sa.Column("sticker", sa.String(length=32), nullable=False),
        sa.Column("session_id", sa.String(length=255), nullable=False),
        sa.Column("reactor_name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["wish_id"], ["wishes.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_wish_reactions_wish_id", "wish_reactions", ["wish_id"])
    op.create_index("ix_wish_reactions_session_id", "wish_reactions", ["session_id"])


def downgrade() -> None:
    op.drop_index("ix_wish_reactions_session_id", table_name="wish_reactions")
    op.drop_index("ix_wish_reactions_wish_id", table_name="wish_reactions")
    op.drop_table("wish_reactions")
    op.drop_index("ix_wishes_user_id", table_name="wishes")
    op.drop_table("wishes")
    op.drop_index("ix_rsvp_responses_user_id", table_name="rsvp_responses")
    op.drop_table("rsvp_responses")
    op.drop_index("ix_app_users_role", table_name="app_users")
    op.drop_index("ix_app_users_username", table_name="app_users")
    op.drop_table("app_users")
    op.execute("DROP TYPE participant_role_enum")

"""003: create comments table

Revision ID: 003
Revises: 002
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE comments (
            id              SERIAL          PRIMARY KEY,
            post_id         INT             NOT NULL REFERENCES posts (id),
            user_id         INT             NOT NULL REFERENCES users (id),
            comment         TEXT            NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    # Batch hydration: WHERE post_id IN (...) ORDER BY created_at DESC
    op.execute("CREATE INDEX idx_comments_post_created ON comments (post_id, created_at DESC);")
    op.execute("CREATE INDEX idx_comments_user_id ON comments (user_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS comments CASCADE;")

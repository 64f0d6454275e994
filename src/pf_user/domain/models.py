"""Domain models for pf_user: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    id: int
    account_name: str
    passhash: str
    authority: int = 0      # 0 = normal, nonzero = moderator
    del_flg: int = 0        # 0 = active, nonzero = banned
    created_at: datetime | None = None

    @property
    def is_banned(self) -> bool:
        return self.del_flg != 0

    @property
    def is_moderator(self) -> bool:
        return self.authority != 0

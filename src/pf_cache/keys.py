"""Cache key formats: shared with every process using the same cache, keep exact."""

FEED_KEY = "index_posts"


def user_key(user_id: int) -> str:
    return f"user:{user_id}"


def account_key(account_name: str) -> str:
    return f"account:{account_name}"

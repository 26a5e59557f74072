from datetime import datetime, timezone

from content_api.models import Tag


def isoformat(value: datetime | None) -> str | None:
    """ISO-8601 text for *value*; naive values read back from SQLite are UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def tags_to_list(tags: list[Tag]) -> list[dict]:
    return [{"id": t.id, "name": t.name} for t in tags]

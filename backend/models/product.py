from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Product(BaseModel):
    # Wire format is camelCase (userId, createdAt, updatedAt)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    amount: Union[int, float]
    comment: Optional[str] = None
    user_id: str
    created_at: str
    updated_at: str

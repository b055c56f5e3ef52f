from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class UserSummary(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None


class PersonSummary(CamelModel):
    id: str
    first_name: str
    last_name: str


class NamedSummary(CamelModel):
    id: str
    name: str


def paginate(page: int, limit: int, total: int) -> dict:
    pages = (total + limit - 1) // limit if limit else 0
    return {"page": page, "limit": limit, "total": total, "pages": pages}

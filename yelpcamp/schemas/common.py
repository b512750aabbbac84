from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response bodies: read from ORM rows, emitted in camelCase."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class AuthorSummary(ApiModel):
    id: str
    username: str


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


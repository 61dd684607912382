import uuid

from fastapi_users import schemas
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserCreate(schemas.BaseUserCreate):
    first_name: str = ""
    last_name: str = ""


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignUpRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)


class SignInRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class UserPayload(CamelModel):
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str

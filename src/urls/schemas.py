from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_url: str = Field(alias="originalUrl", min_length=1, max_length=2048)

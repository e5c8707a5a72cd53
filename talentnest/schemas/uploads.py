"""Upload schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UploadResponse(BaseModel):
    """Result of a stored upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "File uploaded successfully"
    file_name: str
    original_name: str | None = None
    size: int
    content_type: str


class UploadDeleteResponse(BaseModel):
    """Result of an upload deletion."""

    message: str = "File deleted successfully"

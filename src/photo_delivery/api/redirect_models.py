"""Request models for the redirect service."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AliasUpdate(BaseModel):
    """Body of an alias update request; fields are validated by the handler."""

    model_config = ConfigDict(populate_by_name=True)

    secret: str | None = None
    alias: str | None = Field(
        default=None, validation_alias=AliasChoices("alias", "folderName")
    )
    folder_id: str | None = Field(
        default=None, validation_alias=AliasChoices("folderId", "folder_id")
    )

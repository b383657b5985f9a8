"""Credential contract exchanged with the credential-helper caller.

Field names on the wire follow the Docker credential-helper JSON shape
(ServerURL / Username / Secret). Values are handed to lpass as one
"Label: value" line each, so line breaks are rejected.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credential(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    server_url: str = Field(default="", alias="ServerURL")
    username: str = Field(default="", alias="Username")
    secret: str = Field(default="", alias="Secret", repr=False)

    @field_validator("server_url", "username", "secret")
    @classmethod
    def reject_line_breaks(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            raise ValueError("credential fields must be single-line")
        return value

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RenameRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    path: str = ''
    new_name: Optional[str] = Field(default=None, alias='newName')


class DeleteRequest(BaseModel):
    path: str = ''


class ApiResponse(BaseModel):
    ok: bool
    message: str

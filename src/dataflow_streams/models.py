"""Data models for Data Flow stream components."""

from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ApplicationType(str, Enum):
    """Stage an application plays in a stream."""

    SOURCE = "source"
    PROCESSOR = "processor"
    SINK = "sink"


class StreamDefinitionResource(BaseModel):
    """Stream definition as returned by the Data Flow server."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    dsl_text: str = Field("", alias="dslText")
    status: Optional[str] = None
    description: Optional[str] = None
    status_description: Optional[str] = Field(None, alias="statusDescription")


class AboutResource(BaseModel):
    """Subset of the server's /about response."""

    model_config = ConfigDict(extra="ignore")

    version_info: dict = Field(default_factory=dict, alias="versionInfo")

    @property
    def server_version(self) -> str:
        implementation = self.version_info.get("implementation") or {}
        return implementation.get("version") or "Unknown"

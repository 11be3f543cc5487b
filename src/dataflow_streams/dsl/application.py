"""A single application stage within a stream."""

from __future__ import annotations
from types import MappingProxyType
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, PrivateAttr, ValidationError, field_validator

from ..errors import InvalidArgumentError, validation_message
from ..models import ApplicationType


class StreamApplication(BaseModel):
    """An application used as a source, processor or sink of a stream.

    The stage type is assigned once, when the application is attached to a
    stream builder. After that the application can no longer be changed.

    Args:
        name: Registered application name, e.g. ``time`` or ``log``
        label: Optional label, required when the same app appears twice in a stream
        properties: Application properties rendered into the stream DSL
        deployment_properties: Deployer properties applied on deploy
    """

    name: str
    label: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)
    deployment_properties: Dict[str, Any] = Field(default_factory=dict)

    _type: Optional[ApplicationType] = PrivateAttr(default=None)

    def __init__(self, name: str, **data: Any):
        try:
            super().__init__(name=name, **data)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Invalid application '{name}': {validation_message(e)}") from e

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_"):
            self._check_mutable()
        super().__setattr__(name, value)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Application name can't be empty")
        return v

    @property
    def type(self) -> Optional[ApplicationType]:
        return self._type

    @property
    def identity(self) -> str:
        """Key used to detect duplicate stages: the label if set, else the name."""
        return self.label or self.name

    @property
    def definition(self) -> str:
        """Stream DSL fragment for this application."""
        parts = [f"{self.label}: {self.name}" if self.label else self.name]
        for key, value in self.properties.items():
            parts.append(f"--{key}={value}")
        return " ".join(parts)

    def with_type(self, app_type: ApplicationType) -> StreamApplication:
        """Tag this application with its stage type.

        Raises:
            InvalidArgumentError: If the application was already attached to a stage
        """
        if self._type is not None:
            raise InvalidArgumentError(
                f"Application '{self.identity}' is already used as {self._type.value}")
        # Attached applications expose read-only property views
        super().__setattr__("properties", MappingProxyType(dict(self.properties)))
        super().__setattr__(
            "deployment_properties", MappingProxyType(dict(self.deployment_properties)))
        self._type = app_type
        return self

    def label_as(self, label: str) -> StreamApplication:
        self._check_mutable()
        if not label:
            raise InvalidArgumentError("Label can't be empty")
        self.label = label
        return self

    def add_property(self, key: str, value: Any) -> StreamApplication:
        self._check_mutable()
        self.properties[key] = value
        return self

    def add_properties(self, properties: Dict[str, Any]) -> StreamApplication:
        self._check_mutable()
        self.properties.update(properties)
        return self

    def add_deployment_property(self, key: str, value: Any) -> StreamApplication:
        self._check_mutable()
        self.deployment_properties[key] = value
        return self

    def resolved_deployment_properties(self) -> Dict[str, str]:
        """Deployment properties keyed ``deployer.<identity>.<key>``."""
        return {
            f"deployer.{self.identity}.{key}": str(value)
            for key, value in self.deployment_properties.items()
        }

    def _check_mutable(self) -> None:
        if self._type is not None:
            raise InvalidArgumentError(
                f"Application '{self.identity}' is attached to a stream and can't be modified")

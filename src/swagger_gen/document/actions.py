"""Input models: the discovered actions a document is generated from.

A route-discovery adapter translates its framework's routes into these
models. The manifest loader is one such adapter.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from swagger_gen.schema.descriptor import TypeDescriptor

SUPPORTED_METHODS = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH")


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    FORM_DATA = "formData"
    BODY = "body"


class ParameterDescriptor(BaseModel):
    """A single parameter of an action."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    location: ParameterLocation
    type: TypeDescriptor
    required: bool = True
    description: str | None = None

    @model_validator(mode="after")
    def _path_parameters_are_required(self):
        if self.location == ParameterLocation.PATH:
            self.required = True
        return self


class ApiOperationDescriptor(BaseModel):
    """One discovered action: an HTTP method bound to a route template."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    method: str
    path: str
    name: str
    group: str | None = None
    parameters: list[ParameterDescriptor] = []
    response_type: TypeDescriptor | None = None
    consumes: list[str] = []
    produces: list[str] = []
    deprecated: bool = False

    @field_validator("method")
    @classmethod
    def _normalize_method(cls, value: str) -> str:
        method = value.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method '{value}'")
        return method

    @model_validator(mode="after")
    def _single_body(self):
        bodies = [p.name for p in self.parameters if p.location == ParameterLocation.BODY]
        if len(bodies) > 1:
            raise ValueError(f"Action '{self.identity}' declares several body parameters: {', '.join(bodies)}")
        return self

    @property
    def identity(self) -> str:
        """Stable identity used for operationIds and conflict detection."""
        return f"{self.group}.{self.name}" if self.group else self.name

    def parameters_in(self, location: ParameterLocation) -> list[ParameterDescriptor]:
        return [p for p in self.parameters if p.location == location]

"""Pydantic models for the generated Swagger 2.0 document.

Every model accepts vendor extensions (``x-*`` keys), which filters use to
decorate the document.
"""

import json

import yaml
from pydantic import BaseModel, ConfigDict, Field

SWAGGER_VERSION = "2.0"

# Swagger 2.0 Path Item field order
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


class SwaggerModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def set_extension(self, name: str, value) -> None:
        """Attach a vendor extension; the name must start with ``x-``."""
        if not name.startswith("x-"):
            raise ValueError(f"Vendor extensions must start with 'x-', got '{name}'")
        self.__pydantic_extra__[name] = value

    @property
    def extensions(self) -> dict:
        return dict(self.__pydantic_extra__ or {})

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Contact(SwaggerModel):
    name: str | None = None
    url: str | None = None
    email: str | None = None


class License(SwaggerModel):
    name: str
    url: str | None = None


class Info(SwaggerModel):
    version: str
    title: str
    description: str | None = None
    terms_of_service: str | None = Field(default=None, alias="termsOfService")
    contact: Contact | None = None
    license: License | None = None


class Parameter(SwaggerModel):
    """A single operation parameter.

    Body parameters carry ``schema``; all others carry ``type``/``format``.
    """

    name: str
    in_: str = Field(alias="in")
    required: bool
    description: str | None = None
    type: str | None = None
    format: str | None = None
    items: dict | None = None
    collection_format: str | None = Field(default=None, alias="collectionFormat")
    enum: list | None = None
    schema_: dict | None = Field(default=None, alias="schema")


class Response(SwaggerModel):
    description: str | None = None
    schema_: dict | None = Field(default=None, alias="schema")


class Operation(SwaggerModel):
    operation_id: str = Field(alias="operationId")
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    responses: dict[str, Response] = Field(default_factory=dict)
    deprecated: bool = False


class SwaggerDocument(SwaggerModel):
    swagger: str = SWAGGER_VERSION
    info: Info
    host: str
    base_path: str = Field(default="/", alias="basePath")
    schemes: list[str] = Field(default_factory=list)
    paths: dict[str, dict[str, Operation]] = Field(default_factory=dict)
    definitions: dict[str, dict] = Field(default_factory=dict)

    def operations(self):
        """Yield ``(path, method, operation)`` for every operation in the document."""
        for path, item in self.paths.items():
            for method, operation in item.items():
                yield path, method, operation

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

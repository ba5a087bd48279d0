"""Generator configuration.

Configuration is built in code as a ``SwaggerConfig`` or loaded from a YAML
file with :func:`load_config`. Filters in a file are referenced as
``package.module:attribute``; classes are instantiated without arguments.
"""

import importlib
import inspect
from pathlib import Path
from typing import Any, Callable
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from swagger_gen.document.models import Contact, License
from swagger_gen.errors import ConfigError

DEFAULT_URL = "http://localhost"


class RequestContext(BaseModel):
    """Scheme and authority of the request the document is generated for."""

    scheme: str = "http"
    host: str = "localhost"

    @classmethod
    def from_url(cls, url: str) -> "RequestContext":
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ConfigError(f"Expected an absolute URL, got '{url}'")
        return cls(scheme=parts.scheme, host=parts.netloc)


class SwaggerConfig(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    version: str
    title: str
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None
    host_resolver: Callable[[RequestContext], str] | None = None
    base_path: str = "/"
    schemes: list[str] | None = None
    document_filters: list[Callable] = []
    operation_filters: list[Callable] = []
    ignore_obsolete_actions: bool = False
    unique_operation_ids: bool = False


def import_string(reference: str) -> Any:
    """Import ``package.module:attr`` (or ``package.module.attr``)."""
    if ":" in reference:
        module_name, _, attr = reference.partition(":")
    else:
        module_name, _, attr = reference.rpartition(".")
    if not module_name or not attr:
        raise ConfigError(f"Invalid reference '{reference}', expected 'package.module:attr'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import module '{module_name}': {e}") from e
    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ConfigError(f"Module '{module_name}' has no attribute '{attr}'") from None
    return target


def _load_filter(reference: str) -> Callable:
    target = import_string(reference)
    if inspect.isclass(target):
        target = target()
    if not callable(target):
        raise ConfigError(f"Filter '{reference}' is not callable")
    return target


def _constant_host(host: str) -> Callable[[RequestContext], str]:
    def resolve(request: RequestContext) -> str:
        return host
    return resolve


def config_from_dict(data: dict, **overrides) -> SwaggerConfig:
    """Build a SwaggerConfig from plain data, as read from a config file."""
    data = {**data, **{k: v for k, v in overrides.items() if v is not None}}
    host = data.pop("host", None)
    if host:
        data["host_resolver"] = _constant_host(host)
    data["document_filters"] = [_load_filter(r) for r in data.get("document_filters") or []]
    data["operation_filters"] = [_load_filter(r) for r in data.get("operation_filters") or []]
    try:
        return SwaggerConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(file_path: Path, **overrides) -> SwaggerConfig:
    """Load a YAML configuration file; keyword overrides win over file values."""
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{file_path} must contain a mapping")
    return config_from_dict(data, **overrides)

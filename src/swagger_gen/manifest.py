"""Action manifest parser.

Reads a YAML or JSON manifest describing types and actions into
TypeDescriptor and ApiOperationDescriptor models.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from swagger_gen.document.actions import ApiOperationDescriptor, ParameterDescriptor
from swagger_gen.errors import ManifestError
from swagger_gen.schema.builder import PRIMITIVE_SCHEMAS
from swagger_gen.schema.descriptor import TypeDescriptor, TypeKind

_WRAPPERS = {
    "array": TypeDescriptor.of_array,
    "dict": TypeDescriptor.of_dictionary,
    "nullable": TypeDescriptor.of_nullable,
}


def parse_manifest(file_path: Path) -> list[ApiOperationDescriptor]:
    """Parse a manifest file into a list of ApiOperationDescriptor."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {file_path}: {e}") from e
    if not isinstance(doc, dict):
        raise ManifestError(f"{file_path} must contain a mapping with 'types' and 'actions'")
    return load_manifest(doc)


def load_manifest(doc: dict) -> list[ApiOperationDescriptor]:
    entries = doc.get("types") or {}
    if not isinstance(entries, dict):
        raise ManifestError("'types' must be a mapping of type names to definitions")
    actions = doc.get("actions") or []
    if not isinstance(actions, list):
        raise ManifestError("'actions' must be a list")
    types = _parse_types(entries)
    return [_parse_action(a, types) for a in actions]


def _parse_types(entries: dict) -> dict[str, TypeDescriptor]:
    # First pass creates every named type so members can refer to any of them
    types: dict[str, TypeDescriptor] = {}
    for key, entry in entries.items():
        if not isinstance(entry, dict):
            raise ManifestError(f"Type '{key}' must be a mapping, got {entry!r}")
        kind = entry.get("kind", "object")
        identity = entry.get("identity", key)
        if kind == TypeKind.OBJECT:
            types[key] = TypeDescriptor.of_object(identity, name=key, description=entry.get("description"))
        elif kind == TypeKind.ENUM:
            types[key] = TypeDescriptor.of_enum(
                identity, entry.get("values", []), enum_type=entry.get("type", "string"), name=key
            )
        else:
            raise ManifestError(f"Type '{key}' has unsupported kind '{kind}'")

    for key, entry in entries.items():
        members = entry.get("members") or {}
        if not isinstance(members, dict):
            raise ManifestError(f"Members of type '{key}' must be a mapping")
        for member_name, ref in members.items():
            description = None
            if isinstance(ref, dict) and "type" in ref:
                description = ref.get("description")
                ref = ref["type"]
            types[key].add_member(member_name, _resolve_ref(ref, types), description)
    return types


def _resolve_ref(ref, types: dict[str, TypeDescriptor]) -> TypeDescriptor:
    if isinstance(ref, str):
        if ref in types:
            return types[ref]
        if ref in PRIMITIVE_SCHEMAS:
            return TypeDescriptor.of_primitive(ref)
        raise ManifestError(f"Unknown type '{ref}'")
    if isinstance(ref, dict) and len(ref) == 1:
        (wrapper, inner), = ref.items()
        if wrapper in _WRAPPERS:
            return _WRAPPERS[wrapper](_resolve_ref(inner, types))
    raise ManifestError(f"Invalid type reference {ref!r}")


def _parse_action(entry: dict, types: dict[str, TypeDescriptor]) -> ApiOperationDescriptor:
    if not isinstance(entry, dict):
        raise ManifestError(f"Action must be a mapping, got {entry!r}")
    response = entry.get("response")
    try:
        return ApiOperationDescriptor(
            method=entry.get("method", "GET"),
            path=entry["path"],
            name=entry["name"],
            group=entry.get("group"),
            parameters=[_parse_parameter(p, types) for p in entry.get("parameters") or []],
            response_type=_resolve_ref(response, types) if response is not None else None,
            consumes=entry.get("consumes", []),
            produces=entry.get("produces", []),
            deprecated=entry.get("deprecated", False),
        )
    except KeyError as e:
        raise ManifestError(f"Action is missing required key {e}: {entry!r}") from None
    except ValidationError as e:
        raise ManifestError(f"Invalid action {entry.get('name')!r}: {e}") from e


def _parse_parameter(entry: dict, types: dict[str, TypeDescriptor]) -> ParameterDescriptor:
    return ParameterDescriptor(
        name=entry["name"],
        location=entry.get("in", "query"),
        type=_resolve_ref(entry.get("type", "string"), types),
        required=entry.get("required", True),
        description=entry.get("description"),
    )

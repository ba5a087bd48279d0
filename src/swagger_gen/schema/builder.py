"""Type schema builder: maps a single TypeDescriptor to a JSON schema dict."""

from typing import Callable

from swagger_gen.errors import UnresolvableTypeError
from swagger_gen.schema.descriptor import TypeDescriptor, TypeKind

Resolver = Callable[[TypeDescriptor], dict]

# primitive name -> (type, format)
PRIMITIVE_SCHEMAS: dict[str, tuple[str, str | None]] = {
    "int8": ("integer", "int32"),
    "int16": ("integer", "int32"),
    "int32": ("integer", "int32"),
    "int64": ("integer", "int64"),
    "float": ("number", "float"),
    "double": ("number", "double"),
    "decimal": ("number", "double"),
    "string": ("string", None),
    "boolean": ("boolean", None),
    "byte": ("string", "byte"),
    "binary": ("string", "binary"),
    "date": ("string", "date"),
    "date-time": ("string", "date-time"),
    "uuid": ("string", "uuid"),
    "object": ("object", None),
}


def primitive_schema(primitive: str) -> dict:
    """Return the inline schema for a primitive name."""
    try:
        type_, fmt = PRIMITIVE_SCHEMAS[primitive]
    except KeyError:
        raise UnresolvableTypeError(primitive, "unknown primitive") from None
    schema = {"type": type_}
    if fmt:
        schema["format"] = fmt
    return schema


class SchemaBuilder:
    """Builds inline schemas; nested types are resolved through a callback.

    The callback is normally ``SchemaRegistry.resolve``, which is what turns
    nested object types into ``$ref`` pointers and stops recursion on cycles.
    """

    def build(self, descriptor: TypeDescriptor, resolve: Resolver) -> dict:
        try:
            kind = TypeKind(descriptor.kind)
        except ValueError:
            raise UnresolvableTypeError(descriptor.identity, f"unknown kind '{descriptor.kind}'") from None

        if kind == TypeKind.PRIMITIVE:
            if descriptor.primitive is None:
                raise UnresolvableTypeError(descriptor.identity, "primitive without a name")
            return primitive_schema(descriptor.primitive)
        if kind == TypeKind.ENUM:
            return self._build_enum(descriptor)
        if kind == TypeKind.ARRAY:
            return {"type": "array", "items": resolve(self._item(descriptor))}
        if kind == TypeKind.DICTIONARY:
            return {"type": "object", "additionalProperties": resolve(self._item(descriptor))}
        if kind == TypeKind.NULLABLE:
            return resolve(self._item(descriptor))
        return self._build_object(descriptor, resolve)

    def _item(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        if descriptor.item is None:
            raise UnresolvableTypeError(descriptor.identity, f"{descriptor.kind} without an item type")
        return descriptor.item

    def _build_enum(self, descriptor: TypeDescriptor) -> dict:
        if descriptor.enum_type == "string":
            schema = {"type": "string"}
        else:
            schema = primitive_schema(descriptor.enum_type)
            if schema["type"] != "integer":
                raise UnresolvableTypeError(
                    descriptor.identity, f"enum backed by unsupported type '{descriptor.enum_type}'"
                )
        schema["enum"] = list(descriptor.enum_values)
        return schema

    def _build_object(self, descriptor: TypeDescriptor, resolve: Resolver) -> dict:
        properties = {}
        required = []
        for member in descriptor.members:
            member_schema = resolve(member.type)
            if member.description and "$ref" not in member_schema:
                member_schema = {**member_schema, "description": member.description}
            properties[member.name] = member_schema
            if not member.type.is_nullable:
                required.append(member.name)

        schema: dict = {}
        if descriptor.description:
            schema["description"] = descriptor.description
        schema["type"] = "object"
        schema["properties"] = properties
        # Swagger 2.0 forbids an empty "required" array
        if required:
            schema["required"] = required
        return schema

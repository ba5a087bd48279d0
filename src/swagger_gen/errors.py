"""Exceptions raised while generating a Swagger document.

Every failure aborts the current generation run; nothing is retried.
"""


class SwaggerGenError(Exception):
    """Base class for all swagger-gen errors."""


class ConflictError(SwaggerGenError):
    """Two distinct actions were mapped to the same path and method."""

    def __init__(self, path: str, method: str, first: str, second: str):
        self.path = path
        self.method = method
        self.first = first
        self.second = second
        super().__init__(
            f"Conflicting actions for {method.upper()} {path}: "
            f"'{first}' and '{second}'. Only one operation per method and path is allowed."
        )


class UnresolvableTypeError(SwaggerGenError):
    """A type descriptor could not be turned into a schema."""

    def __init__(self, identity: str, reason: str = "unsupported type"):
        self.identity = identity
        self.reason = reason
        super().__init__(f"Cannot resolve type '{identity}': {reason}")


class NamingCollisionError(SwaggerGenError):
    """No unique definition name could be derived for a type."""

    def __init__(self, base_name: str, attempts: int):
        self.base_name = base_name
        self.attempts = attempts
        super().__init__(
            f"Could not find a unique definition name for '{base_name}' after {attempts} attempts"
        )


class FilterError(SwaggerGenError):
    """A document or operation filter failed or returned an invalid value."""


class ManifestError(SwaggerGenError):
    """The action/type manifest is malformed."""


class ConfigError(SwaggerGenError):
    """The generator configuration is malformed."""


class DuplicateOperationIdError(SwaggerGenError):
    """Operations on different paths or methods share an operationId."""

    def __init__(self, operation_id: str, first: tuple[str, str], second: tuple[str, str]):
        self.operation_id = operation_id
        self.first = first
        self.second = second
        super().__init__(
            f"operationId '{operation_id}' is used by both "
            f"{first[1].upper()} {first[0]} and {second[1].upper()} {second[0]}"
        )

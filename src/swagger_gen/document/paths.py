"""Route template helpers."""

import re

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")
_MULTIPLE_SLASHES = re.compile(r"/{2,}")


def _placeholder_name(raw: str) -> str:
    # {*rest}, {id:int}, {id?} and {id=5} all name the "id"/"rest" parameter
    name = raw.lstrip("*")
    for sep in (":", "=", "?"):
        name = name.split(sep, 1)[0]
    return name.strip()


def normalize_path(template: str) -> str:
    """Normalize a route template into a Swagger path key.

    >>> normalize_path("products//{id:int}/?expand=true")
    '/products/{id}'
    """
    path = _PLACEHOLDER.sub(lambda m: "{" + _placeholder_name(m.group(1)) + "}", template)
    path = path.split("?", 1)[0].strip()
    path = _MULTIPLE_SLASHES.sub("/", "/" + path)
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def template_parameters(template: str) -> list[str]:
    """Placeholder names of a route template, in order of appearance."""
    return [_placeholder_name(m.group(1)) for m in _PLACEHOLDER.finditer(template)]

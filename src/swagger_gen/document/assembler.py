"""Document assembler: groups operations into paths and builds the document."""

import logging
from typing import Iterable

from swagger_gen.config import RequestContext, SwaggerConfig
from swagger_gen.document.actions import ApiOperationDescriptor
from swagger_gen.document.models import HTTP_METHODS, Info, Operation, SwaggerDocument
from swagger_gen.document.paths import normalize_path
from swagger_gen.errors import ConflictError, DuplicateOperationIdError
from swagger_gen.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


class DocumentAssembler:
    def __init__(self, config: SwaggerConfig):
        self.config = config

    def assemble(
        self,
        operations: Iterable[tuple[ApiOperationDescriptor, Operation]],
        registry: SchemaRegistry,
        request: RequestContext | None = None,
    ) -> SwaggerDocument:
        """Build the document from ``(action, operation)`` pairs.

        Raises ConflictError when two distinct actions share a path and method.
        """
        request = request or RequestContext()
        return SwaggerDocument(
            info=self.build_info(),
            host=self.resolve_host(request),
            base_path=self.config.base_path,
            schemes=list(self.config.schemes) if self.config.schemes else [request.scheme],
            paths=self.group_paths(operations),
            definitions=dict(registry.definitions),
        )

    def build_info(self) -> Info:
        config = self.config
        return Info(
            version=config.version,
            title=config.title,
            description=config.description,
            terms_of_service=config.terms_of_service,
            contact=config.contact,
            license=config.license,
        )

    def resolve_host(self, request: RequestContext) -> str:
        if self.config.host_resolver is not None:
            return self.config.host_resolver(request)
        return request.host

    def group_paths(
        self, operations: Iterable[tuple[ApiOperationDescriptor, Operation]]
    ) -> dict[str, dict[str, Operation]]:
        grouped: dict[str, dict[str, tuple[ApiOperationDescriptor, Operation]]] = {}
        owners_by_operation_id: dict[str, tuple[str, str]] = {}

        for action, operation in operations:
            path = normalize_path(action.path)
            method = action.method.lower()
            item = grouped.setdefault(path, {})

            if method in item:
                existing = item[method][0]
                if existing.identity != action.identity:
                    raise ConflictError(path, method, existing.identity, action.identity)
                logger.debug("Skipping repeated registration of %s for %s %s", action.identity, method, path)
                continue

            self._check_operation_id(operation, path, method, owners_by_operation_id)
            item[method] = (action, operation)

        # Path item keys follow the Swagger field order
        return {
            path: {m: item[m][1] for m in HTTP_METHODS if m in item}
            for path, item in grouped.items()
        }

    def _check_operation_id(self, operation: Operation, path: str, method: str, owners: dict) -> None:
        owner = owners.get(operation.operation_id)
        if owner is None:
            owners[operation.operation_id] = (path, method)
            return
        if self.config.unique_operation_ids:
            raise DuplicateOperationIdError(operation.operation_id, owner, (path, method))
        logger.warning(
            "operationId '%s' is used by both %s %s and %s %s",
            operation.operation_id, owner[1].upper(), owner[0], method.upper(), path,
        )

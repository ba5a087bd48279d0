"""Filter pipeline: ordered post-processing of operations and documents.

An operation filter is called as ``f(operation, action)`` and a document
filter as ``f(document)``. A filter either returns the replacement value or
``None`` to keep the (possibly mutated) input.
"""

import logging
from typing import Callable

from swagger_gen.document.actions import ApiOperationDescriptor
from swagger_gen.document.models import Operation, SwaggerDocument
from swagger_gen.errors import FilterError

logger = logging.getLogger(__name__)

OperationFilter = Callable[[Operation, ApiOperationDescriptor], Operation | None]
DocumentFilter = Callable[[SwaggerDocument], SwaggerDocument | None]


def filter_name(f) -> str:
    return getattr(f, "__qualname__", None) or type(f).__qualname__


class FilterPipeline:
    def __init__(
        self,
        document_filters: list[DocumentFilter] | None = None,
        operation_filters: list[OperationFilter] | None = None,
    ):
        self.document_filters = list(document_filters or [])
        self.operation_filters = list(operation_filters or [])

    def apply_operation(self, operation: Operation, action: ApiOperationDescriptor) -> Operation:
        for f in self.operation_filters:
            try:
                result = f(operation, action)
            except Exception as e:
                raise FilterError(f"Operation filter {filter_name(f)} failed on {action.identity}: {e}") from e
            if result is None:
                continue
            if not isinstance(result, Operation):
                raise FilterError(
                    f"Operation filter {filter_name(f)} returned {type(result).__name__}, expected Operation"
                )
            operation = result
        return operation

    def apply_document(self, document: SwaggerDocument) -> SwaggerDocument:
        for f in self.document_filters:
            logger.debug("Applying document filter %s", filter_name(f))
            try:
                result = f(document)
            except Exception as e:
                raise FilterError(f"Document filter {filter_name(f)} failed: {e}") from e
            if result is None:
                continue
            if not isinstance(result, SwaggerDocument):
                raise FilterError(
                    f"Document filter {filter_name(f)} returned {type(result).__name__}, expected SwaggerDocument"
                )
            document = result
        return document

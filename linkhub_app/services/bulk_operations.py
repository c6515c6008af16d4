from typing import Callable, Dict, Iterable, Optional

import structlog

from linkhub_app.exceptions import LinkHubError, OperationError
from linkhub_app.schemas.url import BulkOperationResponse
from linkhub_app.storage.mapping_store import MappingStore

logger = structlog.get_logger()


class BulkOperationExecutor:
    """
    Applies one operation to many codes, each item on its own.

    A failing item is reported and skipped; the batch itself never fails.
    """

    def __init__(self, store: MappingStore):
        self.store = store
        self._operations: Dict[str, Callable[[str, Optional[int]], object]] = {
            "delete": lambda code, owner_id: store.delete(code, owner_id=owner_id),
            "activate": lambda code, owner_id: store.set_active(code, True, owner_id=owner_id),
            "deactivate": lambda code, owner_id: store.set_active(code, False, owner_id=owner_id),
        }

    def apply(
        self,
        short_codes: Iterable[str],
        operation: str,
        owner_id: Optional[int] = None
    ) -> BulkOperationResponse:
        report = BulkOperationResponse()

        for short_code in short_codes:
            try:
                self._apply_one(short_code, operation, owner_id)
            except LinkHubError as e:
                logger.debug("bulk_item_failed", short_code=short_code, operation=operation, reason=e.message)
                report.failure_count += 1
                report.failed_items.append(short_code)
                continue

            report.success_count += 1

        if report.failure_count > 0:
            report.success = False
            report.message = f"Bulk operation completed with {report.failure_count} failures"

        logger.info(
            "bulk_operation_completed",
            operation=operation,
            success_count=report.success_count,
            failure_count=report.failure_count
        )
        return report

    def _apply_one(self, short_code: str, operation: str, owner_id: Optional[int]) -> None:
        handler = self._operations.get((operation or "").lower())
        if handler is None:
            raise OperationError(f"Unknown operation: {operation}")

        handler(short_code, owner_id)

"""
Optimistic flag toggles.

A toggle flips the flag on the local item straight away and then asks the
server. Each toggle is a small transaction:

    PENDING ──server accepts──► COMMITTED     (item replaced by server rendering)
       └─────server rejects───► ROLLED_BACK   (flag restored, user notified)

Rollback lives in one place (_roll_back). After a successful archive the
user can undo(), which runs the same toggle with the original value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from slyp.client.api_client import ApiError, SlypApiClient
from slyp.client.item import SlypItem
from slyp.shared.core.logging import get_logger

logger = get_logger(__name__)


class TransactionState(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class ToggleTransaction:
    """One optimistic flag change."""

    field: str
    original: bool
    value: bool
    state: TransactionState = TransactionState.PENDING
    error: Optional[ApiError] = None


class OptimisticToggle:
    """Optimistic archive/favourite/delete for one item."""

    def __init__(
        self,
        item: SlypItem,
        api: SlypApiClient,
        notify: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.item = item
        self.api = api
        self._notify = notify or (lambda message: None)
        self._undoable: Optional[ToggleTransaction] = None

    @property
    def can_undo(self) -> bool:
        return self._undoable is not None

    async def toggle(self, field: str, value: bool) -> ToggleTransaction:
        """Flip `field` locally, then confirm with the server or roll back."""
        transaction = ToggleTransaction(field=field, original=self.item.get_flag(field), value=value)
        self.item.set_flag(field, value)

        try:
            data = await self.api.update_user_slyp(self.item.id, **{field: value})
        except ApiError as e:
            self._roll_back(transaction, e)
            return transaction

        transaction.state = TransactionState.COMMITTED
        self.item.update(data)
        return transaction

    def _roll_back(self, transaction: ToggleTransaction, error: ApiError) -> None:
        self.item.set_flag(transaction.field, transaction.original)
        transaction.state = TransactionState.ROLLED_BACK
        transaction.error = error
        logger.info(
            "Toggle rolled back",
            user_slyp_id=self.item.id,
            field=transaction.field,
            error_code=error.error_code,
        )
        self._notify(error.message)

    async def archive(self, value: bool = True) -> ToggleTransaction:
        """Archive (or unarchive); a committed archive can be undone."""
        transaction = await self.toggle("archived", value)
        if transaction.state == TransactionState.COMMITTED:
            self._undoable = transaction
            self._notify("Archived" if value else "Moved back to your feed")
        return transaction

    async def favourite(self, value: bool = True) -> ToggleTransaction:
        return await self.toggle("favourite", value)

    async def delete(self) -> ToggleTransaction:
        return await self.toggle("deleted", True)

    async def undo(self) -> Optional[ToggleTransaction]:
        """Re-run the last committed archive with its original value."""
        if self._undoable is None:
            return None
        transaction, self._undoable = self._undoable, None
        return await self.toggle(transaction.field, transaction.original)

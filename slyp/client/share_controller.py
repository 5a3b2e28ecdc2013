"""
Share Interaction Controller

State of the reslyp box attached to one slyp in the feed.

States:
=======
    idle ──add_recipient()──► armed ──submit()──► sending ──► done  (success)
      ▲                         │                    │
      └──remove_recipient()─────┘                    └──────► idle  (failure)
         (last one removed)

    done behaves like idle: adding a recipient arms the box again.

Attention:
==========
`attention` is set while the pointer is over the item. Leaving the item
(take_attention) only clears it when nothing is armed or in flight, so an
armed box does not collapse under the user.

Sending:
========
Only one send can be in flight. After an answer from the API the item is
refreshed from the server. Whatever the outcome, even an unexpected
exception, the recipient list is cleared and subscribers are told; the box
then lands in `done` (success) or `idle` (failure).
"""

from enum import Enum
from typing import Callable, Optional

from email_validator import EmailNotValidError, validate_email

from slyp.client.api_client import ApiError, SlypApiClient
from slyp.client.item import SlypItem
from slyp.shared.core.logging import get_logger

logger = get_logger(__name__)


class ShareState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    SENDING = "sending"
    DONE = "done"


class ShareEvent(str, Enum):
    """What a subscriber is told about."""

    ARMED = "armed"
    DISARMED = "disarmed"
    RECIPIENT_REJECTED = "recipient_rejected"
    ATTENTION_CHANGED = "attention_changed"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"


ControllerObserver = Callable[["ShareInteractionController", ShareEvent], None]
Notifier = Callable[[str], None]


def _is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class ShareInteractionController:
    """Reslyp box for one item. Transitions happen only through the methods below."""

    def __init__(
        self,
        item: SlypItem,
        api: SlypApiClient,
        notify: Optional[Notifier] = None,
    ) -> None:
        """
        Args:
            item: The slyp being shared
            api: API client of the signed-in user
            notify: Shows a transient message to the user (toast)
        """
        self.item = item
        self.api = api
        self._notify = notify or (lambda message: None)
        self._observers: list[ControllerObserver] = []
        self._recipients: list[str] = []
        self.state = ShareState.IDLE
        self.attention = False
        self.last_error: Optional[ApiError] = None

    @property
    def recipients(self) -> list[str]:
        return list(self._recipients)

    @property
    def can_reslyp(self) -> bool:
        return self.state == ShareState.ARMED

    def subscribe(self, observer: ControllerObserver) -> Callable[[], None]:
        """Call `observer(controller, event)` on every transition. Returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _emit(self, event: ShareEvent) -> None:
        for observer in list(self._observers):
            observer(self, event)

    # ═══════════════════════════════════════════════════════════════════════════
    # RECIPIENTS
    # ═══════════════════════════════════════════════════════════════════════════

    def add_recipient(self, email: str) -> bool:
        """
        Select a recipient.

        Returns False (and tells the user) when the address is malformed or
        the slyp was already shared with that person, or while a send is in
        flight. Only accepted recipients arm the box.
        """
        if self.state == ShareState.SENDING:
            return False

        candidate = email.strip().lower()
        if not _is_valid_email(candidate):
            self._notify(f"{candidate or 'That'} is not a valid email address")
            self._emit(ShareEvent.RECIPIENT_REJECTED)
            return False
        if candidate in self.item.friend_emails:
            self._notify(f"You already shared this with {candidate}")
            self._emit(ShareEvent.RECIPIENT_REJECTED)
            return False

        if candidate not in self._recipients:
            self._recipients.append(candidate)
        if self.state in (ShareState.IDLE, ShareState.DONE):
            self.state = ShareState.ARMED
            self._emit(ShareEvent.ARMED)
        return True

    def remove_recipient(self, email: str) -> None:
        """Deselect a recipient; removing the last one disarms the box."""
        candidate = email.strip().lower()
        if candidate in self._recipients:
            self._recipients.remove(candidate)
        if not self._recipients and self.state == ShareState.ARMED:
            self.state = ShareState.IDLE
            self._emit(ShareEvent.DISARMED)

    # ═══════════════════════════════════════════════════════════════════════════
    # ATTENTION
    # ═══════════════════════════════════════════════════════════════════════════

    def give_attention(self) -> None:
        if not self.attention:
            self.attention = True
            self._emit(ShareEvent.ATTENTION_CHANGED)

    def take_attention(self) -> bool:
        """Clear attention unless the box is armed or sending. Returns whether it was cleared."""
        if self.state in (ShareState.ARMED, ShareState.SENDING):
            return False
        if self.attention:
            self.attention = False
            self._emit(ShareEvent.ATTENTION_CHANGED)
        return True

    # ═══════════════════════════════════════════════════════════════════════════
    # SUBMIT
    # ═══════════════════════════════════════════════════════════════════════════

    async def submit(self, comment: str) -> bool:
        """
        Send the slyp to the selected recipients.

        Returns True on success. Refused (False, no request made) unless the
        box is armed. However the send ends, even by an unexpected exception
        (which still propagates), the recipients are cleared and the box
        leaves `sending`.
        """
        if self.state != ShareState.ARMED:
            return False

        emails = list(self._recipients)
        self.state = ShareState.SENDING
        self.last_error = None
        self._emit(ShareEvent.SENDING)

        succeeded = False
        try:
            try:
                await self.api.reslyp(self.item.slyp_id, emails, comment)
                succeeded = True
            except ApiError as e:
                self.last_error = e
                logger.info("Reslyp rejected", slyp_id=self.item.slyp_id, error_code=e.error_code)

            try:
                await self.item.refresh(self.api)
            except ApiError as e:
                logger.warning("Item refresh failed", user_slyp_id=self.item.id, error_code=e.error_code)
        finally:
            self._recipients.clear()
            self._settle(succeeded, len(emails))
        return succeeded

    def _settle(self, succeeded: bool, sent_count: int) -> None:
        if succeeded:
            self._notify(f"Reslyp sent to {sent_count} {'person' if sent_count == 1 else 'people'}")
            self.state = ShareState.DONE
            self._emit(ShareEvent.SENT)
        else:
            message = self.last_error.message if self.last_error else "Reslyp failed, please try again"
            self._notify(message)
            self.state = ShareState.IDLE
            self._emit(ShareEvent.FAILED)

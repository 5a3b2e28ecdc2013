"""
Client Package

Client-side state for the feed: the API client, the observable item model,
the reslyp box state machine and optimistic flag toggles.

Usage:
======
    from slyp.client import SlypApiClient, SlypItem, ShareInteractionController

    api = SlypApiClient(token=token)
    item = SlypItem(await api.get_user_slyp(user_slyp_id))
    box = ShareInteractionController(item, api, notify=toast)
    box.add_recipient("friend@example.com")
    await box.submit("worth a read")
"""

from slyp.client.api_client import ApiError, SlypApiClient
from slyp.client.item import SlypItem
from slyp.client.optimistic import OptimisticToggle, ToggleTransaction, TransactionState
from slyp.client.share_controller import ShareEvent, ShareInteractionController, ShareState

__all__ = [
    "ApiError",
    "SlypApiClient",
    "SlypItem",
    "OptimisticToggle",
    "ToggleTransaction",
    "TransactionState",
    "ShareEvent",
    "ShareInteractionController",
    "ShareState",
]

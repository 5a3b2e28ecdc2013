"""
Client-side model of one UserSlyp.

Holds the last JSON rendering of the membership and tells subscribers
whenever it changes, so views re-render from one place.
"""

from typing import Any, Callable

from slyp.client.api_client import SlypApiClient

ItemObserver = Callable[["SlypItem"], None]


class SlypItem:
    """Observable UserSlyp as seen by the client."""

    FLAGS = ("archived", "favourite", "deleted", "unseen")

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = dict(data)
        self._observers: list[ItemObserver] = []

    # ═══════════════════════════════════════════════════════════════════════════
    # OBSERVERS
    # ═══════════════════════════════════════════════════════════════════════════

    def subscribe(self, observer: ItemObserver) -> Callable[[], None]:
        """Call `observer(item)` on every change. Returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _changed(self) -> None:
        for observer in list(self._observers):
            observer(self)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def id(self) -> str:
        return str(self._data["id"])

    @property
    def slyp_id(self) -> str:
        return str(self._data["slyp_id"])

    @property
    def data(self) -> dict[str, Any]:
        return dict(self._data)

    @property
    def friend_emails(self) -> set[str]:
        return {friend["email"].lower() for friend in self._data.get("friends", [])}

    def get_flag(self, field: str) -> bool:
        self._check_flag(field)
        return bool(self._data.get(field, False))

    def set_flag(self, field: str, value: bool) -> None:
        self._check_flag(field)
        self._data[field] = value
        self._changed()

    def update(self, data: dict[str, Any]) -> None:
        """Replace the rendering with a fresh one from the server."""
        self._data = dict(data)
        self._changed()

    async def refresh(self, api: SlypApiClient) -> None:
        """Reload the rendering from the server."""
        self.update(await api.get_user_slyp(self.id))

    def _check_flag(self, field: str) -> None:
        if field not in self.FLAGS:
            raise ValueError(f"Unknown flag '{field}'")

"""
Session storage for the Billed UI.

The session lives in a string key-value mapping laid out like the
browser's localStorage:

    "user" -> '{"type": "Employee", "email": "a@a"}'
    "jwt"  -> '<token>'   (only with the HTTP store)

Controllers read the session through SessionStore.get(); only the login
and logout handlers write or clear it.

Optional Environment Variables:
    BILLED_UI_SESSION_DIR: Persist the session on disk with diskcache
"""

from collections.abc import MutableMapping

from billed_ui.lib import logs, objects, paths
from billed_ui.lib.caches import DiskStorage
from billed_ui.models.session import NoSession, UserSession, parse_session

LOG = logs.logger(__file__)

USER_KEY = "user"
TOKEN_KEY = "jwt"


class SessionStore:
    """
    Read/clear access to the stored user.

    Args:
        storage: Backing mapping; a new in-memory dict when omitted.
    """

    def __init__(self, storage: MutableMapping[str, str] | None = None) -> None:
        self._storage: MutableMapping[str, str] = {} if storage is None else storage

    @property
    def storage(self) -> MutableMapping[str, str]:
        return self._storage

    def get(self) -> UserSession | NoSession:
        """Return the current session, validated."""
        session = parse_session(self._storage.get(USER_KEY))
        if isinstance(session, NoSession) and session.reason != "missing":
            LOG.warning("Ignoring stored user: %s", session.reason)
        return session

    def token(self) -> str | None:
        """Return the stored JWT, if any."""
        return self._storage.get(TOKEN_KEY) or None

    def set(self, session: UserSession, token: str | None = None) -> None:
        """Store the logged-in user (and its JWT)."""
        self._storage[USER_KEY] = objects.to_json(session.to_dict())
        if token:
            self._storage[TOKEN_KEY] = token
        LOG.info("Session opened - type:%s", session.role.value)

    def clear(self) -> None:
        """Forget everything, like localStorage.clear()."""
        self._storage.clear()
        LOG.info("Session cleared")


def default_session_store() -> SessionStore:
    """
    Build the session store for the running process.

    Uses diskcache storage when BILLED_UI_SESSION_DIR is set, memory otherwise.
    """
    directory = paths.session_dir()
    if directory is None:
        return SessionStore()
    LOG.info("Persisting session in %s", directory)
    return SessionStore(DiskStorage(directory))

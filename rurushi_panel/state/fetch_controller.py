import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from ..client import ApiClient
from ..models import ConfigResponse, FileListResponse, ShowListResponse

T = TypeVar("T")


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class StalePolicy(str, Enum):
    # Commit only the result of the most recently issued fetch
    LATEST_ISSUED = "latest_issued"
    # Whichever fetch resolves last wins, regardless of issue order
    LAST_RESOLVED = "last_resolved"


@dataclass(frozen=True)
class FetchState(Generic[T]):
    """Read-only view of a controller at one point in time."""
    status: FetchStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status == FetchStatus.LOADING


class ResourceFetchController(Generic[T]):
    """
    Owns the load/success/error lifecycle of one remote resource.

    Idle -> Loading on start() and on every refetch(), then Success(value) or
    Error(message). The last good value survives a failed refetch. Results
    that resolve after close() are dropped, and under LATEST_ISSUED so are
    results of fetches that were superseded by a newer refetch().
    """

    def __init__(self, name: str, fetcher: Callable[[], Awaitable[T]],
                 policy: StalePolicy = StalePolicy.LATEST_ISSUED):
        self.name = name
        self._fetcher = fetcher
        self.policy = StalePolicy(policy)
        self._status = FetchStatus.IDLE
        self._value: Optional[T] = None
        self._error: Optional[str] = None
        self._issued = 0
        self._closed = False
        self._task: Optional[asyncio.Task] = None

    # --- read side ---

    def snapshot(self) -> FetchState[T]:
        return FetchState(self._status, self._value, self._error)

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def loading(self) -> bool:
        return self._status == FetchStatus.LOADING

    @property
    def closed(self) -> bool:
        return self._closed

    # --- lifecycle ---

    def start(self) -> asyncio.Task:
        """Mount: begins the first fetch immediately. Needs a running loop."""
        self._closed = False
        self._task = asyncio.create_task(self.refetch())
        return self._task

    def close(self) -> None:
        """Unmount: anything still in flight runs to completion but is discarded."""
        self._closed = True

    async def wait_ready(self) -> FetchState[T]:
        if self._task is not None:
            await self._task
        return self.snapshot()

    def _should_commit(self, seq: int) -> bool:
        if self._closed:
            return False
        if self.policy == StalePolicy.LATEST_ISSUED:
            return seq == self._issued
        return True

    async def refetch(self) -> FetchState[T]:
        """
        Runs one fetch and commits its outcome (subject to the stale policy).
        Never raises; failures land in the error field.
        """
        self._issued += 1
        seq = self._issued
        if not self._closed:
            self._status = FetchStatus.LOADING

        try:
            data = await self._fetcher()
        except Exception as e:
            if self._should_commit(seq):
                self._error = str(e) or f"Failed to fetch {self.name}"
                self._status = FetchStatus.ERROR
                print(f"❌ Fetching {self.name} failed: {self._error}")
            else:
                print(f"⚠️ Discarded stale {self.name} error (fetch #{seq})")
        else:
            if self._should_commit(seq):
                self._value = data
                self._error = None
                self._status = FetchStatus.SUCCESS
            else:
                print(f"⚠️ Discarded stale {self.name} result (fetch #{seq})")

        return self.snapshot()


# ==============================================================================
# FACTORIES
# ==============================================================================

def config_controller(client: ApiClient, policy: StalePolicy = StalePolicy.LATEST_ISSUED
                      ) -> ResourceFetchController[ConfigResponse]:
    return ResourceFetchController("config", client.get_config, policy)


def files_controller(client: ApiClient, policy: StalePolicy = StalePolicy.LATEST_ISSUED
                     ) -> ResourceFetchController[FileListResponse]:
    return ResourceFetchController("files", client.get_files, policy)


def shows_controller(client: ApiClient, policy: StalePolicy = StalePolicy.LATEST_ISSUED
                     ) -> ResourceFetchController[ShowListResponse]:
    return ResourceFetchController("shows", client.get_shows, policy)

"""
Request-in-flight state for a single operation
"""
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from portal.services.errors import PortalError, RequestInFlight


class RequestStatus(str, Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass
class RequestState:
    """
    Tagged state of one operation.

    Transitions:
        Idle/Succeeded/Failed -> Loading   (start)
        Loading -> Succeeded               (succeed)
        Loading -> Failed                  (fail)
    """
    status: RequestStatus = RequestStatus.IDLE
    error: Optional[PortalError] = None

    @property
    def is_loading(self) -> bool:
        return self.status == RequestStatus.LOADING

    def start(self):
        if self.is_loading:
            raise RequestInFlight()
        self.status = RequestStatus.LOADING
        self.error = None

    def succeed(self):
        self.status = RequestStatus.SUCCEEDED
        self.error = None

    def fail(self, error: PortalError):
        self.status = RequestStatus.FAILED
        self.error = error

    @contextmanager
    def track(self):
        """Run a block as this operation; PortalErrors are recorded then re-raised"""
        self.start()
        try:
            yield self
        except PortalError as e:
            self.fail(e)
            raise
        except BaseException:
            self.status = RequestStatus.IDLE
            raise
        self.succeed()

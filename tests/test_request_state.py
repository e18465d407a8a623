import pytest

from portal.services.errors import NotFound, RequestInFlight
from portal.services.request_state import RequestState, RequestStatus


def test_success():
    state = RequestState()
    with state.track():
        assert state.is_loading
    assert state.status == RequestStatus.SUCCEEDED
    assert state.error is None


def test_failure_is_recorded():
    state = RequestState()
    with pytest.raises(NotFound):
        with state.track():
            raise NotFound()
    assert state.status == RequestStatus.FAILED
    assert isinstance(state.error, NotFound)


def test_retry_after_failure():
    state = RequestState()
    state.fail(NotFound())
    with state.track():
        pass
    assert state.status == RequestStatus.SUCCEEDED


def test_start_while_loading():
    state = RequestState()
    state.start()
    with pytest.raises(RequestInFlight):
        state.start()
    assert state.is_loading


def test_unexpected_error_resets():
    state = RequestState()
    with pytest.raises(KeyError):
        with state.track():
            raise KeyError('x')
    assert state.status == RequestStatus.IDLE

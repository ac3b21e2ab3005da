"""Unit tests for request state invariants and slot token handling."""

import pytest
from pydantic import ValidationError

from glycoatlas.state import RequestState, Slot, Status


def _assert_consistent(state: RequestState) -> None:
    assert (state.error is not None) == (state.status is Status.ERROR)
    assert (state.data is not None) == (state.status is Status.SUCCESS)


def test_constructors_satisfy_invariant():
    for state in (
        RequestState.idle(),
        RequestState.loading(),
        RequestState.succeeded(["x"]),
        RequestState.failed("boom"),
    ):
        _assert_consistent(state)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": Status.SUCCESS},
        {"status": Status.SUCCESS, "data": [1], "error": "also failed"},
        {"status": Status.ERROR},
        {"status": Status.ERROR, "data": [1], "error": "x"},
        {"status": Status.IDLE, "data": [1]},
        {"status": Status.LOADING, "error": "x"},
    ],
)
def test_inconsistent_states_rejected(kwargs):
    with pytest.raises(ValidationError):
        RequestState(**kwargs)


def test_state_is_immutable():
    state = RequestState.succeeded({"a": 1})
    with pytest.raises(ValidationError):
        state.status = Status.IDLE


def test_slot_lifecycle():
    slot = Slot("search")
    assert slot.state.status is Status.IDLE

    token = slot.start()
    assert slot.state.status is Status.LOADING
    _assert_consistent(slot.state)

    assert slot.resolve(token, ["rows"]) is True
    assert slot.state.status is Status.SUCCESS
    assert slot.state.data == ["rows"]
    _assert_consistent(slot.state)

    token = slot.start()
    assert slot.state.data is None
    assert slot.reject(token, "Failed") is True
    assert slot.state.status is Status.ERROR
    _assert_consistent(slot.state)


def test_stale_token_is_discarded():
    slot = Slot("report")
    first = slot.start()
    second = slot.start()

    assert slot.resolve(second, "newer") is True
    assert slot.resolve(first, "older") is False
    assert slot.reject(first, "older failed") is False
    assert slot.state.data == "newer"


def test_reset_invalidates_in_flight_request():
    slot = Slot("report")
    token = slot.start()
    slot.reset()

    assert slot.state.status is Status.IDLE
    assert slot.resolve(token, "late") is False
    assert slot.state.status is Status.IDLE


def test_settling_twice_is_illegal():
    slot = Slot("search")
    token = slot.start()
    slot.resolve(token, "done")
    with pytest.raises(RuntimeError):
        slot.reject(token, "again")

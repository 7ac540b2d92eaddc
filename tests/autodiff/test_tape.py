import dataclasses

import pytest

from backdiff.autodiff.tape import Tape, TapeEntry


def test_record_returns_value():
    tape = Tape()
    value = object()
    assert tape.record(value, lambda _: None) is value
    assert len(tape) == 1


def test_reverse_order():
    tape = Tape()
    log = []

    for i in range(100):
        tape.record(i, log.append)

    assert tape.run_backward() == 100
    assert log == list(range(99, -1, -1))
    assert len(tape) == 0
    assert tape.run_backward() == 0


def test_record_during_replay():
    tape = Tape()
    log = []

    def update(value):
        log.append(value)

        if value == 1:
            tape.record(2, log.append)

    tape.record(0, log.append)
    tape.record(1, update)
    assert tape.run_backward() == 3
    assert log == [1, 2, 0]


def test_entry_is_frozen():
    entry = TapeEntry(print, 1.0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.value = 2.0  # type: ignore

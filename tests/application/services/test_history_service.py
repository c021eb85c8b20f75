# tests/application/services/test_history_service.py
from application.services.history_service import HISTORY_CAPACITY, append_history
from domain.request import ApiRequest


def test_append_keeps_order() -> None:
    history = append_history([], ApiRequest(id=1))
    history = append_history(history, ApiRequest(id=2))

    assert [r.id for r in history] == [1, 2]


def test_evicts_oldest_past_capacity() -> None:
    history = []
    for i in range(1, 56):
        history = append_history(history, ApiRequest(id=i))

    assert len(history) == HISTORY_CAPACITY == 50
    assert history[0].id == 6
    assert history[-1].id == 55


def test_does_not_mutate_input() -> None:
    original = [ApiRequest(id=1)]

    append_history(original, ApiRequest(id=2), capacity=1)

    assert [r.id for r in original] == [1]


def test_custom_capacity() -> None:
    history = append_history([ApiRequest(id=1), ApiRequest(id=2)], ApiRequest(id=3), capacity=2)

    assert [r.id for r in history] == [2, 3]

import threading

import pytest

from layerlog import ndc
from layerlog.ndc import DiagnosticContext


@pytest.fixture(autouse=True)
def fresh_context():
    ndc.clear()
    yield
    ndc.clear()


def test_empty_context():
    assert ndc.get() == ""
    assert ndc.depth() == 0


def test_push_joins_messages_with_spaces():
    ndc.push("client")
    ndc.push("request")
    assert ndc.get() == "client request"
    assert ndc.depth() == 2


def test_pop_returns_innermost_message():
    ndc.push("outer")
    ndc.push("inner")
    assert ndc.pop() == "inner"
    assert ndc.get() == "outer"
    assert ndc.depth() == 1


def test_pop_on_empty_returns_empty_string():
    assert ndc.pop() == ""
    assert ndc.depth() == 0


def test_push_pop_round_trip():
    ndc.push("a")
    before = ndc.get()
    ndc.push("b")
    ndc.pop()
    assert ndc.get() == before


def test_clear_empties_stack():
    ndc.push("a")
    ndc.push("b")
    ndc.clear()
    assert ndc.depth() == 0
    assert ndc.get() == ""


def test_clone_is_independent():
    ndc.push("a")
    clone = ndc.clone_stack()
    ndc.push("b")
    assert len(clone) == 1
    assert clone[0].message == "a"


def test_inherit_restores_cloned_context():
    ndc.push("x")
    ndc.push("y")
    saved = ndc.clone_stack()
    full = ndc.get()
    ndc.clear()
    ndc.inherit(saved)
    assert ndc.get() == full
    assert ndc.depth() == 2


def test_contexts_are_per_thread():
    ndc.push("main")
    seen = {}

    def worker():
        seen["depth"] = ndc.depth()
        ndc.push("worker")
        seen["get"] = ndc.get()

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()
    assert seen == {"depth": 0, "get": "worker"}
    assert ndc.get() == "main"


def test_child_thread_can_inherit():
    ndc.push("parent")
    saved = ndc.clone_stack()
    seen = {}

    def worker():
        ndc.inherit(saved)
        seen["get"] = ndc.get()

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()
    assert seen["get"] == ndc.get()


def test_set_max_depth_truncates():
    for message in ("a", "b", "c"):
        ndc.push(message)
    ndc.set_max_depth(1)
    assert ndc.depth() == 1
    assert ndc.get() == "a"


def test_set_max_depth_larger_than_depth_keeps_stack():
    ndc.push("a")
    ndc.set_max_depth(5)
    assert ndc.depth() == 1


def test_set_max_depth_rejects_negative():
    with pytest.raises(ValueError):
        ndc.set_max_depth(-1)


def test_diagnostic_context_nesting():
    root = DiagnosticContext("outer")
    inner = root.child("inner")
    assert root.full_message == "outer"
    assert inner.message == "inner"
    assert inner.full_message == "outer inner"
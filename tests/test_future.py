import threading
import time

import pytest

from nstdkit.future import Future


def test_result_of_function_with_args():
    fut = Future()
    fut.start(lambda a, b: a + b, 2, 3)
    assert fut.result() == 5
    assert fut.is_finished()
    assert not fut.is_aborted()


def test_function_without_args():
    fut = Future()
    fut.start(lambda: "done")
    fut.join()
    assert fut.is_finished()
    assert fut.result() == "done"


def test_not_finished_while_running():
    gate = threading.Event()
    fut = Future()
    fut.start(gate.wait)
    assert not fut.is_finished()
    gate.set()
    fut.join()
    assert fut.is_finished()


def test_abort_marks_run_aborted():
    started = threading.Event()
    fut = Future()

    def work():
        started.set()
        while not fut.is_aborting():
            time.sleep(0.001)
        return "stopped"

    fut.start(work)
    assert started.wait(5)
    fut.abort()
    assert fut.is_aborting()
    fut.join()
    assert fut.is_aborted()
    assert not fut.is_finished()
    assert fut.result() == "stopped"


def test_exception_is_raised_from_result():
    def fail():
        raise ValueError("bad input")

    fut = Future()
    fut.start(fail)
    with pytest.raises(ValueError, match="bad input"):
        fut.result()


def test_restart_runs_again_and_clears_abort():
    fut = Future()
    fut.start(lambda: 1)
    fut.abort()
    fut.join()
    fut.start(lambda x: x * 2, 21)
    assert fut.result() == 42
    assert not fut.is_aborting()
    assert fut.is_finished()


def test_idle_future_state():
    fut = Future()
    fut.join()
    assert not fut.is_finished()
    assert not fut.is_aborted()
    assert fut.result() is None


def test_start_rejects_non_callable():
    fut = Future()
    with pytest.raises(TypeError):
        fut.start(5)


def test_bound_method_runs_on_object():
    class Counter:
        def __init__(self):
            self.total = 0

        def add(self, amount):
            self.total += amount
            return self.total

    counter = Counter()
    fut = Future()
    fut.start(counter.add, 4)
    assert fut.result() == 4
    assert counter.total == 4
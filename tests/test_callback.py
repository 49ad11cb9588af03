from nstdkit.callback import Emitter, Listener, connect, disconnect


class Recorder(Listener):
    def __init__(self):
        super().__init__()
        self.calls = []

    def on_value(self, value):
        self.calls.append(("value", value))

    def on_other(self, value):
        self.calls.append(("other", value))


def test_emit_calls_connected_slot_with_args():
    emitter = Emitter()
    rec = Recorder()
    connect(emitter, "changed", rec, rec.on_value)
    emitter.emit("changed", 5)
    assert rec.calls == [("value", 5)]


def test_slots_called_in_connection_order():
    emitter = Emitter()
    rec = Recorder()
    connect(emitter, "changed", rec, rec.on_value)
    connect(emitter, "changed", rec, rec.on_other)
    emitter.emit("changed", 1)
    assert rec.calls == [("value", 1), ("other", 1)]


def test_emit_unconnected_signal_calls_nothing():
    emitter = Emitter()
    rec = Recorder()
    connect(emitter, "changed", rec, rec.on_value)
    emitter.emit("unknown", 1)
    assert rec.calls == []


def test_disconnect_stops_delivery():
    emitter = Emitter()
    rec = Recorder()
    connect(emitter, "changed", rec, rec.on_value)
    disconnect(emitter, "changed", rec, rec.on_value)
    emitter.emit("changed", 1)
    assert rec.calls == []
    assert rec._connections == {}


def test_disconnect_unknown_signal_is_ignored():
    emitter = Emitter()
    rec = Recorder()
    connect(emitter, "a", rec, rec.on_value)
    disconnect(emitter, "b", rec, rec.on_value)
    emitter.emit("a", 2)
    assert rec.calls == [("value", 2)]


def test_connect_rejects_non_callable():
    emitter = Emitter()
    rec = Recorder()
    try:
        connect(emitter, "a", rec, 42)
    except TypeError:
        pass
    else:
        raise AssertionError("expected TypeError")
    emitter.emit("a")
    assert rec.calls == []


def test_connect_during_emit_takes_effect_next_time():
    emitter = Emitter()
    rec = Recorder()

    def adder(value):
        rec.calls.append(("adder", value))
        connect(emitter, "changed", rec, rec.on_value)

    connect(emitter, "changed", rec, adder)
    emitter.emit("changed", 1)
    assert rec.calls == [("adder", 1)]
    disconnect(emitter, "changed", rec, adder)
    emitter.emit("changed", 2)
    assert rec.calls == [("adder", 1), ("value", 2)]


def test_disconnect_during_emit_skips_later_slot():
    emitter = Emitter()
    rec = Recorder()

    def remover(value):
        rec.calls.append(("remover", value))
        disconnect(emitter, "changed", rec, rec.on_value)

    connect(emitter, "changed", rec, remover)
    connect(emitter, "changed", rec, rec.on_value)
    emitter.emit("changed", 3)
    assert rec.calls == [("remover", 3)]
    emitter.emit("changed", 4)
    assert rec.calls == [("remover", 3), ("remover", 4)]


def test_nested_emission_delivers_to_all():
    emitter = Emitter()
    rec = Recorder()
    depth = []

    def reentrant(value):
        depth.append(value)
        if value > 0:
            emitter.emit("changed", value - 1)

    connect(emitter, "changed", rec, reentrant)
    emitter.emit("changed", 2)
    assert depth == [2, 1, 0]
    assert emitter in rec._connections
    emitter.emit("changed", 0)
    assert depth == [2, 1, 0, 0]


def test_listener_close_removes_all_connections():
    emitter = Emitter()
    rec = Recorder()
    connect(emitter, "a", rec, rec.on_value)
    connect(emitter, "b", rec, rec.on_other)
    rec.close()
    emitter.emit("a", 1)
    emitter.emit("b", 1)
    assert rec.calls == []
    assert rec._connections == {}


def test_listener_close_during_emit():
    emitter = Emitter()
    rec = Recorder()

    def closer(value):
        rec.calls.append(("closer", value))
        rec.close()

    connect(emitter, "changed", rec, closer)
    connect(emitter, "changed", rec, rec.on_value)
    emitter.emit("changed", 1)
    assert rec.calls == [("closer", 1)]
    emitter.emit("changed", 2)
    assert rec.calls == [("closer", 1)]


def test_emitter_close_forgets_listener_connections():
    emitter = Emitter()
    other = Emitter()
    rec = Recorder()
    connect(emitter, "a", rec, rec.on_value)
    connect(other, "a", rec, rec.on_other)
    emitter.close()
    assert emitter not in rec._connections
    emitter.emit("a", 1)
    other.emit("a", 2)
    assert rec.calls == [("other", 2)]


def test_emitter_close_during_emit_stops_delivery():
    emitter = Emitter()
    rec = Recorder()

    def closer(value):
        rec.calls.append(("closer", value))
        emitter.close()

    connect(emitter, "changed", rec, closer)
    connect(emitter, "changed", rec, rec.on_value)
    emitter.emit("changed", 7)
    assert rec.calls == [("closer", 7)]
    assert rec._connections == {}


def test_one_listener_many_emitters_independent():
    first = Emitter()
    second = Emitter()
    rec = Recorder()
    connect(first, "x", rec, rec.on_value)
    connect(second, "x", rec, rec.on_value)
    disconnect(first, "x", rec, rec.on_value)
    first.emit("x", 1)
    second.emit("x", 2)
    assert rec.calls == [("value", 2)]
"""Signal/slot connections between emitters and listeners.

An :class:`Emitter` emits named signals; a :class:`Listener` owns the
connections that route those signals to its slots.  Connections made or
broken while a signal is being emitted take effect once the outermost
emission of that signal has finished.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable


class _SlotState(enum.Enum):
    CONNECTED = enum.auto()
    CONNECTING = enum.auto()
    DISCONNECTED = enum.auto()


@dataclass(eq=False)
class _Slot:
    receiver: "Listener"
    callback: Callable[..., Any]
    state: _SlotState


@dataclass(eq=False)
class _Activation:
    invalidated: bool = False


@dataclass(eq=False)
class _SignalData:
    slots: list = field(default_factory=list)
    activations: list = field(default_factory=list)
    dirty: bool = False

    def detach(self, receiver: "Listener", callback: Callable[..., Any]) -> None:
        """Drop the first slot of ``receiver`` bound to ``callback``."""
        for entry in self.slots:
            if (
                entry.receiver is receiver
                and entry.callback == callback
                and entry.state is not _SlotState.DISCONNECTED
            ):
                if self.activations:
                    entry.state = _SlotState.DISCONNECTED
                    self.dirty = True
                else:
                    self.slots.remove(entry)
                return

    def compact(self) -> None:
        kept = []
        for entry in self.slots:
            if entry.state is _SlotState.DISCONNECTED:
                continue
            if entry.state is _SlotState.CONNECTING:
                entry.state = _SlotState.CONNECTED
            kept.append(entry)
        self.slots = kept
        self.dirty = False


class Emitter:
    """An object that emits signals to connected listener slots."""

    def __init__(self) -> None:
        self._signals: dict[Hashable, _SignalData] = {}

    def emit(self, signal: Hashable, *args: Any) -> None:
        """Call every slot connected to ``signal`` with ``args``, in connection order."""
        data = self._signals.get(signal)
        if data is None:
            return
        activation = _Activation()
        data.activations.append(activation)
        try:
            for entry in list(data.slots):
                if activation.invalidated:
                    break
                if entry.state is _SlotState.CONNECTED:
                    entry.callback(*args)
        finally:
            if not activation.invalidated:
                data.activations.remove(activation)
                if not data.activations and data.dirty:
                    data.compact()

    def close(self) -> None:
        """Disconnect every listener and stop any emission in progress."""
        for signal, data in self._signals.items():
            for activation in data.activations:
                activation.invalidated = True
            data.activations.clear()
            for entry in data.slots:
                if entry.state is _SlotState.DISCONNECTED:
                    continue
                entry.receiver._forget(self, signal, entry.callback)
        self._signals.clear()


class Listener:
    """An object owning slots that are connected to emitters."""

    def __init__(self) -> None:
        self._connections: dict[Emitter, list[tuple[Hashable, Callable[..., Any]]]] = {}

    def close(self) -> None:
        """Break every connection that leads to this listener."""
        for emitter, connections in self._connections.items():
            for signal, callback in connections:
                data = emitter._signals.get(signal)
                if data is not None:
                    data.detach(self, callback)
        self._connections.clear()

    def _forget(self, emitter: Emitter, signal: Hashable, callback: Callable[..., Any]) -> None:
        connections = self._connections.get(emitter)
        if connections is None:
            return
        try:
            connections.remove((signal, callback))
        except ValueError:
            return
        if not connections:
            del self._connections[emitter]


def connect(
    emitter: Emitter, signal: Hashable, receiver: Listener, slot: Callable[..., Any]
) -> None:
    """Route ``signal`` of ``emitter`` to ``slot``, owned by ``receiver``."""
    if not callable(slot):
        raise TypeError("slot must be callable")
    data = emitter._signals.setdefault(signal, _SignalData())
    if data.activations:
        state = _SlotState.CONNECTING
        data.dirty = True
    else:
        state = _SlotState.CONNECTED
    data.slots.append(_Slot(receiver, slot, state))
    receiver._connections.setdefault(emitter, []).append((signal, slot))


def disconnect(
    emitter: Emitter, signal: Hashable, receiver: Listener, slot: Callable[..., Any]
) -> None:
    """Break a connection made with :func:`connect`; unknown ones are ignored."""
    data = emitter._signals.get(signal)
    if data is None:
        return
    data.detach(receiver, slot)
    receiver._forget(emitter, signal, slot)
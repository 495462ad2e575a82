"""Groups: named holders of a level and a sink that children inherit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Union

from soralog.level import Level

if TYPE_CHECKING:
    from soralog.sink import Sink

__all__ = ["Group"]


class _Registry(Protocol):
    def get_group(self, name: str) -> Optional["Group"]: ...

    def get_sink(self, name: str) -> Optional["Sink"]: ...


class Group:
    """Keeps a level and a sink, inheriting whatever is not overridden from its parent."""

    def __init__(
        self,
        system: _Registry,
        name: str,
        parent: Optional[str] = None,
        sink: Optional[str] = None,
        level: Optional[Level] = None,
    ) -> None:
        self._system = system
        self._name = name
        self._parent: Optional[Group] = None
        self._sink: Optional[Sink] = None
        self._is_sink_overridden = False
        self._level = Level.OFF
        self._is_level_overridden = False

        if parent is not None:
            parent_group = system.get_group(parent)
            if parent_group is None:
                raise ValueError("Provided parent group does not exist yet")
            self.set_parent_group(parent_group)
        if sink is not None:
            sink_obj = system.get_sink(sink)
            if sink_obj is None:
                raise ValueError("Provided sink does not exist yet")
            self.set_sink(sink_obj)
        if level is not None:
            self.set_level(level)
        elif self._parent is None:
            raise ValueError("Level is not provided for root group")

    def __repr__(self) -> str:
        return f"Group({self._name!r}, level={self._level.name})"

    @property
    def name(self) -> str:
        return self._name

    # Level

    @property
    def level(self) -> Level:
        return self._level

    @property
    def is_level_overridden(self) -> bool:
        return self._is_level_overridden

    def reset_level(self) -> None:
        """Take the level from the parent again and mark it inherited."""
        if self._parent is not None:
            self._level = self._parent.level
            self._is_level_overridden = False

    def set_level(self, level: Level) -> None:
        """Set an own level; it counts as overridden when there is a parent."""
        if self._parent is not None:
            self._is_level_overridden = True
        self._level = Level(level)

    def set_level_from_group(self, group: Union["Group", str]) -> None:
        """Copy the level of a group, given as an object or by name."""
        if isinstance(group, str):
            found = self._system.get_group(group)
            if found is None:
                return
            group = found
        self._is_level_overridden = group is not self._parent
        self._level = group.level

    # Sink

    @property
    def sink(self) -> Optional["Sink"]:
        return self._sink

    @property
    def is_sink_overridden(self) -> bool:
        return self._is_sink_overridden

    def reset_sink(self) -> None:
        """Take the sink from the parent again and mark it inherited."""
        if self._parent is not None:
            self._sink = self._parent.sink
            self._is_sink_overridden = False

    def set_sink(self, sink: Union["Sink", str]) -> None:
        """Set an own sink, given as an object or by name; unknown names are ignored."""
        if isinstance(sink, str):
            found = self._system.get_sink(sink)
            if found is None:
                return
            sink = found
        if sink is None:
            raise ValueError("sink must be given")
        if self._parent is not None:
            self._is_sink_overridden = True
        self._sink = sink

    def set_sink_from_group(self, group: Union["Group", str]) -> None:
        """Copy the sink of a group, given as an object or by name."""
        if isinstance(group, str):
            found = self._system.get_group(group)
            if found is None:
                return
            group = found
        self._is_sink_overridden = group is not self._parent
        self._sink = group.sink

    # Parent group

    @property
    def parent(self) -> Optional["Group"]:
        return self._parent

    def unset_parent_group(self) -> None:
        """Detach from the parent; current properties stay as they are."""
        self._parent = None

    def set_parent_group(self, group: Union["Group", str, None]) -> None:
        """Attach to a parent and inherit every property that is not overridden."""
        if isinstance(group, str):
            found = self._system.get_group(group)
            if found is None:
                return
            group = found
        self._parent = group
        if group is not None:
            if not self._is_sink_overridden:
                self.set_sink_from_group(group)
            if not self._is_level_overridden:
                self.set_level_from_group(group)
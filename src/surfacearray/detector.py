# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Detector elements and the registry that owns them.

Elements are addressed by integer handles handed out by a
:class:`DetectorElementRegistry`. Neighbour relations are stored as sets of
handles, so an element never holds a reference to another element:

    registry = DetectorElementRegistry()
    module = registry.create(name="barrel_0_3")
    surface = PlaneSurface(10., 30., transform=placement, detector_element=module)
    ...
    for neighbour in registry.neighbours_of(module):
        ...
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Iterator, List, Optional

if TYPE_CHECKING:
    from .surfaces import Surface


@dataclass(eq=False)
class DetectorElement:
    """Readout element behind a sensor surface.

    Attributes:
        handle: Stable integer handle, unique within its registry.
        name: Optional human-readable name.
        surface: Surface the element is linked to (set by ``Surface.attach``).
    """
    handle: int
    name: Optional[str] = None
    surface: Optional['Surface'] = field(default=None, repr=False)
    _neighbours: FrozenSet[int] = field(default=frozenset(), init=False, repr=False)

    @property
    def neighbours(self) -> FrozenSet[int]:
        """Handles of the registered neighbour elements."""
        return self._neighbours

    def register_neighbours(self, handles: Iterable[int]) -> None:
        """Replace the neighbour set."""
        self._neighbours = frozenset(handles)


class DetectorElementRegistry:
    """Arena of detector elements addressed by handle."""

    def __init__(self):
        self._elements: Dict[int, DetectorElement] = {}
        self._next_handle = 0

    def create(self, name: Optional[str] = None) -> DetectorElement:
        """Create and register a new element."""
        element = DetectorElement(self._next_handle, name=name)
        self._elements[element.handle] = element
        self._next_handle += 1
        return element

    def add(self, element: DetectorElement) -> DetectorElement:
        """Register an externally built element under its own handle."""
        existing = self._elements.get(element.handle)
        if existing is not None and existing is not element:
            raise ValueError(f"Handle {element.handle} is already registered")
        self._elements[element.handle] = element
        self._next_handle = max(self._next_handle, element.handle + 1)
        return element

    def __getitem__(self, handle: int) -> DetectorElement:
        try:
            return self._elements[handle]
        except KeyError:
            raise KeyError(f"No detector element with handle {handle}") from None

    def __contains__(self, handle: int) -> bool:
        return handle in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[DetectorElement]:
        return iter(self._elements.values())

    def neighbours_of(self, element: DetectorElement) -> List[DetectorElement]:
        """Resolve an element's neighbour handles, sorted by handle."""
        return [self[h] for h in sorted(element.neighbours)]

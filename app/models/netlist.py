"""
Netlist extraction - groups wired pins into electrical nets.

This module contains no Qt dependencies. A net is a set of pins that
are connected to each other through completed wires. Nets are never
stored; they are recomputed from the wire list whenever it changes.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterable

from .wire import PinRef, WireData


def _generate_label(index: int) -> str:
    """Generate a positional net name: N1, N2, ..."""
    return f"N{index + 1}"


@dataclass(frozen=True)
class NetData:
    """
    A named group of electrically common pins.

    `pins` is ordered by discovery during traversal.
    """

    name: str
    pins: tuple[PinRef, ...]

    def __contains__(self, ref) -> bool:
        return ref in self.pins

    def __len__(self) -> int:
        return len(self.pins)

    def component_ids(self) -> set[str]:
        """Ids of every component with a pin in this net."""
        return {ref.component_id for ref in self.pins}


def build_adjacency(wires: Iterable[WireData]) -> dict[PinRef, list[PinRef]]:
    """
    Build an undirected pin adjacency map from completed wires.

    Open wires are skipped. A wire whose two ends are the same pin adds
    no edge and does not register the pin. Keys are inserted in the order
    pins first appear in the wire list.
    """
    adjacency: dict[PinRef, list[PinRef]] = {}
    for wire in wires:
        if not wire.is_complete():
            continue
        a, b = wire.start, wire.end
        if a == b:
            continue
        adjacency.setdefault(a, [])
        adjacency.setdefault(b, [])
        if b not in adjacency[a]:
            adjacency[a].append(b)
        if a not in adjacency[b]:
            adjacency[b].append(a)
    return adjacency


def extract_nets(wires: Iterable[WireData]) -> list[NetData]:
    """
    Partition all wired pins into nets.

    Breadth-first traversal over the adjacency map; nets are named N1,
    N2, ... in discovery order. The result depends only on the wire list
    and its order.

    Returns:
        List of NetData, one per connected group of pins.
    """
    adjacency = build_adjacency(wires)
    visited: set[PinRef] = set()
    nets: list[NetData] = []

    for root in adjacency:
        if root in visited:
            continue
        visited.add(root)
        queue = deque([root])
        group: list[PinRef] = []
        while queue:
            current = queue.popleft()
            group.append(current)
            for neighbor in adjacency[current]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)
        nets.append(NetData(name=_generate_label(len(nets)), pins=tuple(group)))

    return nets


def net_for_pin(nets: Iterable[NetData], ref: PinRef):
    """Return the net containing the given pin, or None if it is unwired."""
    for net in nets:
        if ref in net:
            return net
    return None

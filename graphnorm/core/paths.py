"""
Path addressing and deferred fixup actions.

A path is a tuple of string segments locating a slot inside a value tree.
Dicts are addressed by key, lists and tuples by stringified index, and any
other object by attribute name.
"""

import heapq
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple, Union

from .errors import MalformedItemError

Path = Tuple[str, ...]

ROOT: Path = ()


def child(path: Path, segment: Any) -> Path:
    """Extend a path by one segment."""
    return path + (str(segment),)


def _step(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node[segment]
    if isinstance(node, (list, tuple)):
        return node[int(segment)]
    return getattr(node, segment)


def find(root: Any, path: Path) -> Any:
    """
    Return the value stored at path under root.

    Raises:
        MalformedItemError: If any segment does not resolve
    """
    node = root
    for segment in path:
        try:
            node = _step(node, segment)
        except (KeyError, IndexError, ValueError, AttributeError, TypeError) as e:
            raise MalformedItemError(
                f"path {list(path)} does not resolve at segment {segment!r}"
            ) from e
    return node


def assign(root: Any, path: Path, value: Any) -> None:
    """
    Store value into the slot at path (path must not be the root).

    Raises:
        MalformedItemError: If the parent does not resolve or cannot hold the value
    """
    parent = find(root, path[:-1])
    segment = path[-1]
    try:
        if isinstance(parent, dict):
            parent[segment] = value
        elif isinstance(parent, list):
            parent[int(segment)] = value
        else:
            setattr(parent, segment, value)
    except (IndexError, ValueError, AttributeError, TypeError) as e:
        raise MalformedItemError(
            f"cannot store into {type(parent).__name__} at {list(path)}"
        ) from e


@dataclass(frozen=True)
class ReferenceFixup:
    """Copy the value at source into the slot at target."""
    target: Path
    source: Path

    @property
    def depth(self) -> int:
        return len(self.source)


@dataclass(frozen=True)
class ConversionFixup:
    """Replace the value at path with the registered converter's instance."""
    type_id: str
    path: Path

    @property
    def depth(self) -> int:
        return len(self.path)


Action = Union[ReferenceFixup, ConversionFixup]


def schedule(actions: Iterable[Action]) -> List[Action]:
    """
    Order fixup actions for application.

    Required order:
    - a conversion runs after every conversion nested under its path, and
      after conversions recorded later at the same path (they build its state)
    - a reference runs after every conversion at or beneath its source

    Within that, a reference runs as soon as it is ready, and a conversion whose
    state still has an unfilled reference slot waits while any other
    conversion can run. Remaining ties go deepest path first, then recording
    order.
    """
    actions = list(actions)
    conversions_at: Dict[Path, List[int]] = defaultdict(list)
    references_from: Dict[Path, List[int]] = defaultdict(list)
    for index, action in enumerate(actions):
        if isinstance(action, ConversionFixup):
            conversions_at[action.path].append(index)
        else:
            references_from[action.source].append(index)

    successors: List[List[int]] = [[] for _ in actions]
    waiting = [0] * len(actions)
    # unfilled reference slots inside each conversion's state
    open_slots = [0] * len(actions)
    containers: List[List[int]] = [[] for _ in actions]

    def precede(first: int, then: int) -> None:
        successors[first].append(then)
        waiting[then] += 1

    for index, action in enumerate(actions):
        if isinstance(action, ConversionFixup):
            path = action.path
            for k in range(len(path)):
                for outer in conversions_at.get(path[:k], ()):
                    precede(index, outer)
            for outer in conversions_at[path]:
                if outer < index:
                    precede(index, outer)
            for k in range(len(path) + 1):
                for reference in references_from.get(path[:k], ()):
                    precede(index, reference)
        else:
            target = action.target
            for k in range(len(target) + 1):
                for container in conversions_at.get(target[:k], ()):
                    open_slots[container] += 1
                    containers[index].append(container)

    ready_references: List[int] = []
    free: List[Tuple[int, int]] = []
    held: List[Tuple[int, int]] = []

    def release(index: int) -> None:
        action = actions[index]
        if isinstance(action, ReferenceFixup):
            heapq.heappush(ready_references, index)
        elif open_slots[index]:
            heapq.heappush(held, (-action.depth, index))
        else:
            heapq.heappush(free, (-action.depth, index))

    for index in range(len(actions)):
        if not waiting[index]:
            release(index)

    done = [False] * len(actions)
    ordered: List[Action] = []
    while len(ordered) < len(actions):
        if ready_references:
            index = heapq.heappop(ready_references)
        elif free:
            _, index = heapq.heappop(free)
        else:
            # every runnable conversion still has an open slot; the slot is
            # reached through the built instance instead
            _, index = heapq.heappop(held)
        if done[index]:
            continue
        done[index] = True
        ordered.append(actions[index])

        for container in containers[index]:
            open_slots[container] -= 1
            if not open_slots[container] and not waiting[container] and not done[container]:
                heapq.heappush(free, (-actions[container].depth, container))
        for successor in successors[index]:
            waiting[successor] -= 1
            if not waiting[successor]:
                release(successor)

    return ordered

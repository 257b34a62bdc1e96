"""An in-memory tree of partially serialized binary Ion.

Binary values are preceded by their length, which is not known until the
value has been written. Values are therefore buffered in a tree and emitted
once all lengths are known.
"""

from __future__ import annotations

from typing import BinaryIO, Iterable, Protocol, Union

from .bits import encode_tag, tag_len


class _Writable(Protocol):
    def write(self, data: bytes) -> object: ...


class Atom:
    """A fully serialized value that can be emitted as is."""

    __slots__ = ("data",)

    def __init__(self, data: bytes = b"") -> None:
        self.data = bytes(data)

    @property
    def length(self) -> int:
        return len(self.data)

    def emit_to(self, out: _Writable | BinaryIO) -> None:
        """Write the bytes to ``out``."""
        out.write(self.data)

    def __repr__(self) -> str:
        return f"Atom({self.data!r})"


class Datagram:
    """A sequence of nodes emitted one after another."""

    def __init__(self, children: Iterable["BufNode"] = ()) -> None:
        self.children: list[BufNode] = []
        self._length = 0
        for child in children:
            self.append(child)

    @property
    def content_length(self) -> int:
        """Total length of the children."""
        return self._length

    @property
    def length(self) -> int:
        return self._length

    def append(self, node: "BufNode") -> None:
        """Add a node to the end of the sequence."""
        self._length += node.length
        self.children.append(node)

    def emit_to(self, out: _Writable | BinaryIO) -> None:
        """Write every child to ``out`` in order."""
        for child in self.children:
            child.emit_to(out)


class Container(Datagram):
    """A sequence of nodes preceded by a type code and length tag."""

    def __init__(self, code: int, children: Iterable["BufNode"] = ()) -> None:
        self.code = code
        super().__init__(children)

    @property
    def length(self) -> int:
        inner = self.content_length
        return inner + tag_len(inner)

    def emit_to(self, out: _Writable | BinaryIO) -> None:
        """Write the tag followed by every child to ``out``."""
        out.write(encode_tag(self.code, self.content_length))
        super().emit_to(out)


BufNode = Union[Atom, Datagram, Container]
BufSeq = Union[Datagram, Container]


class BufStack:
    """A stack of sequences matching the containers being written."""

    def __init__(self) -> None:
        self._items: list[BufSeq] = []

    def __len__(self) -> int:
        return len(self._items)

    def peek(self) -> BufSeq | None:
        """Return the sequence on top, or None if the stack is empty."""
        return self._items[-1] if self._items else None

    def push(self, seq: BufSeq) -> None:
        self._items.append(seq)

    def pop(self) -> BufSeq:
        """Remove and return the sequence on top."""
        if not self._items:
            raise IndexError("pop called on an empty stack")
        return self._items.pop()
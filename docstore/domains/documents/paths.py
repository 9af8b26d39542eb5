"""Материализованный путь документа.

Путь хранится как последовательность сегментов (слагов) от корня дерева до
узла. Порядок путей лексикографический по сегментам, поэтому сортировка
документов по пути даёт обход дерева в прямом порядке: родитель идёт раньше
всех своих потомков.

В базе путь лежит строкой с разделителем ``.``:

    engineering.backend.api_design
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from docstore.core.errors import InvalidSegmentError

SEPARATOR = "."


def _check_segment(segment: str) -> str:
    if not isinstance(segment, str) or not segment:
        raise InvalidSegmentError("Path segment cannot be empty")
    if SEPARATOR in segment:
        raise InvalidSegmentError(f"Path segment cannot contain '{SEPARATOR}': {segment!r}")
    return segment


@dataclass(frozen=True, order=True)
class PathKey:
    """Неизменяемая позиция узла в дереве"""

    segments: Tuple[str, ...]

    def __init__(self, segments: Iterable[str]):
        segments = tuple(_check_segment(s) for s in segments)
        if not segments:
            raise InvalidSegmentError("Path must contain at least one segment")
        object.__setattr__(self, "segments", segments)

    @classmethod
    def root(cls, segment: str) -> "PathKey":
        return cls((segment,))

    @classmethod
    def parse(cls, text: str) -> "PathKey":
        """Разбор строкового представления из базы"""
        return cls(text.split(SEPARATOR))

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def leaf(self) -> str:
        return self.segments[-1]

    @property
    def parent(self) -> Optional["PathKey"]:
        if len(self.segments) == 1:
            return None
        return PathKey(self.segments[:-1])

    def concat(self, segment: str) -> "PathKey":
        """Путь дочернего узла"""
        return PathKey(self.segments + (segment,))

    def is_prefix_of(self, other: "PathKey") -> bool:
        """Является ли путь предком ``other`` или совпадает с ним"""
        n = len(self.segments)
        return other.segments[:n] == self.segments

    def is_strict_prefix_of(self, other: "PathKey") -> bool:
        return len(self.segments) < len(other.segments) and self.is_prefix_of(other)

    def rebase(self, old_prefix: "PathKey", new_prefix: "PathKey") -> "PathKey":
        """Перенос пути из поддерева ``old_prefix`` в поддерево ``new_prefix``"""
        if not old_prefix.is_prefix_of(self):
            raise ValueError(f"{old_prefix} is not a prefix of {self}")
        return PathKey(new_prefix.segments + self.segments[len(old_prefix.segments):])

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)

    def __repr__(self) -> str:
        return f"PathKey({str(self)!r})"

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Protocol


class LineKind(Enum):
    """Category assigned to each raw line of an AMPS_PARAM.in file."""

    BLANK_OR_DECORATIVE = "blank_or_decorative"
    SECTION_HEADER = "section_header"
    BLOCK_BEGIN = "block_begin"
    BLOCK_END = "block_end"
    BLOCK_BODY = "block_body"
    COMMENTED_PARAM = "commented_param"
    ACTIVE_PARAM = "active_param"
    PURE_COMMENT = "pure_comment"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedLine:
    """One input line after classification.

    `key` is set for parameters (the keyword) and section headers (the section name).
    `value` is set for parameters (raw value) and block body lines (the point entry).
    """

    kind: LineKind
    line_number: int
    key: str | None = None
    value: str | None = None


class Priority(IntEnum):
    """Precedence of a keyword-map entry. Higher values win."""

    COMMENTED = 1
    ACTIVE = 2


class LineRule(Protocol):
    """Protocol for one classification rule. Rules are tried in registry order."""

    def matches(self, line: str, in_block: bool) -> bool:
        """Check if this rule applies to the line."""
        ...

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        """Build the classified result for a line this rule matched."""
        ...


# --- Mutable Data Structure (used while building the map) --- #
@dataclass
class _MutableKeywordMap:
    """Mutable accumulator used internally by the keyword map builder."""

    values: dict[str, str] = field(default_factory=dict)
    priorities: dict[str, Priority] = field(default_factory=dict)
    points: list[str] = field(default_factory=list)
    section: str = ""

    def insert(self, key: str, value: str, priority: Priority) -> bool:
        """
        Store a value unless an entry of higher precedence already holds the key.

        Active entries overwrite anything (the last active one wins). A commented
        entry is only stored when the key has not been seen yet.

        Returns:
            True if the value was stored.
        """
        stored = self.priorities.get(key)
        if stored is not None and (priority < stored or (priority == stored and priority is Priority.COMMENTED)):
            return False
        self.values[key] = value
        self.priorities[key] = priority
        return True


@dataclass(frozen=True)
class KeywordMap(Mapping[str, str]):
    """
    Immutable result of parsing an AMPS_PARAM.in file.

    Behaves as a read-only mapping of keyword -> raw string value. The point
    block and the last section header are kept out of the keyword namespace.

    Attributes:
        entries: Keyword -> raw value (inline comments stripped, trimmed).
        points: Entries of the POINTS_BEGIN/POINTS_END block in file order.
        section: Name of the last section header seen ("" if none).
    """

    entries: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    points: tuple[str, ...] = ()
    section: str = ""

    @classmethod
    def from_mutable(cls, mutable_data: _MutableKeywordMap) -> "KeywordMap":
        """Converts the builder accumulator to an immutable KeywordMap."""
        return cls(
            entries=MappingProxyType(dict(mutable_data.values)),
            points=tuple(mutable_data.points),
            section=mutable_data.section,
        )

    @property
    def has_points(self) -> bool:
        return bool(self.points)

    def __getitem__(self, key: str) -> str:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"KeywordMap(keywords={len(self.entries)}, points={len(self.points)}, section={self.section!r})"


@dataclass(frozen=True)
class SanityCheckResult:
    """Outcome of the format sanity gate. Truthy when the text was accepted."""

    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

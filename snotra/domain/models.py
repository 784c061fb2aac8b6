"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class ParsedPayload:
    """Two-line message body: the German phrase and its English gloss."""

    primary: str
    secondary: str


@dataclass(frozen=True)
class AllowList:
    """Author names allowed to talk to the bot.

    Matching is exact and case-sensitive. Built once at startup and never
    mutated afterwards.
    """

    names: Tuple[str, ...] = ()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "AllowList":
        # dict.fromkeys keeps first-seen order while dropping duplicates
        return cls(names=tuple(dict.fromkeys(names)))

    @classmethod
    def from_csv(cls, value: str) -> "AllowList":
        """Build from a comma-separated value such as ``"alice,bob"``."""
        names = (part.strip() for part in value.split(","))
        return cls.from_names(name for name in names if name)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

"""Data models threaded through one precmd invocation."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

U64_MAX = 2**64 - 1


class AggregateRecord(BaseModel):
    """Repository state emitted to the shell as one JSON line.

    Built empty, filled in place by the fast snapshot, refined once with the
    deep status, then emitted. Only the auth flag outlives the process.
    """

    action: str = ""
    branch: str = ""
    remote: list[str] = Field(default_factory=list)
    staged: bool = False
    status: str = ""
    u_name: str = ""
    auth_failed: bool = False

    def to_line(self) -> str:
        return self.model_dump_json()


@dataclass(frozen=True)
class CacheEntry:
    """Last known auth outcome for one repository, stored as "<timestamp>:<0|1>"."""

    timestamp: int
    failed: bool

    def encode(self) -> str:
        return f"{self.timestamp}:{1 if self.failed else 0}"

    @classmethod
    def parse(cls, content: str) -> CacheEntry | None:
        """Parse cache file content; None when it is not "<u64>:<token>"."""
        ts_str, sep, token = content.partition(":")
        if not sep or not ts_str.isascii() or not ts_str.isdigit():
            return None
        timestamp = int(ts_str)
        if timestamp > U64_MAX:
            return None
        return cls(timestamp=timestamp, failed=token.strip() == "1")

    def is_fresh(self, now: int, ttl_seconds: int) -> bool:
        # Future timestamps (clock moved backwards) are stale, not fresh forever
        return 0 <= now - self.timestamp < ttl_seconds

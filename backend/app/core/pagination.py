from dataclasses import dataclass

from sqlalchemy import Select


@dataclass(frozen=True)
class Page:
    offset: int
    limit: int

    def apply(self, stmt: Select) -> Select:
        return stmt.offset(self.offset).limit(self.limit)


def normalize_page(
    *,
    offset: int | None,
    limit: int | None,
    default_limit: int,
    max_limit: int,
) -> Page:
    """Validate offset/limit values; an oversized limit is capped, not rejected."""
    resolved_offset = 0 if offset is None else offset
    resolved_limit = default_limit if limit is None else limit
    if resolved_offset < 0:
        raise ValueError("offset must be >= 0")
    if resolved_limit < 1:
        raise ValueError("limit must be >= 1")
    return Page(offset=resolved_offset, limit=min(resolved_limit, max_limit))

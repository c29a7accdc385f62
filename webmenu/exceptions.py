"""Exceptions raised by :mod:`webmenu`."""

from __future__ import annotations

from typing import Any


class InvalidArgument(ValueError):
    """Raised when a menu or URL operation receives an unusable argument."""

    @classmethod
    def active_target(cls, value: Any) -> "InvalidArgument":
        return cls(
            f"`set_active` requires a url string or a callable, got {type(value).__name__}"
        )

    @classmethod
    def segment_zero_does_not_exist(cls) -> "InvalidArgument":
        return cls("Segment 0 doesn't exist. Segments can be retrieved by using 1-based index or a negative index.")

    @classmethod
    def invalid_scheme(cls, scheme: str) -> "InvalidArgument":
        return cls(f"The scheme `{scheme}` isn't valid. It should be either `http`, `https` or `mailto`.")


__all__ = ["InvalidArgument"]

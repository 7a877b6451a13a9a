"""Module identifier derivation.

A raw token such as ``UserProfileScreen`` is turned, exactly once per run,
into the set of case variants used by every generated and patched file.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

DEFAULT_SUFFIX = "Screen"

_UPPER_NOT_FIRST = re.compile(r"(?<!^)([A-Z])")


class ModuleIdentifier(BaseModel):
    """Case/format variants of one module name.

    ``directory_token`` and ``path_segment_token`` are pure functions of
    ``display_token``; build instances with :func:`derive_identifier`.
    """

    model_config = ConfigDict(frozen=True)

    display_token: str
    directory_token: str
    path_segment_token: str
    suffix: str = DEFAULT_SUFFIX

    @property
    def class_name(self) -> str:
        """Type-name stem: the display token without its trailing suffix."""
        return strip_suffix(self.display_token, self.suffix)

    @property
    def route_path(self) -> str:
        """Route path registered in the route table, e.g. ``/home``."""
        return f"/{self.directory_token}"

    @property
    def constant_name(self) -> str:
        """Name of the route constant, e.g. ``USER_PROFILE``."""
        return self.path_segment_token.upper()


def strip_suffix(token: str, suffix: str) -> str:
    """Remove *suffix* from *token* when it is a trailing, case-sensitive match."""
    if suffix and token.endswith(suffix):
        return token[: -len(suffix)]
    return token


def to_path_segment(token: str) -> str:
    """Convert ``UserProfile`` to ``user_profile``.

    A separator goes before every uppercase letter except the first
    character; no other normalisation is done.
    """
    return _UPPER_NOT_FIRST.sub(r"_\1", token).lower()


def derive_identifier(raw_token: str, suffix: str = DEFAULT_SUFFIX) -> ModuleIdentifier:
    """Derive every identifier variant from *raw_token*.

    Examples::

        derive_identifier("HomeScreen")        -> home / home
        derive_identifier("UserProfileScreen") -> userprofile / user_profile

    Raises:
        ValueError: If *raw_token* is empty.
    """
    if not raw_token:
        raise ValueError("module token must not be empty")

    stem = strip_suffix(raw_token, suffix)
    return ModuleIdentifier(
        display_token=raw_token,
        directory_token=stem.lower(),
        path_segment_token=to_path_segment(stem),
        suffix=suffix,
    )

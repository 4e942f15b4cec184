"""Specifier resolvers.

Concrete resolution stages used by the loader adapter:
- SearchPathResolver: bare specifiers against QJSXPATH directories
- LocalResolver: relative/absolute specifiers (and bare fallbacks)

Each stage yields its candidates lazily and returns the first loadable one,
or None. Absence is never an exception.
"""

import logging
import os
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from itertools import chain
from typing import Protocol

from .filesystem import is_loadable_file
from .settings import TRAILING_SEPARATORS
from .settings import ResolverSettings

logger = logging.getLogger(__name__)


class SpecifierResolver(Protocol):
    """A resolution stage: lazy candidates plus first-match resolution."""

    def candidates(self, specifier: str) -> Iterator[str]: ...

    def resolve(self, specifier: str) -> str | None: ...


def first_match(candidates: Iterable[str]) -> str | None:
    """Return the first candidate that is a loadable file.

    Stops probing as soon as one matches.
    """
    for candidate in candidates:
        if is_loadable_file(candidate):
            logger.debug(f"[module:resolve] hit {candidate}")
            return candidate
    return None


def strip_trailing_separator(directory: str) -> str:
    """Remove a single trailing '/' or '\\' from a search-path entry."""
    if directory.endswith(TRAILING_SEPARATORS):
        return directory[:-1]
    return directory


class SearchPathResolver:
    """Resolve bare specifiers against the directories of a search path.

    The search path is read from ``environ`` on every call, so changes to the
    environment are always observed. For each directory, in order:

    1. <dir>/<specifier>/index.js
    2. <dir>/<specifier>.js
    3. <dir>/<specifier>

    The first directory with any hit wins.
    """

    def __init__(self, settings: ResolverSettings | None = None, environ: Mapping[str, str] | None = None):
        self.settings = settings or ResolverSettings()
        self.environ = os.environ if environ is None else environ

    def search_path(self) -> list[str] | None:
        """Current search-path directories, or None when the variable is unset.

        Empty segments are dropped.
        """
        value = self.environ.get(self.settings.env_var)
        if value is None:
            return None
        return [entry for entry in value.split(self.settings.path_separator) if entry]

    def directory_candidates(self, directory: str, specifier: str) -> Iterator[str]:
        sep = self.settings.dir_separator
        base = f"{strip_trailing_separator(directory)}{sep}{specifier}"
        yield f"{base}{sep}{self.settings.index_file}"
        yield f"{base}{self.settings.extension}"
        yield base

    def _candidates_in(self, directories: list[str], specifier: str) -> Iterator[str]:
        return chain.from_iterable(self.directory_candidates(d, specifier) for d in directories)

    def candidates(self, specifier: str) -> Iterator[str]:
        """All candidates for specifier, in priority order."""
        return self._candidates_in(self.search_path() or [], specifier)

    def resolve(self, specifier: str) -> str | None:
        directories = self.search_path()
        if directories is None:
            logger.debug(f"[module:resolve] {specifier} -> {self.settings.env_var} not set, skipping search path")
            return None
        return first_match(self._candidates_in(directories, specifier))

    def __repr__(self) -> str:
        return f"SearchPathResolver(env_var={self.settings.env_var!r})"


class LocalResolver:
    """Resolve a specifier relative to the working directory.

    Tries, in order:
    1. the specifier as given
    2. <specifier>.js
    3. <specifier>/index.js
    """

    def __init__(self, settings: ResolverSettings | None = None):
        self.settings = settings or ResolverSettings()

    def candidates(self, specifier: str) -> Iterator[str]:
        yield specifier
        yield f"{specifier}{self.settings.extension}"
        yield f"{specifier}{self.settings.dir_separator}{self.settings.index_file}"

    def resolve(self, specifier: str) -> str | None:
        return first_match(self.candidates(specifier))

    def __repr__(self) -> str:
        return "LocalResolver()"

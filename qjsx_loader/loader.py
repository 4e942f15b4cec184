"""Loader adapter - the hook the JavaScript engine calls for every import.

Resolution order (first match wins):
1. Normalize: "node:fs" -> "node/fs"
2. Search path: bare specifiers only, QJSXPATH directories
3. Local: specifier, specifier.js, specifier/index.js
4. Native loader: the (normalized) specifier verbatim

The native loader is the engine's own file-to-module step. It owns terminal
error reporting; resolution stages only ever return a path or None.
"""

import logging
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Generic
from typing import TypeVar

from .resolvers import LocalResolver
from .resolvers import SearchPathResolver
from .resolvers import SpecifierResolver
from .settings import ResolverSettings
from .specifiers import is_bare
from .specifiers import translate_colons

logger = logging.getLogger(__name__)

ModuleT = TypeVar("ModuleT")

# (name, context, attributes) -> loaded module
NativeLoader = Callable[[str, Any, Any], ModuleT]

STAGE_SEARCH_PATH = "search-path"
STAGE_LOCAL = "local"


class QjsxError(Exception):
    """Base error for the qjsx loader."""


class ModuleLoadError(QjsxError):
    """Raised by the native loader when a module cannot be loaded."""

    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Resolution:
    """A successful resolution and the stage that produced it."""

    specifier: str
    normalized: str
    path: str
    stage: str


@dataclass(frozen=True)
class LoadedModule:
    """Module source handed back by FileModuleLoader."""

    name: str
    path: str | None
    source: str


class FileModuleLoader:
    """Default native loader: embedded modules first, then files on disk.

    Embedded modules stand in for modules compiled into the engine ("std",
    "os", bundled shims); they are looked up by exact name.
    """

    def __init__(self, embedded: Mapping[str, str] | None = None, encoding: str = "utf-8"):
        self.embedded = dict(embedded or {})
        self.encoding = encoding

    def __call__(self, name: str, context: Any = None, attributes: Any = None) -> LoadedModule:
        if name in self.embedded:
            logger.debug(f"[module:load] {name} -> embedded")
            return LoadedModule(name=name, path=None, source=self.embedded[name])

        try:
            source = Path(name).read_text(encoding=self.encoding)
        except (OSError, ValueError) as e:
            raise ModuleLoadError(name, f"could not load module filename '{name}': {e}") from e

        logger.debug(f"[module:load] {name} -> file")
        return LoadedModule(name=name, path=name, source=source)

    def __repr__(self) -> str:
        return f"FileModuleLoader(embedded={sorted(self.embedded)})"


class ModuleLoaderAdapter(Generic[ModuleT]):
    """Wrap a native loader with QJSXPATH and index.js resolution.

    Instances are callable with the engine's loader signature
    ``(specifier, context, attributes)``.
    """

    def __init__(
        self,
        native_loader: NativeLoader,
        settings: ResolverSettings | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.native_loader = native_loader
        self.settings = settings or ResolverSettings()
        self.search_path_resolver = SearchPathResolver(self.settings, environ)
        self.local_resolver = LocalResolver(self.settings)

    def normalize(self, specifier: str) -> str:
        translated = translate_colons(specifier)
        if translated is None:
            return specifier
        logger.debug(f"[module:resolve] {specifier} -> translated to {translated}")
        return translated

    def stages(self, normalized: str) -> list[tuple[str, SpecifierResolver]]:
        """Resolution stages that apply to a normalized specifier, in order."""
        stages: list[tuple[str, SpecifierResolver]] = []
        if is_bare(normalized):
            stages.append((STAGE_SEARCH_PATH, self.search_path_resolver))
        stages.append((STAGE_LOCAL, self.local_resolver))
        return stages

    def candidates(self, specifier: str) -> Iterator[tuple[str, str]]:
        """Every (stage, candidate) pair resolution would probe, in order."""
        normalized = self.normalize(specifier)
        for stage, resolver in self.stages(normalized):
            for candidate in resolver.candidates(normalized):
                yield stage, candidate

    def resolve_with_stage(self, specifier: str) -> Resolution | None:
        """Resolve specifier and report which stage found it.

        Returns:
            Resolution, or None if the native loader should get the specifier
        """
        return self._resolve_normalized(specifier, self.normalize(specifier))

    def _resolve_normalized(self, specifier: str, normalized: str) -> Resolution | None:
        for stage, resolver in self.stages(normalized):
            if path := resolver.resolve(normalized):
                logger.debug(f"[module:resolve] {specifier} -> {stage} ({path})")
                return Resolution(specifier=specifier, normalized=normalized, path=path, stage=stage)
        logger.debug(f"[module:resolve] {specifier} -> native loader ({normalized})")
        return None

    def resolve(self, specifier: str) -> str | None:
        resolution = self.resolve_with_stage(specifier)
        return resolution.path if resolution else None

    def __call__(self, specifier: str, context: Any = None, attributes: Any = None) -> ModuleT:
        normalized = self.normalize(specifier)
        resolution = self._resolve_normalized(specifier, normalized)
        name = resolution.path if resolution else normalized
        return self.native_loader(name, context, attributes)

    def __repr__(self) -> str:
        return f"ModuleLoaderAdapter({self.search_path_resolver!r}, {self.local_resolver!r})"

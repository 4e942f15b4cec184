"""Node.js-style module resolution for a JavaScript engine's module loader.

Bare specifiers are searched in the QJSXPATH directories, relative and
absolute ones get .js and index.js fallbacks, and "node:fs" style names are
translated to "node/fs" first.
"""

from .loader import FileModuleLoader
from .loader import LoadedModule
from .loader import ModuleLoadError
from .loader import ModuleLoaderAdapter
from .loader import QjsxError
from .loader import Resolution
from .resolvers import LocalResolver
from .resolvers import SearchPathResolver
from .resolvers import first_match
from .settings import ResolverSettings
from .settings import load_settings
from .specifiers import SpecifierKind
from .specifiers import classify_specifier
from .specifiers import translate_colons

__all__ = [
    "FileModuleLoader",
    "LoadedModule",
    "LocalResolver",
    "ModuleLoadError",
    "ModuleLoaderAdapter",
    "QjsxError",
    "Resolution",
    "ResolverSettings",
    "SearchPathResolver",
    "SpecifierKind",
    "classify_specifier",
    "first_match",
    "load_settings",
    "translate_colons",
]

from __future__ import annotations
import importlib
import pkgutil
from typing import Dict, Type

from ..patterns.base import SeverityMatcher
from .errors import ConfigurationError


def _discover_package_classes(pkg, base_cls) -> Dict[str, Type]:
    discovered: Dict[str, Type] = {}
    for m in pkgutil.iter_modules(pkg.__path__, pkg.__name__ + "."):
        module = importlib.import_module(m.name)
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, type) and issubclass(obj, base_cls) and obj is not base_cls:
                name = getattr(obj, "NAME", obj.__name__).lower()
                discovered[name] = obj
    return discovered


def discover_matchers() -> Dict[str, Type[SeverityMatcher]]:
    from .. import patterns as patterns_pkg  # lazy import
    return _discover_package_classes(patterns_pkg, SeverityMatcher)


def load_matcher(name: str) -> SeverityMatcher:
    name = (name or "").strip().lower()
    matchers = discover_matchers()
    if name not in matchers:
        raise ConfigurationError(f"Unknown matcher: {name}")
    return matchers[name]()

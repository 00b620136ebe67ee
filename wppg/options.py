"""Options Store -- the ordered, slug-keyed answers of every module.

Each module owns exactly one key (its ``SLUG``) and writes it once, during
the collection phase, through :meth:`OptionsStore.publish`.  Later modules
read earlier fragments by slug.  Readers get read-only views: mappings are
wrapped in ``MappingProxyType`` and lists become tuples.  Once collection is
over the store is frozen so that the execution and export phases see the
confirmed plan only.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from copy import deepcopy
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from wppg.errors import MissingDependencyError

if TYPE_CHECKING:
    from wppg.modules.base import Module


class OptionsStore(Mapping[str, Mapping[str, Any]]):
    """Read-only mapping view with a single-writer-per-slug setter."""

    def __init__(self) -> None:
        self._fragments: dict[str, dict[str, Any]] = {}
        self._views: dict[str, Mapping[str, Any]] = {}
        self._frozen = False

    # -- Mapping protocol --------------------------------------------------

    def __getitem__(self, slug: str) -> Mapping[str, Any]:
        return self._views[slug]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __repr__(self) -> str:
        return f"OptionsStore({list(self._fragments)!r}, frozen={self._frozen})"

    # -- Writing -----------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def publish(self, module: "Module", fragment: Mapping[str, Any]) -> None:
        """Store *fragment* under *module*'s own slug.

        Raises:
            RuntimeError: The store is frozen or the slug was already
                published.
        """
        slug = module.SLUG
        if self._frozen:
            raise RuntimeError(f"Options are frozen; cannot publish {slug!r}")
        if slug in self._fragments:
            raise RuntimeError(f"Options for {slug!r} were already published")
        self._fragments[slug] = deepcopy(dict(fragment))
        self._views[slug] = _read_only(self._fragments[slug])

    def freeze(self) -> None:
        """Forbid any further :meth:`publish`."""
        self._frozen = True

    # -- Reading -----------------------------------------------------------

    def require(self, slug: str, key: str | None = None) -> Any:
        """Return a fragment (or one of its keys) that must exist.

        Raises:
            MissingDependencyError: The slug or key was never produced.
        """
        if slug not in self._views:
            raise MissingDependencyError(slug)
        fragment = self._views[slug]
        if key is None:
            return fragment
        if key not in fragment:
            raise MissingDependencyError(slug, key)
        return fragment[key]

    def as_dict(self) -> dict[str, dict[str, Any]]:
        """Return a deep copy as plain nested dicts."""
        return deepcopy(self._fragments)


def _read_only(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _read_only(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_read_only(item) for item in value)
    return value

"""Read-only registry of the boutiques served by this deployment.

The registry is built once at import time (from the built-in table, or from
``BOUTIQUES_FILE`` when set) and shared by every request. Lookups are exact,
case-sensitive slug matches. Every consumer that needs the list of known
boutiques (not-found links, the boutique index) reads it from here.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, TypeAdapter

from marche241.core.config import settings
from marche241.schemas.boutique import SLUG_PATTERN, BoutiqueConfig, BoutiqueLink

logger = logging.getLogger(__name__)

BUILTIN_BOUTIQUES: dict[str, dict] = {
    "marche_241": {
        "name": "Marché241",
        "description": (
            "Découvrez Marché241, votre boutique en ligne minimaliste pour une "
            "expérience d'achat simple et moderne"
        ),
        "theme": {
            "primary": "#000000",
            "secondary": "#4A9782",
            "accent": "#DCD0A8",
        },
    },
    "boutique_de_joline": {
        "name": "Boutique de Joline",
        "description": (
            "La boutique de Joline - Mode et accessoires tendance pour tous les goûts"
        ),
        "theme": {
            "primary": "#ec4899",
            "secondary": "#db2777",
            "accent": "#f472b6",
            "extras": {"black": "#000000"},
        },
    },
}

_SOURCE_ADAPTER = TypeAdapter(dict[str, BoutiqueConfig])


class BoutiqueNotFoundError(LookupError):
    """Raised by ``resolve`` when a slug is not in the registry."""

    def __init__(self, slug: str, known: tuple[BoutiqueLink, ...]):
        super().__init__(f"Boutique {slug!r} introuvable")
        self.slug = slug
        self.known = known


class BoutiqueResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    config: BoutiqueConfig | None

    @property
    def found(self) -> bool:
        return self.config is not None


class BoutiqueRegistry(Mapping[str, BoutiqueConfig]):
    """Immutable slug -> BoutiqueConfig mapping."""

    def __init__(self, entries: Mapping[str, BoutiqueConfig]):
        for slug in entries:
            if not SLUG_PATTERN.fullmatch(slug):
                raise ValueError(f"Invalid boutique slug: {slug!r}")
        self._entries = MappingProxyType(dict(entries))
        self._links = tuple(
            BoutiqueLink(slug=slug, name=config.name, href=f"/{slug}")
            for slug, config in self._entries.items()
        )

    @classmethod
    def from_source(cls, source: Mapping[str, object]) -> "BoutiqueRegistry":
        """Validate a raw ``{slug: {...}}`` table. Partial entries are rejected."""
        return cls(_SOURCE_ADAPTER.validate_python(dict(source)))

    @classmethod
    def from_file(cls, path: str | Path) -> "BoutiqueRegistry":
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(_SOURCE_ADAPTER.validate_python(raw))

    def __getitem__(self, slug: str) -> BoutiqueConfig:
        return self._entries[slug]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, slug: str, default: BoutiqueConfig | None = None) -> BoutiqueConfig | None:
        return self._entries.get(slug, default)

    def slugs(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def links(self) -> tuple[BoutiqueLink, ...]:
        return self._links

    def lookup(self, slug: str) -> BoutiqueResolution:
        return BoutiqueResolution(slug=slug, config=self._entries.get(slug))

    def resolve(self, slug: str) -> BoutiqueConfig:
        config = self._entries.get(slug)
        if config is None:
            raise BoutiqueNotFoundError(slug, self._links)
        return config


def load_registry() -> BoutiqueRegistry:
    if settings.BOUTIQUES_FILE:
        logger.info("Loading boutiques from %s", settings.BOUTIQUES_FILE)
        return BoutiqueRegistry.from_file(settings.BOUTIQUES_FILE)
    return BoutiqueRegistry.from_source(BUILTIN_BOUTIQUES)


registry = load_registry()


def get_registry() -> BoutiqueRegistry:
    return registry


def resolve(slug: str) -> BoutiqueConfig:
    """Resolve ``slug`` against the process registry."""
    return registry.resolve(slug)


def lookup(slug: str) -> BoutiqueResolution:
    return registry.lookup(slug)

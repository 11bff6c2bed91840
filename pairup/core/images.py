from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from pairup.core.errors import InvalidCategory


@dataclass(frozen=True)
class ImageCategory:
    key: str
    name: str
    images: Tuple[str, ...]


class ImagePool:
    """Read-only catalog of image identifiers, grouped by category.

    Loaded from ``data/images.yaml`` unless another path is given. The order of
    identifiers inside a category is the order in the file.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or Path(__file__).resolve().parent.parent / "data" / "images.yaml"
        self._categories, self._labels = self._load_categories()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ImagePool":
        """Build a pool from an in-memory mapping shaped like the YAML catalog."""
        pool = cls.__new__(cls)
        pool._path = None
        pool._categories, pool._labels = _parse_catalog(raw, source="<mapping>")
        return pool

    def keys(self) -> List[str]:
        return list(self._categories)

    def all(self) -> List[ImageCategory]:
        return list(self._categories.values())

    def get(self, key: str) -> ImageCategory:
        try:
            return self._categories[key]
        except (KeyError, TypeError):
            raise InvalidCategory(key, self.keys()) from None

    def images_for(self, key: str) -> Tuple[str, ...]:
        return self.get(key).images

    def label_for(self, image_id: str) -> str:
        """Fallback text for a tile face when no picture asset exists."""
        return self._labels.get(image_id, image_id)

    def _load_categories(self) -> Tuple[Dict[str, ImageCategory], Dict[str, str]]:
        if not self._path.exists():
            raise FileNotFoundError(f"Image catalog not found: {self._path}")
        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        return _parse_catalog(raw, source=self._path.name)


def _parse_catalog(raw: Any, source: str) -> Tuple[Dict[str, ImageCategory], Dict[str, str]]:
    if not raw or not isinstance(raw, dict) or not isinstance(raw.get("categories"), dict):
        raise ValueError(f"{source}: expected YAML with a 'categories' mapping")

    categories: Dict[str, ImageCategory] = {}
    labels: Dict[str, str] = {}
    for key, body in raw["categories"].items():
        key = str(key)
        if not isinstance(body, dict):
            raise ValueError(f"{source}: category '{key}' must be a mapping")
        title = body.get("title") or key.title()
        entries = body.get("images")
        if not isinstance(entries, list) or not entries:
            raise ValueError(f"{source}: category '{key}' has no images")

        images: List[str] = []
        for entry in entries:
            if isinstance(entry, dict):
                image_id = str(entry.get("id", "")).strip()
                label = str(entry.get("label") or image_id).strip()
            else:
                image_id = str(entry).strip()
                label = image_id
            if not image_id:
                raise ValueError(f"{source}: category '{key}' has an image without an id")
            if image_id in images:
                # a repeated id would put four copies of one picture in a deck
                raise ValueError(f"{source}: duplicate image '{image_id}' in category '{key}'")
            images.append(image_id)
            labels.setdefault(image_id, label)

        categories[key] = ImageCategory(key=key, name=str(title).strip(), images=tuple(images))

    if not categories:
        raise ValueError(f"{source}: no categories defined")
    return categories, labels

# app/services/cache.py
import hashlib
import json
import logging
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Sequence, Tuple

from gallery.model import PlacementConfig

logger = logging.getLogger(__name__)


def layout_key(topology: str, params: Mapping[str, Any], placement: PlacementConfig,
               artworks: Sequence[Any]) -> Tuple[Hashable, ...]:
    """Cache key for one layout request.

    Artwork records are hashed whole so a changed title is a different layout.
    """
    digest = hashlib.sha1(json.dumps(list(artworks), sort_keys=True, default=str).encode("utf-8")).hexdigest()
    return (
        topology,
        json.dumps(params, sort_keys=True, default=str),
        tuple(sorted(vars(placement).items())),
        len(artworks),
        digest,
    )


class LayoutCache:
    """Bounded LRU of computed layouts.

    Owned by the application: created at startup, disposed at shutdown.
    """

    def __init__(self, max_size: int = 64):
        self.max_size = max(0, max_size)
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.disposed = False

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable) -> Optional[Any]:
        layout = self._entries.get(key)
        if layout is not None:
            self._entries.move_to_end(key)
        return layout

    def put(self, key: Hashable, layout: Any) -> None:
        if self.disposed or self.max_size == 0:
            return
        self._entries[key] = layout
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted layout %s", evicted)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        layout = self.get(key)
        if layout is not None:
            self.hits += 1
            return layout
        self.misses += 1
        layout = compute()
        self.put(key, layout)
        return layout

    def evict(self, key: Hashable) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def dispose(self) -> None:
        logger.info("Disposing layout cache (%d entries, %d hits, %d misses)",
                    len(self._entries), self.hits, self.misses)
        self._entries.clear()
        self.disposed = True

    def stats(self) -> Dict[str, int]:
        return {"size": len(self._entries), "max_size": self.max_size, "hits": self.hits, "misses": self.misses}

"""Asset provider interface.

The core only needs two things from assets: the width of an image (for
layout and collision math) and a notification once everything is loaded
(which gates the Start button). Drawing surfaces are the renderer's
business; see crossing.render.sprites for the pygame provider.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Tuple

from crossing import config
from crossing.logging import get_logger

log = get_logger('assets')

ReadyCallback = Callable[[], None]


class AssetProvider(ABC):
    """Supplies image dimensions and an all-loaded notification.

    Subclasses implement get_image_width() and call _notify_loaded() once
    every image is available. Callbacks registered after that run
    immediately. If loading never completes the callbacks never run.
    """

    def __init__(self):
        self._ready = False
        self._callbacks: List[ReadyCallback] = []

    @property
    def is_ready(self) -> bool:
        return self._ready

    @abstractmethod
    def get_image_width(self, image_id: str) -> int:
        """Width in pixels of a loaded image.

        Raises:
            KeyError: If the image id is unknown
        """
        pass

    def on_all_loaded(self, callback: ReadyCallback) -> None:
        """Run callback once all images are loaded."""
        if self._ready:
            callback()
        else:
            self._callbacks.append(callback)

    def _notify_loaded(self) -> None:
        if self._ready:
            return
        self._ready = True
        log.debug("all assets loaded, %d listeners", len(self._callbacks))
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


class StaticAssetProvider(AssetProvider):
    """Asset provider backed by a fixed size table.

    Used headless and in tests. Ready immediately unless ready=False, in
    which case it waits for mark_loaded().

    Examples:
        >>> assets = StaticAssetProvider()
        >>> assets.get_image_width('enemy-bug')
        101
    """

    def __init__(
        self,
        sizes: Optional[Dict[str, Tuple[int, int]]] = None,
        ready: bool = True,
    ):
        super().__init__()
        self._sizes = dict(sizes if sizes is not None else config.IMAGE_SIZES)
        if ready:
            self._notify_loaded()

    def get_image_width(self, image_id: str) -> int:
        try:
            return self._sizes[image_id][0]
        except KeyError:
            raise KeyError(f"Unknown image '{image_id}'") from None

    def mark_loaded(self) -> None:
        self._notify_loaded()

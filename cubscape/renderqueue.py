"""The ordered list of image instances waiting to be drawn."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from cubscape.image import Image, Instance


@dataclass(eq=False)
class DrawCall:
    """A request to draw one instance of an image."""

    image: Image
    instance_id: int

    @property
    def instance(self) -> Instance:
        return self.image.instances[self.instance_id]

    @property
    def z(self) -> int:
        return self.instance.z


class RenderQueue:
    """Draw calls kept in the order they are rendered, back to front after sorting."""

    def __init__(self) -> None:
        self._calls: list[DrawCall] = []
        self.needs_sort = False

    def __len__(self) -> int:
        return len(self._calls)

    def __iter__(self) -> Iterator[DrawCall]:
        return iter(self._calls)

    def add(self, image: Image, instance_id: int) -> DrawCall:
        """Put a draw call for an image instance at the front of the queue."""
        if not 0 <= instance_id < len(image.instances):
            raise IndexError("the image has no instance with that id")
        call = DrawCall(image, instance_id)
        self._calls.insert(0, call)
        self.needs_sort = True
        return call

    def remove_image(self, image: Image) -> int:
        """Drop every draw call of the given image; return how many were dropped."""
        kept = [call for call in self._calls if call.image is not image]
        removed = len(self._calls) - len(kept)
        self._calls = kept
        return removed

    def sort(self) -> None:
        """Order the calls by depth; among equal depths the later call comes first."""
        self._calls = sorted(reversed(self._calls), key=lambda call: call.z)
        self.needs_sort = False

    def visible(self) -> Iterator[DrawCall]:
        """Yield the calls whose image and instance are both enabled."""
        for call in self._calls:
            if call.image.enabled and call.instance.enabled:
                yield call
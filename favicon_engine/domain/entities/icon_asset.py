"""Icon asset entity: the bytes served as a favicon plus their content type."""

from dataclasses import dataclass

from favicon_engine.core.constants import ICON_CONTENT_TYPES


@dataclass(frozen=True)
class IconAsset:
    """Immutable favicon payload.

    content_type is one of image/png, image/x-icon or image/svg+xml; any
    other value is rejected at construction.
    """

    content_type: str
    data: bytes

    def __post_init__(self) -> None:
        if self.content_type not in ICON_CONTENT_TYPES:
            raise ValueError(
                f"Unsupported icon content type: {self.content_type!r}"
            )
        if not isinstance(self.data, bytes):
            raise TypeError(
                f"Icon data must be bytes, got {type(self.data).__name__}"
            )

    @property
    def size(self) -> int:
        """Payload length in bytes."""
        return len(self.data)

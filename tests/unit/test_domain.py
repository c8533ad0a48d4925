"""Tests for domain exceptions, entities and value objects."""

import pytest

from favicon_engine.domain.entities.icon_asset import IconAsset
from favicon_engine.domain.entities.project import ProjectDescriptor
from favicon_engine.domain.exceptions import (
    CacheConfigurationException,
    CacheKeyException,
    FaviconEngineException,
)
from favicon_engine.domain.value_objects.core import HexColor
from favicon_engine.infrastructure.exceptions import (
    IconNotFoundError,
    IconPermissionError,
    IconReadException,
    IconReadFailedError,
)


class TestExceptions:
    def test_base_defaults(self) -> None:
        exc = FaviconEngineException("boom")
        assert str(exc) == "boom"
        assert exc.error_code == "FaviconEngineException"
        assert exc.details == {}

    def test_hierarchy(self) -> None:
        for exc in (
            CacheConfigurationException(0),
            CacheKeyException("bad"),
            IconNotFoundError("/p/favicon.ico"),
            IconPermissionError("/p/favicon.ico", "EACCES"),
            IconReadFailedError("/p/favicon.ico", "EIO", "I/O error"),
        ):
            assert isinstance(exc, FaviconEngineException)

    def test_icon_errors_share_base(self) -> None:
        assert issubclass(IconNotFoundError, IconReadException)
        assert issubclass(IconPermissionError, IconReadException)
        assert issubclass(IconReadFailedError, IconReadException)

    def test_read_failed_details(self) -> None:
        exc = IconReadFailedError("/p/x.ico", "EIO", "I/O error")
        assert exc.details == {"file_path": "/p/x.ico", "code": "EIO", "reason": "I/O error"}


class TestIconAsset:
    def test_valid(self) -> None:
        asset = IconAsset(content_type="image/png", data=b"abc")
        assert asset.size == 3

    def test_unsupported_content_type(self) -> None:
        with pytest.raises(ValueError):
            IconAsset(content_type="text/html", data=b"<html>")

    def test_data_must_be_bytes(self) -> None:
        with pytest.raises(TypeError):
            IconAsset(content_type="image/svg+xml", data="<svg/>")  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        asset = IconAsset(content_type="image/x-icon", data=b"")
        with pytest.raises(AttributeError):
            asset.data = b"x"  # type: ignore[misc]


class TestProjectDescriptor:
    def test_from_mapping(self) -> None:
        descriptor = ProjectDescriptor.from_mapping({"name": "My Project", "type": "dev", "port": 3000})
        assert descriptor == ProjectDescriptor(name="My Project", type="dev", port=3000)

    @pytest.mark.parametrize("data", [None, "not-a-dict", 42, []])
    def test_non_mapping_is_empty(self, data: object) -> None:
        assert ProjectDescriptor.from_mapping(data) == ProjectDescriptor()  # type: ignore[arg-type]

    def test_wrong_shapes_dropped(self) -> None:
        descriptor = ProjectDescriptor.from_mapping({"name": 5, "type": "   ", "port": True})
        assert descriptor == ProjectDescriptor()

    def test_port_as_text(self) -> None:
        assert ProjectDescriptor.from_mapping({"port": "8080"}).port == "8080"


class TestHexColor:
    def test_rgb(self) -> None:
        assert HexColor("#4ECDC4").rgb() == (0x4E, 0xCD, 0xC4)
        assert str(HexColor("#abcdef")) == "#abcdef"

    @pytest.mark.parametrize("value", ["#FFF", "4ECDC4", "#4ECDC4FF", "blue", "", None])
    def test_invalid(self, value: object) -> None:
        assert not HexColor.is_valid(value)
        with pytest.raises(ValueError):
            HexColor(value)  # type: ignore[arg-type]

"""
Tests for shared input validators.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from shared.utils.schemas import MenuItemCreate
from shared.utils.validators import is_internal_host, normalize_name, validate_image_reference


class TestValidateImageReference:
    """Tests for validate_image_reference()"""

    @pytest.mark.parametrize("value", [
        "https://img10.example.com/a.jpg",
        "https://cdn.example.com/menu/curry.jpg",
        "http://172.217.0.14/a.jpg",
        "https://localhost.example.com/a.jpg",
        "images/krapow-pork.jpg",
    ])
    def test_accepts_public_references(self, value):
        assert validate_image_reference(value) == value

    @pytest.mark.parametrize("value", [
        "http://172.16.0.5/a.jpg",
        "http://172.31.255.1/a.jpg",
        "http://10.0.0.1/a.jpg",
        "http://192.168.1.10/a.jpg",
        "http://169.254.169.254/latest/meta-data",
        "http://127.0.0.1:8000/a.jpg",
        "http://0.0.0.0/a.jpg",
        "http://[::1]/a.jpg",
        "http://localhost/a.jpg",
        "http://LOCALHOST./a.jpg",
        "http://metadata.google.internal/computeMetadata/v1",
        "http://user@10.1.2.3/a.jpg",
    ])
    def test_rejects_internal_hosts(self, value):
        with pytest.raises(ValueError, match="Internal"):
            validate_image_reference(value)

    @pytest.mark.parametrize("value", [
        "javascript:alert(1)",
        "ftp://example.com/a.jpg",
        "../secrets.txt",
    ])
    def test_rejects_other_schemes_and_paths(self, value):
        with pytest.raises(ValueError):
            validate_image_reference(value)

    def test_blank_becomes_none(self):
        assert validate_image_reference("   ") is None
        assert validate_image_reference(None) is None


class TestIsInternalHost:
    """Hostnames are matched exactly or by dot-suffix, never by substring."""

    def test_subdomain_of_blocked_name_is_internal(self):
        assert is_internal_host("api.localhost")

    def test_name_containing_private_prefix_is_public(self):
        assert not is_internal_host("img10.example.com")
        assert not is_internal_host("shop192.168.example.com")


class TestMenuItemImageUrl:
    """The schema applies the image check at the request boundary."""

    def _create(self, image_url):
        return MenuItemCreate(
            name="Green Curry",
            base_price="12.50",
            category={"name": "Curry"},
            image_url=image_url,
        )

    def test_public_host_with_digits_is_accepted(self):
        assert self._create("https://img10.example.com/a.jpg").image_url == "https://img10.example.com/a.jpg"

    def test_private_range_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            self._create("http://172.16.0.5/a.jpg")


class TestNormalizeName:

    def test_strips_and_blanks(self):
        assert normalize_name("  Size ") == "Size"
        assert normalize_name("   ") is None
        assert normalize_name(None) is None

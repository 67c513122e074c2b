import pytest
from pydantic import ValidationError

from models import (
    CollectionShape,
    DelayBackend,
    UnderbarSettings,
    get_settings,
    load_settings,
    reset_settings,
)
from utils import collection_shape, strict_equals, InvalidArgumentError


class TestSettings:
    """Test settings defaults and environment parsing"""

    def test_defaults(self, monkeypatch):
        for name in ("UNDERBAR_LOG_LEVEL", "UNDERBAR_MEMOIZE_SEPARATOR", "UNDERBAR_DELAY_BACKEND"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()
        assert settings.log_level == "INFO"
        assert settings.memoize_key_separator == ", "
        assert settings.delay_backend is DelayBackend.AUTO

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("UNDERBAR_LOG_LEVEL", "debug")
        monkeypatch.setenv("UNDERBAR_MEMOIZE_SEPARATOR", "::")
        monkeypatch.setenv("UNDERBAR_DELAY_BACKEND", "Thread")

        settings = load_settings()
        assert settings.log_level == "DEBUG"
        assert settings.memoize_key_separator == "::"
        assert settings.delay_backend is DelayBackend.THREAD

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("UNDERBAR_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            load_settings()

    def test_empty_separator_rejected(self):
        with pytest.raises(ValidationError):
            UnderbarSettings(memoize_key_separator="")

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            UnderbarSettings(delay_backend="cron")

    def test_settings_are_frozen(self):
        settings = UnderbarSettings()
        with pytest.raises(ValidationError):
            settings.log_level = "ERROR"

    def test_get_settings_is_cached_until_reset(self, monkeypatch):
        monkeypatch.setenv("UNDERBAR_MEMOIZE_SEPARATOR", "/")
        reset_settings()
        cached = get_settings()
        assert get_settings() is cached

        monkeypatch.setenv("UNDERBAR_MEMOIZE_SEPARATOR", "+")
        assert get_settings().memoize_key_separator == "/"

        reset_settings()
        assert get_settings().memoize_key_separator == "+"


class TestShapeDetection:
    """Test collection classification and strict equality"""

    @pytest.mark.parametrize("collection,expected", [
        ([1], CollectionShape.SEQUENCE),
        ((1,), CollectionShape.SEQUENCE),
        ("abc", CollectionShape.SEQUENCE),
        (range(2), CollectionShape.SEQUENCE),
        ({"a": 1}, CollectionShape.MAPPING),
        ({}, CollectionShape.MAPPING),
    ])
    def test_shapes(self, collection, expected):
        assert collection_shape(collection) is expected

    @pytest.mark.parametrize("value", [None, 3, 2.5, {1, 2}, object()])
    def test_rejects_other_values(self, value):
        with pytest.raises(InvalidArgumentError):
            collection_shape(value)

    def test_strict_equals(self):
        assert strict_equals(1, 1)
        assert strict_equals("a", "a")
        assert strict_equals([1, 2], [1, 2])
        assert not strict_equals(1, 1.0)
        assert not strict_equals(1, True)
        assert not strict_equals(0, False)
        assert not strict_equals("1", 1)

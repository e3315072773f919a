import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.config.settings import DEFAULT_STOCK_PROXY_BASE, Settings


class TestStockSettings(unittest.TestCase):
    def test_defaults_when_env_is_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.STOCK_PROXY_BASE, DEFAULT_STOCK_PROXY_BASE)
        self.assertEqual(settings.STOCK_PRICE_TIMEOUT_SEC, 3.0)
        self.assertTrue(settings.STOCK_PRICE_FALLBACK_ENABLED)

    def test_proxy_base_override_strips_trailing_slash(self):
        env = {"STOCK_PROXY_BASE": " https://proxy.example.test/ "}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.STOCK_PROXY_BASE, "https://proxy.example.test")

    def test_fallback_flag_parses_off_values(self):
        for raw in ("false", "0", "no", "OFF"):
            with patch.dict(os.environ, {"STOCK_PRICE_FALLBACK_ENABLED": raw}, clear=True):
                settings = Settings.from_env()
            self.assertFalse(settings.STOCK_PRICE_FALLBACK_ENABLED, raw)

    def test_invalid_fallback_flag_fails_validation(self):
        with patch.dict(os.environ, {"STOCK_PRICE_FALLBACK_ENABLED": "maybe"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_non_positive_timeout_fails_validation(self):
        with patch.dict(os.environ, {"STOCK_PRICE_TIMEOUT_SEC": "0"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()


if __name__ == "__main__":
    unittest.main()

import os
import unittest
from unittest.mock import patch

from organaizer.config import Settings


class TestSettings(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        settings = Settings.from_env(load_dotenv_file=False)

        self.assertFalse(settings.ai_enabled)
        self.assertEqual(settings.port, 3000)
        self.assertEqual(settings.cors_origins, ("*",))

    @patch.dict(os.environ, {
        "OPENROUTER_API_KEY": "secret",
        "OPENROUTER_MODEL": "vendor/model",
        "PORT": "8080",
        "ORGANAIZER_AI_TIMEOUT": "30",
        "ORGANAIZER_CORS_ORIGINS": "http://a.test, http://b.test",
    }, clear=True)
    def test_from_env(self):
        settings = Settings.from_env(load_dotenv_file=False)

        self.assertTrue(settings.ai_enabled)
        self.assertEqual(settings.model, "vendor/model")
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.ai_timeout, 30.0)
        self.assertEqual(settings.cors_origins, ("http://a.test", "http://b.test"))

    def test_validation(self):
        with self.assertRaises(ValueError):
            Settings(port=0)
        with self.assertRaises(ValueError):
            Settings(ai_timeout=0)
        with self.assertRaises(ValueError):
            Settings(ai_retries=-1)


if __name__ == "__main__":
    unittest.main()

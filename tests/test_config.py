from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from wp_static.config import config_sha256, load_config, resolve_source_settings
from wp_static.config_schema import AppConfig
from wp_static.errors import ConfigError


_VALID_YAML = """\
source:
  base_url_env: WP_API_URL
  endpoint_path: /latest-posts
  timeout_seconds: 15

site:
  title: Notes
  description: Posts from WordPress
"""


class TestConfig(unittest.TestCase):
    def test_load_config_ok(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.yaml"
            path.write_text(_VALID_YAML, encoding="utf-8")

            cfg = load_config(path)
            self.assertEqual(cfg.source.base_url_env, "WP_API_URL")
            self.assertEqual(cfg.source.timeout_seconds, 15)
            self.assertEqual(cfg.site.title, "Notes")

    def test_empty_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.yaml"
            path.write_text("", encoding="utf-8")

            cfg = load_config(path)
            self.assertEqual(cfg, AppConfig())
            self.assertEqual(cfg.source.endpoint_path, "/latest-posts")
            self.assertIsNone(cfg.source.timeout_seconds)

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError):
                load_config(Path(td) / "nope.yaml")

    def test_rejects_unknown_keys_and_bad_values(self) -> None:
        cases = [
            "source:\n  retries: 3\n",
            "source:\n  endpoint_path: latest-posts\n",
            "source:\n  base_url_env: 'not a name'\n",
            "source:\n  timeout_seconds: 0\n",
            "- just\n- a list\n",
        ]
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.yaml"
            for text in cases:
                with self.subTest(text=text):
                    path.write_text(text, encoding="utf-8")
                    with self.assertRaises(ConfigError):
                        load_config(path)

    def test_validation_message_names_field(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.yaml"
            path.write_text("source:\n  endpoint_path: posts\n", encoding="utf-8")

            with self.assertRaises(ConfigError) as ctx:
                load_config(path)
            self.assertIn("source.endpoint_path", str(ctx.exception))

    def test_resolve_source_settings_requires_env(self) -> None:
        cfg = AppConfig()

        with self.assertRaises(ConfigError):
            resolve_source_settings(cfg, environ={})
        with self.assertRaises(ConfigError):
            resolve_source_settings(cfg, environ={"WP_API_URL": "   "})

        settings = resolve_source_settings(
            cfg, environ={"WP_API_URL": " https://wp.test/wp-json/custom/v1/ "}
        )
        self.assertEqual(settings.base_url, "https://wp.test/wp-json/custom/v1/")
        self.assertEqual(
            settings.endpoint_url, "https://wp.test/wp-json/custom/v1/latest-posts"
        )

    def test_custom_env_name(self) -> None:
        cfg = AppConfig.model_validate({"source": {"base_url_env": "BLOG_API"}})
        with self.assertRaises(ConfigError) as ctx:
            resolve_source_settings(cfg, environ={"WP_API_URL": "https://wp.test"})
        self.assertIn("BLOG_API", str(ctx.exception))

        settings = resolve_source_settings(cfg, environ={"BLOG_API": "https://wp.test"})
        self.assertEqual(settings.endpoint_url, "https://wp.test/latest-posts")

    def test_config_sha256_is_stable(self) -> None:
        a = AppConfig.model_validate({"site": {"title": "A"}})
        b = AppConfig.model_validate({"site": {"title": "A"}})
        c = AppConfig.model_validate({"site": {"title": "B"}})
        self.assertEqual(config_sha256(a), config_sha256(b))
        self.assertNotEqual(config_sha256(a), config_sha256(c))


if __name__ == "__main__":
    unittest.main()

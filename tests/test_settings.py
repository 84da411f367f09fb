# ABOUTME: Tests for environment-driven configuration
# ABOUTME: Validates defaults, WORDPRESS_SOURCE_ overrides, and field bounds

import pytest
from pydantic import ValidationError

from wordpress_source.config import DEFAULT_ROUTES, Config, get_config, reload_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("BASE_URL", "PER_PAGE", "CONCURRENT", "TYPE_NAME", "DOWNLOAD_ACF_IMAGES", "ROUTES"):
        monkeypatch.delenv(f"WORDPRESS_SOURCE_{name}", raising=False)


def test_defaults():
    config = Config()

    assert config.base_url == ""
    assert config.api_base == "wp-json"
    assert config.per_page == 100
    assert config.concurrent == 10
    assert config.request_timeout is None
    assert config.type_name == "WordPress"
    assert config.routes == DEFAULT_ROUTES
    assert not config.split_posts_into_fragments
    assert not config.download_remote_images_from_posts
    assert not config.download_remote_featured_images
    assert not config.download_acf_images


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WORDPRESS_SOURCE_BASE_URL", "https://blog.example.com")
    monkeypatch.setenv("WORDPRESS_SOURCE_PER_PAGE", "25")
    monkeypatch.setenv("WORDPRESS_SOURCE_DOWNLOAD_ACF_IMAGES", "true")
    monkeypatch.setenv("WORDPRESS_SOURCE_ROUTES", '{"post": "/blog/:slug"}')

    config = Config()

    assert config.base_url == "https://blog.example.com"
    assert config.per_page == 25
    assert config.download_acf_images is True
    assert config.routes == {"post": "/blog/:slug"}


@pytest.mark.parametrize("per_page", [0, 101])
def test_per_page_bounds(per_page):
    with pytest.raises(ValidationError):
        Config(per_page=per_page)


def test_concurrent_must_be_positive():
    with pytest.raises(ValidationError):
        Config(concurrent=0)


def test_default_routes_are_not_shared():
    config = Config()
    config.routes["page"] = "/p/:slug"

    assert "page" not in DEFAULT_ROUTES
    assert "page" not in Config().routes


def test_reload_replaces_global_instance(monkeypatch):
    first = get_config()
    assert get_config() is first

    monkeypatch.setenv("WORDPRESS_SOURCE_TYPE_NAME", "Blog")
    reloaded = reload_config()

    assert reloaded is not first
    assert reloaded.type_name == "Blog"
    assert get_config() is reloaded

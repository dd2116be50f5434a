"""Tests for image reference splitting."""

from logstash_redis.image import split_image


class TestSplitImage:
    def test_plain_name(self):
        assert split_image("bla") == ("bla", "")

    def test_name_with_tag(self):
        assert split_image("foo:latest") == ("foo", "latest")

    def test_path_with_tag(self):
        assert split_image("foo/bar:latest") == ("foo/bar", "latest")

    def test_registry_without_port(self):
        assert split_image("my.registry.host/some/image:1.3.4") == (
            "my.registry.host/some/image",
            "1.3.4",
        )

    def test_registry_port_and_tag(self):
        assert split_image("my.registry.host:443/path/to/image:3.1.4") == (
            "my.registry.host:443/path/to/image",
            "3.1.4",
        )

    def test_registry_port_is_not_a_tag(self):
        assert split_image("my.registry.host:443/path/to/image") == (
            "my.registry.host:443/path/to/image",
            "",
        )

    def test_empty_string(self):
        assert split_image("") == ("", "")

    def test_colon_free_names_unchanged(self):
        for ref in ("nginx", "library/redis", "a.b.c/d/e/f", "registry.local/x"):
            assert split_image(ref) == (ref, "")

    def test_tag_without_slash_splits_off(self):
        for base, tag in (("foo", "1"), ("a/b/c", "v2.0-rc1"), ("host:5000/app", "sha-abc")):
            assert split_image(f"{base}:{tag}") == (base, tag)

    def test_trailing_colon_gives_empty_tag(self):
        assert split_image("foo:") == ("foo", "")

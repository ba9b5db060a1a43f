"""Tests for library resolution inside node_modules."""

import pytest

from modpath.resolution.errors import FileNotFound
from modpath.resolution.errors import InvalidAncestorPath
from modpath.resolution.errors import InvalidPackageManifest
from modpath.resolution.errors import PackageManifestNotFound
from modpath.resolution.models import ResolutionRequest
from modpath.resolution.options import ResolverOptions
from modpath.resolution.resolver import PathResolver


def _resolve(root, specifier, **option_fields):
    resolver = PathResolver(options=ResolverOptions(**option_fields))
    return resolver.resolve(specifier, str(root))


class TestEntryFields:
    def test_field_priority(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {"node_modules/dual/package.json": {"module": "./esm/index.js", "main": "./index.js"}},
        )
        # Entries carrying a full extension are trusted without probing the disk
        assert _resolve(tmp_path, "dual") == str(tmp_path / "node_modules" / "dual" / "esm" / "index.js")

    def test_empty_field_falls_through(self, tmp_path, write_tree):
        write_tree(tmp_path, {"node_modules/dual/package.json": {"module": "", "main": "./index.js"}})
        assert _resolve(tmp_path, "dual") == str(tmp_path / "node_modules" / "dual" / "index.js")

    def test_non_string_field_is_skipped(self, tmp_path, write_tree):
        write_tree(tmp_path, {"node_modules/odd/package.json": {"module": {"import": "x"}, "main": "m.js"}})
        assert _resolve(tmp_path, "odd") == str(tmp_path / "node_modules" / "odd" / "m.js")

    def test_extra_field_comes_after_defaults(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/both/package.json": {"browser": "./b.js", "main": "./m.js"},
                "node_modules/web/package.json": {"browser": "./b.js"},
            },
        )
        assert _resolve(tmp_path, "both", extra_package_fields=["browser"]).endswith("m.js")
        assert _resolve(tmp_path, "web", extra_package_fields=["browser"]).endswith("b.js")

    def test_entry_without_extension_is_probed(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/lib/package.json": {"main": "./dist/main"},
                "node_modules/lib/dist/main.js": "",
                "node_modules/lib/dist/main.mjs": "",
            },
        )
        assert _resolve(tmp_path, "lib") == str(tmp_path / "node_modules" / "lib" / "dist" / "main.js")

    def test_entry_directory_uses_index(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/lib/package.json": {"main": "./lib"},
                "node_modules/lib/lib/index.js": "",
            },
        )
        assert _resolve(tmp_path, "lib") == str(tmp_path / "node_modules" / "lib" / "lib" / "index.js")

    def test_missing_field_defaults_to_index(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/plain/package.json": {"name": "plain"},
                "node_modules/plain/index.ts": "",
            },
        )
        assert _resolve(tmp_path, "plain") == str(tmp_path / "node_modules" / "plain" / "index.ts")

    def test_invalid_manifest(self, tmp_path, write_tree):
        write_tree(tmp_path, {"node_modules/bad/package.json": "{not json"})
        with pytest.raises(InvalidPackageManifest) as exc_info:
            _resolve(tmp_path, "bad")
        assert exc_info.value.specifier == "bad"


class TestLibraryLayout:
    def test_same_named_script_wins(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/thing.js": "",
                "node_modules/thing/package.json": {"main": "other.js"},
            },
        )
        assert _resolve(tmp_path, "thing") == str(tmp_path / "node_modules" / "thing.js")

    def test_deep_import(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/lodash/package.json": {"main": "lodash.js"},
                "node_modules/lodash/fp/map.js": "",
            },
        )
        assert _resolve(tmp_path, "lodash/fp/map") == str(tmp_path / "node_modules" / "lodash" / "fp" / "map.js")

    def test_scoped_package(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/@scope/pkg/package.json": {"main": "main.js"},
                "node_modules/@scope/pkg/main.js": "",
            },
        )
        assert _resolve(tmp_path, "@scope/pkg") == str(tmp_path / "node_modules" / "@scope" / "pkg" / "main.js")

    def test_rooted_specifier_skips_discovery(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "vendor/node_modules/left-pad/package.json": {"main": "index.js"},
            },
        )
        result = _resolve(tmp_path / "vendor", "node_modules/left-pad")
        assert result == str(tmp_path / "vendor" / "node_modules" / "left-pad" / "index.js")

    def test_no_manifest_uses_index(self, tmp_path, write_tree):
        write_tree(tmp_path, {"node_modules/bare/index.js": ""})
        assert _resolve(tmp_path, "bare") == str(tmp_path / "node_modules" / "bare" / "index.js")

    def test_no_manifest_no_index(self, tmp_path, write_tree):
        write_tree(tmp_path, {"node_modules/empty/README.md": ""})
        with pytest.raises(PackageManifestNotFound) as exc_info:
            _resolve(tmp_path, "empty")
        assert exc_info.value.specifier == "empty"

    def test_nested_manifest_is_found(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/odd/dist/package.json": {"main": "lib.js"},
            },
        )
        assert _resolve(tmp_path, "odd") == str(tmp_path / "node_modules" / "odd" / "dist" / "lib.js")

    def test_nested_manifest_entry_falls_back_to_library_index(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/odd/dist/package.json": {"main": "./gone"},
                "node_modules/odd/index.js": "",
            },
        )
        assert _resolve(tmp_path, "odd") == str(tmp_path / "node_modules" / "odd" / "index.js")

    @pytest.mark.parametrize("specifier", ["", "node_modules", "vendor/node_modules"])
    def test_specifier_naming_no_library(self, tmp_path, write_tree, specifier):
        write_tree(tmp_path, {"node_modules/a/package.json": {"main": "a.js"}, "node_modules/a/a.js": ""})

        with pytest.raises(FileNotFound) as exc_info:
            _resolve(tmp_path, specifier)

        assert exc_info.value.specifier == specifier
        assert exc_info.value.from_directory == str(tmp_path)


class TestManifestFallback:
    @pytest.fixture
    def typed_only(self, tmp_path, write_tree):
        """Libraries only present as @types packages."""
        return write_tree(
            tmp_path,
            {
                "node_modules/@types/node-thing/package.json": {"types": "index.d.ts"},
                "node_modules/@types/node-thing/index.d.ts": "",
                "node_modules/@types/scope__pkg/package.json": {},
                "node_modules/@types/scope__pkg/index.d.ts": "",
            },
        )

    def test_type_sidecar(self, typed_only):
        expected = typed_only / "node_modules" / "@types" / "node-thing" / "index.d.ts"
        assert _resolve(typed_only, "node-thing") == str(expected)

    def test_scoped_type_sidecar(self, typed_only):
        expected = typed_only / "node_modules" / "@types" / "scope__pkg" / "index.d.ts"
        assert _resolve(typed_only, "@scope/pkg") == str(expected)

    def test_type_sidecar_without_manifest_uses_index(self, tmp_path, write_tree):
        write_tree(tmp_path, {"node_modules/@types/foo/index.d.ts": ""})
        expected = tmp_path / "node_modules" / "@types" / "foo" / "index.d.ts"
        assert _resolve(tmp_path, "foo") == str(expected)

    def test_nested_root_without_manifest_uses_index(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/hoisted/index.js": "",
                "node_modules/consumer/node_modules/.keep": "",
            },
        )
        result = _resolve(tmp_path / "node_modules" / "consumer", "hoisted", retry_from_parent=False)
        assert result == str(tmp_path / "node_modules" / "hoisted" / "index.js")

    def test_strict_policy_fails_immediately(self, typed_only):
        with pytest.raises(InvalidAncestorPath) as exc_info:
            _resolve(typed_only, "node-thing", manifest_fallback="strict", retry_from_parent=False)

        assert isinstance(exc_info.value, PackageManifestNotFound)
        assert exc_info.value.specifier == "node-thing"

    def test_nested_dependency_root(self, tmp_path, write_tree):
        write_tree(
            tmp_path,
            {
                "node_modules/hoisted/package.json": {"main": "h.js"},
                "node_modules/consumer/node_modules/.keep": "",
                "node_modules/consumer/index.js": "",
            },
        )
        resolver = PathResolver(options=ResolverOptions(retry_from_parent=False))
        result = resolver.resolve("hoisted", str(tmp_path / "node_modules" / "consumer"))
        assert result == str(tmp_path / "node_modules" / "hoisted" / "h.js")

    def test_exhausted_escalation(self, tmp_path, write_tree):
        write_tree(tmp_path, {"node_modules/.keep": ""})
        with pytest.raises(InvalidAncestorPath) as exc_info:
            _resolve(tmp_path, "ghost")

        assert "ghost" in str(exc_info.value)
        assert exc_info.value.from_directory == str(tmp_path)


def test_locator_reports_original_request(tmp_path, write_tree):
    """Retries pass the original request through to error messages."""
    write_tree(tmp_path, {"node_modules/.keep": "", "a/b/.keep": ""})
    resolver = PathResolver()
    request = ResolutionRequest("missing-lib", "/original/context")

    with pytest.raises(PackageManifestNotFound) as exc_info:
        resolver.locator.locate("missing-lib", str(tmp_path / "a" / "b"), request)

    assert exc_info.value.from_directory == "/original/context"
    assert "/original/context" in str(exc_info.value)

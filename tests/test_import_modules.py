"""Tests for streaming decode and the go.mod import orchestration."""

import os
import tempfile

import pytest

from repo.errors import ManifestReadError, ModuleDecodeError, ResolverError
from repo.modules import import_repo_rules_modules, iter_modules
from versioning.models import Module, RepositoryRule

GO_MOD = b"module example.com/root\n\ngo 1.21\n"

GO_LIST_OUTPUT = b"""{
\t"Path": "a/b",
\t"Version": "v1.2.3"
}
{
\t"Path": "a/b/c",
\t"Version": "v0.0.0-20210101000000-abcdef123456"
}
{
\t"Path": "root",
\t"Version": "v0.0.0",
\t"Main": true
}
"""


def fake_name(path):
    return "n(" + path + ")"


@pytest.fixture
def temp_root(tmp_path, monkeypatch):
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "go.mod"
    path.write_bytes(GO_MOD)
    return path


class TestIterModules:
    """Test lazy decoding of concatenated JSON records."""

    def test_decodes_concatenated_objects(self):
        data = b'{"Path":"a","Version":"v1"}{"Path":"b","Version":"v2"}\n  {"Path":"c","Main":true}'
        assert list(iter_modules(data)) == [
            Module(path="a", version="v1"),
            Module(path="b", version="v2"),
            Module(path="c", main=True),
        ]

    def test_empty_and_whitespace(self):
        assert list(iter_modules(b"")) == []
        assert list(iter_modules(b" \n\t ")) == []

    def test_accepts_text(self):
        assert list(iter_modules('{"Path":"a"}')) == [Module(path="a")]

    def test_malformed_record_fails_after_earlier_records(self):
        stream = iter_modules(b'{"Path":"a","Version":"v1"}\n{"Path": oops}\n{"Path":"c"}')
        assert next(stream) == Module(path="a", version="v1")
        with pytest.raises(ModuleDecodeError):
            next(stream)

    def test_truncated_record(self):
        with pytest.raises(ModuleDecodeError):
            list(iter_modules(b'{"Path":"a"'))

    def test_non_object_record(self):
        with pytest.raises(ModuleDecodeError, match="list"):
            list(iter_modules(b'["a"]'))

    @pytest.mark.parametrize(
        "record,field",
        [
            (b'{"Path":5,"Version":"v1"}', "Path"),
            (b'{"Path":"a","Version":7}', "Version"),
            (b'{"Path":"a","Version":"v1","Main":"false"}', "Main"),
            (b'{"Path":"a","Version":"v1","Main":1}', "Main"),
        ],
    )
    def test_wrong_field_type(self, record, field):
        with pytest.raises(ModuleDecodeError, match=field):
            list(iter_modules(record))

    def test_null_fields_allowed(self):
        assert list(iter_modules(b'{"Path":"a","Version":null,"Main":null}')) == [Module(path="a")]

    def test_invalid_utf8(self):
        with pytest.raises(ModuleDecodeError):
            list(iter_modules(b'{"Path":"\xff"}'))


class TestImportRepoRulesModules:
    """Test import_repo_rules_modules end to end with an injected resolver."""

    def test_example_stream(self, manifest, temp_root):
        rules = import_repo_rules_modules(
            str(manifest), list_modules=lambda d: GO_LIST_OUTPUT, name_fn=fake_name
        )
        assert rules == [
            RepositoryRule(name="n(a/b)", importpath="a/b", tag="v1.2.3"),
            RepositoryRule(name="n(a/b/c)", importpath="a/b/c", commit="abcdef123456"),
        ]

    def test_root_module_skipped_at_any_position(self, manifest, temp_root):
        data = (
            b'{"Path":"root","Main":true}'
            b'{"Path":"x/one","Version":"v1.0.0"}'
            b'{"Path":"x/two","Version":"v2.0.0+incompatible"}'
        )
        rules = import_repo_rules_modules(str(manifest), list_modules=lambda d: data)
        assert [r.importpath for r in rules] == ["x/one", "x/two"]
        assert [r.tag for r in rules] == ["v1.0.0", "v2.0.0"]
        assert rules[0].name == "x_one"

    def test_default_name_fn(self, manifest, temp_root):
        data = b'{"Path":"github.com/pkg/errors","Version":"v0.9.1"}'
        rules = import_repo_rules_modules(str(manifest), list_modules=lambda d: data)
        assert rules[0].name == "com_github_pkg_errors"

    def test_only_root_module(self, manifest, temp_root):
        data = b'{"Path":"root","Main":true}'
        assert import_repo_rules_modules(str(manifest), list_modules=lambda d: data) == []

    def test_resolver_sees_copy_not_original(self, manifest, temp_root):
        seen = {}

        def fake_list(work_dir):
            seen["dir"] = work_dir
            go_mod = os.path.join(work_dir, "go.mod")
            with open(go_mod, "rb") as f:
                seen["content"] = f.read()
            # go list rewrites go.mod in place
            with open(go_mod, "ab") as f:
                f.write(b"require golang.org/x/sys v0.1.0\n")
            return b""

        import_repo_rules_modules(str(manifest), list_modules=fake_list)

        assert seen["dir"] != str(manifest.parent)
        assert seen["content"] == GO_MOD
        assert manifest.read_bytes() == GO_MOD
        assert not os.path.exists(seen["dir"])
        assert os.listdir(temp_root) == []

    def test_resolver_failure_cleans_up(self, manifest, temp_root):
        def failing(work_dir):
            raise ResolverError("go list -m -json all exited with status 1", returncode=1)

        with pytest.raises(ResolverError):
            import_repo_rules_modules(str(manifest), list_modules=failing)
        assert os.listdir(temp_root) == []

    def test_decode_failure_cleans_up(self, manifest, temp_root):
        data = b'{"Path":"a","Version":"v1"}{broken'
        with pytest.raises(ModuleDecodeError):
            import_repo_rules_modules(str(manifest), list_modules=lambda d: data)
        assert os.listdir(temp_root) == []

    def test_wrong_field_type_is_decode_error(self, manifest, temp_root):
        data = b'{"Path":"a","Version":"v1","Main":"false"}'
        with pytest.raises(ModuleDecodeError):
            import_repo_rules_modules(str(manifest), list_modules=lambda d: data)
        assert os.listdir(temp_root) == []

    def test_missing_manifest(self, tmp_path, temp_root):
        calls = []
        with pytest.raises(ManifestReadError):
            import_repo_rules_modules(
                str(tmp_path / "nope" / "go.mod"), list_modules=calls.append
            )
        assert calls == []
        assert os.listdir(temp_root) == []

"""Tests for the template renderer.

Covers:
- ${dotted.path} substitution, including nested dicts and attributes
- Fail-open placeholders: verbatim output plus TemplateResolutionWarning
- Block tags and expressions alongside placeholders
- TemplateSourceError for missing or malformed templates
- Override directories shadowing bundled templates
- list_templates() and the js_string filter
"""

from __future__ import annotations

import warnings
from pathlib import Path

import pytest

from screamgen.scaffolder.errors import TemplateResolutionWarning, TemplateSourceError
from screamgen.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Placeholder substitution
# ---------------------------------------------------------------------------


class TestRenderString:
    def test_resolves_dotted_path(self, renderer: TemplateRenderer) -> None:
        result = renderer.render_string("Hello ${user.name}!", {"user": {"name": "Ana"}})
        assert result == "Hello Ana!"

    def test_missing_key_is_left_verbatim_with_warning(
        self, renderer: TemplateRenderer
    ) -> None:
        with pytest.warns(TemplateResolutionWarning, match=r"user\.missing"):
            result = renderer.render_string(
                "Hello ${user.missing}!", {"user": {"name": "Ana"}}
            )
        assert result == "Hello ${user.missing}!"

    def test_missing_root_is_left_verbatim(self, renderer: TemplateRenderer) -> None:
        with pytest.warns(TemplateResolutionWarning):
            result = renderer.render_string("${nothing.here.at.all}", {})
        assert result == "${nothing.here.at.all}"

    def test_single_name(self, renderer: TemplateRenderer) -> None:
        assert renderer.render_string("${greeting}", {"greeting": "hi"}) == "hi"

    def test_deeply_nested(self, renderer: TemplateRenderer) -> None:
        ctx = {"a": {"b": {"c": {"d": "deep"}}}}
        assert renderer.render_string("${a.b.c.d}", ctx) == "deep"

    def test_only_the_missing_placeholder_is_kept(
        self, renderer: TemplateRenderer
    ) -> None:
        with pytest.warns(TemplateResolutionWarning):
            result = renderer.render_string(
                "${a.x} and ${a.y}", {"a": {"x": "found"}}
            )
        assert result == "found and ${a.y}"

    def test_resolved_placeholders_do_not_warn(self, renderer: TemplateRenderer) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            renderer.render_string("${user.name}", {"user": {"name": "Ana"}})

    def test_non_string_values(self, renderer: TemplateRenderer) -> None:
        ctx = {"settings": {"port": 3000, "enabled": True}}
        assert renderer.render_string("${settings.port}/${settings.enabled}", ctx) == "3000/True"

    def test_no_html_escaping(self, renderer: TemplateRenderer) -> None:
        assert renderer.render_string("${v}", {"v": "<a & b>"}) == "<a & b>"

    def test_literal_braces_untouched(self, renderer: TemplateRenderer) -> None:
        source = "function f() { return {}; }"
        assert renderer.render_string(source, {}) == source

    def test_block_tags(self, renderer: TemplateRenderer) -> None:
        source = "{% for d in domains %}${d.name};{% endfor %}"
        ctx = {"domains": [{"name": "orders"}, {"name": "users"}]}
        assert renderer.render_string(source, ctx) == "orders;users;"

    def test_expression_with_filter(self, renderer: TemplateRenderer) -> None:
        assert renderer.render_string("${ name | upper }", {"name": "ana"}) == "ANA"

    def test_js_string_filter(self, renderer: TemplateRenderer) -> None:
        result = renderer.render_string("${ text | js_string }", {"text": "it's \"x\"\n"})
        assert result == "'it\\'s \"x\"\\n'"

    @pytest.mark.parametrize("key", ["items", "keys", "values", "get", "update", "copy", "pop"])
    def test_keys_named_like_dict_methods(self, key: str, renderer: TemplateRenderer) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = renderer.render_string(f"Hello ${{user.{key}}}!", {"user": {key: "3"}})
        assert result == "Hello 3!"

    def test_missing_dict_method_key_is_left_verbatim(
        self, renderer: TemplateRenderer
    ) -> None:
        with pytest.warns(TemplateResolutionWarning, match=r"user\.items"):
            result = renderer.render_string("${user.items}", {"user": {"name": "Ana"}})
        assert result == "${user.items}"

    def test_attributes_of_objects(self, renderer: TemplateRenderer) -> None:
        class Owner:
            name = "Ana"

        assert renderer.render_string("${owner.name}", {"owner": Owner()}) == "Ana"

    def test_list_index_segment(self, renderer: TemplateRenderer) -> None:
        ctx = {"domains": [{"name": "orders"}, {"name": "users"}]}
        assert renderer.render_string("${domains.1.name}", ctx) == "users"

    def test_loop_variable_root(self, renderer: TemplateRenderer) -> None:
        source = "{% for d in domains %}${d.items};{% endfor %}"
        ctx = {"domains": [{"items": "a"}, {"items": "b"}]}
        assert renderer.render_string(source, ctx) == "a;b;"

    def test_hyphenated_key(self, renderer: TemplateRenderer) -> None:
        ctx = {"user-name": "Ana", "user": {"first-name": "Bea"}}
        assert renderer.render_string("${user-name}/${user.first-name}", ctx) == "Ana/Bea"

    @pytest.mark.parametrize(
        "source",
        ["Hello ${user-name}!", "Hello ${user name}!", "Hello ${user.first-name}!", "${not}"],
    )
    def test_unparseable_placeholder_is_left_verbatim(
        self, source: str, renderer: TemplateRenderer
    ) -> None:
        with pytest.warns(TemplateResolutionWarning):
            result = renderer.render_string(source, {})
        assert result == source

    def test_unparseable_placeholder_in_template_file(self, tmp_path: Path) -> None:
        (tmp_path / "odd.j2").write_text("a ${user name}\nb ${who}\n", encoding="utf-8")
        with pytest.warns(TemplateResolutionWarning, match="odd.j2"):
            result = TemplateRenderer(tmp_path).render("odd.j2", {"who": "me"})
        assert result == "a ${user name}\nb me\n"

    def test_raw_block_is_not_rewritten(self, renderer: TemplateRenderer) -> None:
        source = "{% raw %}echo ${HOME}{% endraw %} ${who}"
        assert renderer.render_string(source, {"who": "me"}) == "echo ${HOME} me"

    def test_malformed_inline_template(self, renderer: TemplateRenderer) -> None:
        with pytest.raises(TemplateSourceError):
            renderer.render_string("{% if %}", {})


# ---------------------------------------------------------------------------
# Template files
# ---------------------------------------------------------------------------


class TestRenderFile:
    def test_missing_template(self, renderer: TemplateRenderer) -> None:
        with pytest.raises(TemplateSourceError, match="not found"):
            renderer.render("does/not/exist.j2", {})

    def test_malformed_template(self, tmp_path: Path) -> None:
        (tmp_path / "broken.j2").write_text("{% for x in %}", encoding="utf-8")
        with pytest.raises(TemplateSourceError, match="malformed"):
            TemplateRenderer(tmp_path).render("broken.j2", {})

    def test_warning_names_the_template(self, tmp_path: Path) -> None:
        (tmp_path / "greet.j2").write_text("Hi ${who.name}\n", encoding="utf-8")
        with pytest.warns(TemplateResolutionWarning, match="greet.j2"):
            result = TemplateRenderer(tmp_path).render("greet.j2", {})
        assert result == "Hi ${who.name}\n"

    def test_keeps_trailing_newline(self, tmp_path: Path) -> None:
        (tmp_path / "a.j2").write_text("line\n", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("a.j2", {}) == "line\n"

    def test_override_dir_shadows_bundled(self, tmp_path: Path) -> None:
        override = tmp_path / "overrides"
        (override / "project").mkdir(parents=True)
        (override / "project" / "gitignore.j2").write_text("custom\n", encoding="utf-8")

        renderer = TemplateRenderer(override_dir=override)
        assert renderer.render("project/gitignore.j2", {}) == "custom\n"
        # Templates not overridden still come from the bundle
        assert "ValidationError" in renderer.render("project/errors.js.j2", {})

    def test_list_templates(self, renderer: TemplateRenderer) -> None:
        names = renderer.list_templates("domain")
        assert "domain/entity.js.j2" in names
        assert "domain/repositories/memory.js.j2" in names
        assert names == sorted(names)
        assert all(name.startswith("domain/") for name in names)

    def test_list_templates_includes_overrides(self, tmp_path: Path) -> None:
        (tmp_path / "extra").mkdir()
        (tmp_path / "extra" / "mine.j2").write_text("x", encoding="utf-8")
        renderer = TemplateRenderer(override_dir=tmp_path)
        assert "extra/mine.j2" in renderer.list_templates()

    def test_list_templates_unknown_prefix(self, renderer: TemplateRenderer) -> None:
        assert renderer.list_templates("nope") == []

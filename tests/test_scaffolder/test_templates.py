"""Tests for the Jinja2 template renderer (fhevm_hub.scaffolder.templates)."""

from __future__ import annotations

import pytest
from jinja2 import UndefinedError

from fhevm_hub.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestTemplateRenderer:
    def test_bundled_templates(self, renderer):
        assert renderer.list_templates() == ["README.category.md.j2", "README.example.md.j2"]

    def test_missing_dir_lists_nothing(self, tmp_path):
        assert TemplateRenderer(tmp_path / "nowhere").list_templates() == []

    def test_undefined_variable_is_an_error(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render_string("{{ missing }}", {})

    def test_render_to_file_creates_parents(self, tmp_path):
        (tmp_path / "tpl").mkdir()
        (tmp_path / "tpl" / "hello.j2").write_text("Hello {{ name }}\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path / "tpl")

        out = renderer.render_to_file("hello.j2", tmp_path / "a" / "b" / "hello.txt", {"name": "FHE"})

        assert out.read_text(encoding="utf-8") == "Hello FHE\n"


class TestFilters:
    def test_md_escape(self, renderer):
        assert renderer.render_string("{{ v | md_escape }}", {"v": "a_b*c"}) == "a\\_b\\*c"

    def test_code_span(self, renderer):
        assert renderer.render_string("{{ v | code_span }}", {"v": "a`b"}) == "``a`b``"

    def test_fence(self, renderer):
        rendered = renderer.render_string("{{ v | fence }}", {"v": "x\n```\ny"})
        assert rendered == "````\nx\n```\ny\n````"

    def test_link_target(self, renderer):
        assert renderer.render_string("{{ v | link_target }}", {"v": "a b(c)"}) == "a%20b%28c%29"

    def test_basename(self, renderer):
        assert renderer.render_string("{{ v | basename }}", {"v": "basic/FHECounter.sol"}) == "FHECounter.sol"

    def test_catalog_text_is_escaped_in_readme(self, renderer, catalog):
        entry = catalog.resolve_example("fhe-counter").model_copy(update={"title": "Counter <v2>"})
        readme = renderer.render("README.example.md.j2", {"entry": entry, "resources": []})
        assert readme.startswith("# Counter \\<v2\\> - FHEVM Example\n")

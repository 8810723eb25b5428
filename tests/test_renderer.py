"""Tests for the section dispatcher (document → Markdown)."""

import json
import unittest
from unittest import mock

from ghostmd.mobiledoc import MobiledocRenderer, RenderConfig, render, render_with_diagnostics
from ghostmd.mobiledoc.rendering import Severity


def _doc(sections, markups=(), cards=(), atoms=()):
    return {
        "version": "0.3.1",
        "atoms": list(atoms),
        "cards": list(cards),
        "markups": list(markups),
        "sections": list(sections),
    }


def _p(text, tag="p"):
    return [1, tag, [[0, [], 0, text]]]


class TestRenderer(unittest.TestCase):
    def test_single_paragraph_is_literal_text(self):
        self.assertEqual(render(_doc([_p("Hello, world.")])), "Hello, world.")

    def test_heading_levels(self):
        for level in range(1, 7):
            out = render(_doc([_p("Title", tag=f"h{level}")]))
            self.assertEqual(out, "#" * level + " Title")

    def test_unknown_block_tag_passes_through(self):
        report = render_with_diagnostics(_doc([_p("quoted", tag="aside")]))
        self.assertEqual(report.markdown, "quoted")
        self.assertEqual(len(report.warnings), 1)
        self.assertEqual(report.warnings[0].section_index, 0)

    def test_extra_block_prefixes_from_config(self):
        prefixes = dict(RenderConfig().block_prefixes, blockquote="> ")
        conf = RenderConfig(block_prefixes=prefixes)
        self.assertEqual(render(_doc([_p("q", tag="blockquote")]), conf), "> q")

    def test_config_is_hashable_and_frozen(self):
        conf = RenderConfig(block_prefixes={"p": "", "h1": "# "})
        self.assertEqual(conf.block_prefixes, (("p", ""), ("h1", "# ")))
        same = RenderConfig(block_prefixes=(("p", ""), ("h1", "# ")))
        self.assertEqual(hash(conf), hash(same))
        self.assertEqual(conf.block_prefix("H1"), "# ")
        self.assertIsNone(conf.block_prefix("h2"))
        hash(RenderConfig())

    def test_sections_joined_by_blank_line(self):
        out = render(_doc([_p("one"), _p("two", tag="h2"), [2, "https://img"]]))
        self.assertEqual(out, "one\n\n## two\n\n![Image](https://img)")

    def test_unknown_section_is_isolated(self):
        report = render_with_diagnostics(_doc([_p("one"), [99, "x"], _p("three")]))
        blocks = [b for b in report.markdown.split("\n\n") if b]
        self.assertEqual(blocks, ["one", "three"])
        self.assertEqual(len(report.errors), 1)
        self.assertEqual(report.errors[0].section_index, 1)
        self.assertIn('Unexpected section type "99"', report.errors[0].message)

    def test_malformed_section_is_isolated(self):
        out = render(_doc([_p("one"), [1, "p", 5], _p("three")]))
        self.assertEqual(out, "one\n\n\n\nthree")

    def test_unexpected_error_in_a_section_is_isolated(self):
        with mock.patch(
            "ghostmd.mobiledoc.rendering.renderer.render_image_section",
            side_effect=RuntimeError("boom"),
        ):
            report = render_with_diagnostics(_doc([[2, "u"], _p("after")]))
        self.assertEqual(report.markdown, "\n\nafter")
        self.assertEqual(report.errors[0].message, "boom")

    def test_null_marker_text_only_drops_that_marker(self):
        report = render_with_diagnostics(
            _doc([[1, "p", [[0, [], 0, "keep "], [0, [], 0, None]]]])
        )
        self.assertEqual(report.markdown, "keep ")
        self.assertEqual(len(report.errors), 1)
        self.assertEqual(report.errors[0].unit, "marker")
        self.assertEqual(report.errors[0].section_index, 0)

    def test_link_round_trip(self):
        doc = _doc(
            [[1, "p", [[0, [0], 0, "go"], [0, [], 1, ""], [0, [], 0, " now"]]]],
            markups=[["a", ["href", "https://x"]]],
        )
        self.assertEqual(render(doc), "[go](https://x) now")

    def test_open_link_does_not_leak_into_next_section(self):
        doc = _doc(
            [
                [1, "p", [[0, [0], 0, "dangling"]]],
                [1, "p", [[0, [], 1, "closed"]]],
            ],
            markups=[["a", ["href", "https://x"]]],
        )
        report = render_with_diagnostics(doc)
        self.assertEqual(report.markdown, "[dangling\n\nclosed")
        self.assertNotIn("https://x", report.markdown)
        self.assertEqual(report.warnings[0].section_index, 1)

    def test_unordered_list(self):
        doc = _doc([[3, "ul", [[[0, [], 0, "a"]], [[0, [], 0, "b"]]]]])
        self.assertEqual(render(doc), "* a\n* b")

    def test_ordered_list_numbers_from_one(self):
        doc = _doc([[3, "ol", [[[0, [], 0, "a"]], [[0, [], 0, "b"]], [[0, [], 0, "c"]]]]])
        self.assertEqual(render(doc), "1. a\n2. b\n3. c")

    def test_list_items_do_not_share_markup_state(self):
        doc = _doc(
            [[3, "ul", [[[0, [0], 0, "bold"]], [[0, [], 1, "plain"]]]]],
            markups=[["strong"]],
        )
        out = render(doc)
        self.assertEqual(out, "* **bold\n* plain")

    def test_unknown_list_tag_renders_empty(self):
        report = render_with_diagnostics(
            _doc([[3, "dl", [[[0, [], 0, "a"]]]], _p("after")])
        )
        self.assertEqual(report.markdown, "\n\nafter")
        self.assertIn("Unknown list type: dl", report.warnings[0].message)

    def test_card_sections(self):
        doc = _doc(
            [_p("Intro"), [10, 0], [10, 1], [10, 7]],
            cards=[
                ["code", {"code": "x=1", "language": "Python"}],
                ["image", {"src": "u", "caption": "c"}],
            ],
        )
        report = render_with_diagnostics(doc)
        self.assertEqual(
            report.markdown,
            "Intro\n\n```python\nx=1\n```\n\n![Image](u)\n*c*\n\n",
        )
        self.assertEqual(report.errors[0].section_index, 3)
        self.assertEqual(report.errors[0].unit, "card")

    def test_json_string_input(self):
        self.assertEqual(render(json.dumps(_doc([_p("hi")]))), "hi")

    def test_unparseable_document_does_not_raise(self):
        report = render_with_diagnostics("{not json")
        self.assertEqual(report.markdown, "")
        self.assertIs(report.errors[0].severity, Severity.ERROR)
        self.assertEqual(render(["not", "a", "document"]), "")

    def test_class_interface(self):
        renderer = MobiledocRenderer(RenderConfig(bullet="-"))
        doc = _doc([[3, "ul", [[[0, [], 0, "a"]]]]])
        self.assertEqual(renderer.render(doc), "- a")
        self.assertEqual(renderer.render_with_diagnostics(doc).diagnostics, ())

    def test_no_trimming_of_output(self):
        self.assertEqual(render(_doc([_p("  padded  ")])), "  padded  ")


if __name__ == "__main__":
    unittest.main()

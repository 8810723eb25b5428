"""Tests for front matter, post conversion and batch export."""

import os
import tempfile
import unittest

from ghostmd.ghost import JsonPostSource, Post, convert, export_posts, front_matter
from ghostmd.ghost.exporter import write_markdown
from ghostmd.mobiledoc import RenderConfig

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")

HELLO_BODY = (
    "## Intro\n\n"
    "Read [the docs](https://ghost.org) now.\n\n"
    "```python\nprint('hi')\n```\n\n"
    "![Image](https://img.example/1.png)\n*A cat*"
)


class TestExporter(unittest.TestCase):
    def setUp(self):
        self.source = JsonPostSource.from_file(os.path.join(FIXTURES, "posts_browse.json"))
        self.post = self.source.get("hello-world")

    def test_front_matter(self):
        self.assertEqual(
            front_matter(self.post),
            "---\n"
            'title: "Hello World"\n'
            'date: "2021-03-01T10:00:00.000Z"\n'
            'slug: "hello-world"\n'
            'feature_image: ""\n'
            "author:\n"
            '  name: "Jane Doe"\n'
            '  slug: "jane"\n'
            "tags:\n"
            '  - name: "News"\n'
            '    slug: "news"\n'
            "---\n",
        )

    def test_front_matter_without_tags_or_author(self):
        post = Post.model_validate({"slug": "x", "title": 'Say "hi"'})
        header = front_matter(post)
        self.assertIn('title: "Say \\"hi\\""', header)
        self.assertIn('  slug: "unknown-author"', header)
        self.assertNotIn("tags:", header)

    def test_convert(self):
        out = convert(self.post)
        self.assertEqual(out, front_matter(self.post) + "\n# Hello World\n\n" + HELLO_BODY)

    def test_convert_without_title(self):
        post = Post.model_validate(
            {"slug": "x", "mobiledoc": {"sections": [[1, "p", [[0, [], 0, "body"]]]]}}
        )
        self.assertTrue(convert(post).endswith("---\n\nbody"))

    def test_convert_with_figures(self):
        out = convert(self.post, RenderConfig(use_figure=True))
        self.assertIn('<img src="https://img.example/1.png">', out)
        self.assertIn("<figcaption>A cat</figcaption>", out)
        self.assertNotIn("![Image]", out)

    def test_broken_mobiledoc_converts_to_empty(self):
        post = Post.model_validate({"slug": "x", "mobiledoc": "{oops"})
        self.assertEqual(convert(post), "")
        self.assertEqual(convert(Post.model_validate({"slug": "y"})), "")

    def test_write_markdown(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_dir = os.path.join(tmp, "nested")
            path = write_markdown(self.post, "body", out_dir)
            self.assertEqual(path, os.path.join(out_dir, "hello-world.md"))
            with open(path, encoding="utf-8") as f:
                self.assertEqual(f.read(), "body")

    def test_export_posts(self):
        with tempfile.TemporaryDirectory() as tmp:
            summary = export_posts(self.source, tmp, batch_size=1, status="all")
            self.assertEqual(summary.added, 3)
            self.assertEqual(summary.failed, 0)
            self.assertEqual(
                sorted(os.listdir(tmp)),
                ["draft-post.md", "hello-world.md", "second-post.md"],
            )
            with open(os.path.join(tmp, "second-post.md"), encoding="utf-8") as f:
                self.assertTrue(f.read().endswith("# Second Post\n\n1. one\n2. two"))

    def test_export_counts_failures(self):
        source = JsonPostSource.from_data(
            [
                {"slug": "good", "mobiledoc": {"sections": []}},
                {"slug": "bad", "mobiledoc": "not json"},
            ]
        )
        with tempfile.TemporaryDirectory() as tmp:
            summary = export_posts(source, tmp)
            self.assertEqual((summary.added, summary.failed), (1, 1))
            self.assertEqual(os.listdir(tmp), ["good.md"])

    def test_unknown_author_exports_nothing(self):
        with tempfile.TemporaryDirectory() as tmp:
            summary = export_posts(self.source, tmp, author_slug="nobody")
            self.assertEqual((summary.added, summary.failed), (0, 0))
            self.assertEqual(os.listdir(tmp), [])


if __name__ == "__main__":
    unittest.main()

"""Tests for the markup cleaner stages and the full ``clean_html`` pipeline."""

from __future__ import annotations

import pytest

from newsletter.scraper import html_to_text
from newsletter.scraper.cleaner import (
    SEPARATOR,
    STAGES,
    byline_pattern,
    clean_html,
    convert_structure,
    decode_entities,
    normalize_whitespace,
    remove_blocks,
    remove_platform_noise,
    remove_void_tags,
    strip_tags,
)


# ---------------------------------------------------------------------------
# Individual stages
# ---------------------------------------------------------------------------

class TestRemoveBlocks:
    @pytest.mark.parametrize(
        "tag", ["script", "style", "nav", "footer", "header", "figure", "picture", "button"]
    )
    def test_drops_element_and_content(self, tag: str) -> None:
        html = f"before<{tag} class='x'>\nhidden\n</{tag}>after"
        assert remove_blocks(html) == "beforeafter"

    @pytest.mark.parametrize("cls", ["subscribe-widget", "post-share", "author-bio", "button-wrapper"])
    def test_drops_noise_divs(self, cls: str) -> None:
        html = f'<p>keep</p><div class="{cls}">noise</div>'
        assert remove_blocks(html) == "<p>keep</p>"

    def test_keeps_other_divs(self) -> None:
        html = '<div class="body">text</div>'
        assert remove_blocks(html) == html


def test_remove_void_tags() -> None:
    html = '<link rel="x"><meta name="y">A<img src="z.png"/>B'
    assert remove_void_tags(html) == "AB"


class TestConvertStructure:
    def test_heading(self) -> None:
        assert convert_structure("<h2 id='a'>Part</h2>") == f"\n\nPart\n{SEPARATOR}\n"

    def test_separator_is_fifty_equals(self) -> None:
        assert SEPARATOR == "=" * 50

    def test_paragraph_and_break(self) -> None:
        assert convert_structure("<p>one<br>two</p>") == "\none\ntwo\n"

    def test_emphasis(self) -> None:
        assert convert_structure("<strong>b</strong> <em>i</em>") == "**b** *i*"

    def test_link(self) -> None:
        html = '<a class="l" href="https://example.com">site</a>'
        assert convert_structure(html) == "site (https://example.com)"

    def test_pre_is_not_a_paragraph(self) -> None:
        assert convert_structure("<pre>code</pre>") == "<pre>code</pre>"


def test_strip_tags() -> None:
    assert strip_tags("<div><span>a</span> <custom-tag/>b</div>") == "a b"


class TestRemovePlatformNoise:
    def test_cdn_image_urls(self) -> None:
        text = "pic (https://substackcdn.com/image/fetch/x.png) and (https://substack-post-media.s3.amazonaws.com/y)"
        assert remove_platform_noise(text) == "pic  and "

    def test_share_and_comment_counts(self) -> None:
        text = "Share (javascript:void(0)) 12 (https://x.substack.com/p/post/comments)"
        assert remove_platform_noise(text).strip() == ""

    def test_trailing_previous(self) -> None:
        assert remove_platform_noise("The end.\nPrevious  ") == "The end.\n"

    def test_previous_mid_text_is_kept(self) -> None:
        assert remove_platform_noise("Previous posts were good.") == "Previous posts were good."

    def test_author_profile_links(self) -> None:
        assert remove_platform_noise("Jeremi (https://substack.com/@jeremi)") == "Jeremi "

    def test_byline_anywhere(self) -> None:
        text = "Intro\nJeremi Nuer and Luca Caviness Sep 14, 2025\nBody"
        assert remove_platform_noise(text) == "Intro\n\nBody"

    def test_leading_digits(self) -> None:
        assert remove_platform_noise("3 Hello\n  42 World") == "Hello\nWorld"

    def test_leading_counter_runs(self) -> None:
        assert remove_platform_noise("12 3 likes today\n 4\t5 6 more") == "likes today\nmore"

    def test_digits_before_welcome(self) -> None:
        assert remove_platform_noise("Hi there 7Welcome back") == "Hi there Welcome back"


def test_byline_pattern_for_other_authors() -> None:
    pattern = byline_pattern(("Ada Lovelace", "Charles Babbage"))
    assert pattern.search("Ada Lovelace and Charles Babbage Jan 3, 1843")
    assert not pattern.search("Ada Lovelace Jan 3, 1843")


class TestDecodeEntities:
    def test_fixed_table(self) -> None:
        assert decode_entities("&amp;&lt;&gt;&quot;&#39;") == "&<>\"'"

    def test_single_pass(self) -> None:
        assert decode_entities("&amp;lt;") == "&lt;"

    def test_unknown_entities_untouched(self) -> None:
        assert decode_entities("&nbsp;&copy;") == "&nbsp;&copy;"


class TestNormalizeWhitespace:
    def test_collapses_runs_of_blank_lines(self) -> None:
        assert normalize_whitespace("a\n\n\n\n\nb") == "a\n\nb"

    def test_blank_lines_with_spaces(self) -> None:
        assert normalize_whitespace("a\n  \n \t\n\nb") == "a\n\nb"

    def test_keeps_single_blank_line(self) -> None:
        assert normalize_whitespace("a\n\nb") == "a\n\nb"

    def test_trims(self) -> None:
        assert normalize_whitespace("\n\n  text \n") == "text"


def test_stage_order() -> None:
    assert [s.__name__ for s in STAGES] == [
        "remove_blocks",
        "remove_void_tags",
        "convert_structure",
        "strip_tags",
        "remove_platform_noise",
        "decode_entities",
        "normalize_whitespace",
    ]


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------

_SUBSTACK_ARTICLE = """\
<article>
  <header><h1>Site header</h1></header>
  <h1 class="post-title">Issue #12</h1>
  <h3 class="subtitle">On &quot;reading&quot; &amp; writing</h3>
  <div class="post-meta author-line">Jeremi Nuer and Luca Caviness</div>
  <p>Jeremi Nuer and Luca Caviness Sep 14, 2025</p>
  <figure><img src="https://substackcdn.com/a.png"><figcaption>caption</figcaption></figure>
  <p><strong>Jeremi:</strong> I read <em>a lot</em> this week.</p>
  <p>Luca: See <a href="https://example.com/book">this book</a>.</p>
  <div class="subscribe-widget"><p>Subscribe now</p></div>
  <script>track();</script>
  <button>Share</button>
</article>
"""


class TestCleanHtml:
    def test_heading_and_paragraph_example(self) -> None:
        html = "<h1>Intro</h1><p>Some <strong>bold</strong> text.</p>"
        assert clean_html(html) == f"Intro\n{SEPARATOR}\n\nSome **bold** text."

    def test_entity_round_trip(self) -> None:
        assert clean_html("&amp;&lt;&gt;&quot;&#39;") == "&<>\"'"

    def test_realistic_article(self) -> None:
        text = html_to_text(_SUBSTACK_ARTICLE)

        assert text.startswith(f"Issue #12\n{SEPARATOR}")
        assert 'On "reading" & writing' in text
        assert "**Jeremi:** I read *a lot* this week." in text
        assert "Luca: See this book (https://example.com/book)." in text
        for noise in ("Site header", "caption", "Subscribe", "track()", "Share", "Sep 14"):
            assert noise not in text

    def test_no_residual_tags(self) -> None:
        text = clean_html(_SUBSTACK_ARTICLE + "<unknown attr='1'>x</unknown><br/>")
        assert "<" not in text
        assert ">" not in text

    def test_never_three_blank_lines(self) -> None:
        html = "<p>a</p>\n\n\n<p></p>\n\n<div>\n\n\n</div><p>b</p>" * 3
        text = clean_html(html)
        assert "\n\n\n" not in text
        assert "\n \n\n" not in text

    def test_idempotent_on_clean_text(self) -> None:
        once = clean_html("<h2>Title</h2><p>First <em>para</em>.</p><p>Second para.</p>")
        assert clean_html(once) == once

    def test_idempotent_with_stacked_counters(self) -> None:
        once = clean_html("<p>12 3 likes today</p><p>7 8 9</p><p>Body</p>")
        assert once == "likes today\n\nBody"
        assert clean_html(once) == once

    def test_empty_and_garbage_input(self) -> None:
        assert clean_html("") == ""
        assert clean_html("<<<>>>") == ">>"
        assert clean_html("<p>unclosed <strong>bold") == "unclosed bold"

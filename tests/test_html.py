from minifier.tally import FrequencyTally
from processors import html

ATTRS = {"class", "id"}


class TestSplitTokens:
    def test_ascii_whitespace(self):
        assert html.split_tokens(" a\tb\n\nc  ") == ["a", "b", "c"]

    def test_empty(self):
        assert html.split_tokens("   ") == []


class TestCountAttributes:
    def test_class_lists_and_ids(self):
        tally = FrequencyTally()
        html.count_attributes(
            tally,
            '<div class="a\tb  a"></div><p id="x" title="a"></p>',
            ATTRS,
        )

        assert tally.as_dict() == {"class": {"a": 2, "b": 1}, "id": {"x": 1}}

    def test_style_blocks_delegate_to_css(self):
        tally = FrequencyTally()
        html.count_attributes(
            tally,
            "<html><head><style>.foo { color: red }</style></head>"
            '<body><div class="foo"></div></body></html>',
            ATTRS,
        )

        assert tally.counts("class") == {"foo": 2}

    def test_configured_extra_attribute(self):
        tally = FrequencyTally()
        html.count_attributes(
            tally, '<nav data-role="nav main"></nav>', {"data-role"}
        )

        assert tally.as_dict() == {"data-role": {"nav": 1, "main": 1}}


class TestApplyAttrMap:
    def test_tokens_substituted_in_order(self):
        out = html.apply_attr_map(
            {"class": {"alpha": "a", "beta": "b"}},
            '<div class="alpha beta alpha"></div>',
        )

        assert 'class="a b a"' in out

    def test_whitespace_collapsed_to_single_space(self):
        out = html.apply_attr_map(
            {"class": {"alpha": "a", "beta": "b"}},
            '<div class="alpha\n   beta"></div>',
        )

        assert 'class="a b"' in out

    def test_unmapped_tokens_pass_through(self):
        out = html.apply_attr_map(
            {"class": {"alpha": "a"}}, '<div class="alpha js-hook"></div>'
        )

        assert 'class="a js-hook"' in out

    def test_other_attributes_untouched(self):
        out = html.apply_attr_map(
            {"class": {"foo": "a"}, "id": {"foo": "b"}},
            '<a href="foo" title="foo" class="foo" id="foo">x</a>',
        )

        assert 'href="foo"' in out
        assert 'title="foo"' in out
        assert 'class="a"' in out
        assert 'id="b"' in out

    def test_style_block_rewritten_without_escaping(self):
        out = html.apply_attr_map(
            {"class": {"outer": "a", "inner": "b"}},
            "<html><head><style>.outer > .inner { color: red }</style></head>"
            '<body><div class="outer"><span class="inner"></span></div></body></html>',
        )

        assert "&gt;" not in out
        assert ".a" in out
        assert ".b" in out
        assert "outer" not in out
        assert "inner" not in out

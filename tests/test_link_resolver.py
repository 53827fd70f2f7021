"""
Link Resolver Tests

Run with: pytest tests/test_link_resolver.py -v
"""

import pytest

from scomment_core.config.settings import LinkConfig
from scomment_core.mapping.link_resolver import LinkResolver, strip_escapes


@pytest.fixture
def resolver():
    return LinkResolver()


class TestLinkRules:
    """Tests for each shorthand reference."""

    def test_plain_text_unchanged(self, resolver):
        """Text without trigger characters is returned as is."""
        text = "A paragraph of plain prose, with <b>markup</b> and 100 percent."
        assert resolver.resolve(text) == text

    def test_attribute_link(self, resolver):
        """@name links to the attribute."""
        assert resolver.resolve("Set @article-type here") == (
            "Set <a href='#p=attr-article-type'>@article-type</a> here"
        )

    def test_attribute_name_characters(self, resolver):
        """Attribute names stop at characters outside letters, - and _."""
        assert resolver.resolve("@xml_lang2") == "<a href='#p=attr-xml_lang'>@xml_lang</a>2"

    def test_parameter_entity_link(self, resolver):
        """%name; links to the parameter entity."""
        assert resolver.resolve("Uses %block.class; here") == (
            "Uses <a href='#p=pe-block.class'>%block.class;</a> here"
        )

    def test_parameter_entity_needs_semicolon(self, resolver):
        """A percent sign without a closing semicolon is left alone."""
        assert resolver.resolve("50% of cases") == "50% of cases"

    def test_general_entity_link(self, resolver):
        """&name; links to the general entity with escaped display text."""
        assert resolver.resolve("The &copy; symbol") == (
            "The <a href='#p=ge-copy'>&amp;copy;</a> symbol"
        )

    def test_reserved_entities_not_linked(self, resolver):
        """Built-in references and character references stay as written."""
        text = "a &amp; b &lt; c &gt; d &apos; &quot; &#x2014; &#160; &fdft;"
        assert resolver.resolve(text) == text

    def test_element_link(self, resolver):
        """A backtick before <name> links to the element."""
        assert resolver.resolve("see `<bar>") == "see <a href='#p=elem-bar'>&lt;bar&gt;</a>"

    def test_element_without_backtick_unchanged(self, resolver):
        """Ordinary markup is not treated as an element reference."""
        assert resolver.resolve("<i>bar</i>") == "<i>bar</i>"

    def test_mixed_references(self, resolver):
        """All rules apply to the same text."""
        result = resolver.resolve("`<sec> takes @sec-type and %sec-model;")
        assert result == (
            "<a href='#p=elem-sec'>&lt;sec&gt;</a> takes "
            "<a href='#p=attr-sec-type'>@sec-type</a> and "
            "<a href='#p=pe-sec-model'>%sec-model;</a>"
        )


class TestBackslashEscapes:
    """Tests for disabling links with a backslash."""

    @pytest.mark.parametrize("text", [
        "\\@foo",
        "\\%foo;",
        "\\&foo;",
        "\\`<foo>",
    ])
    def test_escaped_trigger_not_linked(self, resolver, text):
        """A backslash before the trigger character prevents linking."""
        assert resolver.resolve(text) == text

    def test_escape_applies_to_one_occurrence(self, resolver):
        """Only the escaped occurrence is skipped."""
        assert resolver.resolve("\\@a @b") == "\\@a <a href='#p=attr-b'>@b</a>"

    def test_strip_escapes(self):
        """Backslashes before trigger characters are removed."""
        assert strip_escapes("\\@a \\`<b> \\%c; \\&d;") == "@a `<b> %c; &d;"

    def test_strip_escapes_keeps_other_backslashes(self):
        """Backslashes before other characters are kept."""
        assert strip_escapes("C:\\temp \\n") == "C:\\temp \\n"


class TestResolverConfig:
    """Tests for configurable link targets."""

    def test_custom_reserved_entities(self):
        """The reserved entity list can be replaced."""
        resolver = LinkResolver(LinkConfig(reserved_entities=["nbsp;"]))
        assert resolver.resolve("&nbsp;") == "&nbsp;"
        assert resolver.resolve("&amp;") == "<a href='#p=ge-amp'>&amp;amp;</a>"

    def test_empty_reserved_entities(self):
        """With no reserved names every entity reference is linked."""
        resolver = LinkResolver(LinkConfig(reserved_entities=[]))
        assert resolver.resolve("&lt;") == "<a href='#p=ge-lt'>&amp;lt;</a>"

    def test_custom_href_template(self):
        """Link targets follow the configured templates."""
        resolver = LinkResolver(LinkConfig(element_href="elements/{name}.html"))
        assert resolver.resolve("`<p>") == "<a href='elements/p.html'>&lt;p&gt;</a>"

    def test_rule_order(self, resolver):
        """Rules run attribute, parameter entity, general entity, element."""
        assert resolver.rule_names == [
            "attribute", "parameter_entity", "general_entity", "element"
        ]

    def test_stats(self, resolver):
        """Rewrites are counted per rule."""
        resolver.resolve("@a @b `<c>")
        assert resolver.stats["attribute"] == 2
        assert resolver.stats["element"] == 1
        assert resolver.stats["general_entity"] == 0
        resolver.reset_stats()
        assert sum(resolver.stats.values()) == 0

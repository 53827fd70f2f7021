"""
Link Resolver
=============

Rewrites author shorthand references inside structured comment text
into hyperlinks to the generated documentation pages:

    @attr       -> attribute
    %name;      -> parameter entity
    &name;      -> general entity
    `<name>     -> element

A backslash immediately before the trigger character disables the link
for that occurrence. Rules run in a fixed order, each one a single pass
over the output of the previous rule.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
import logging
import re

from scomment_core.config.settings import LinkConfig

logger = logging.getLogger(__name__)

# Characters that trigger auto-linking; a preceding backslash escapes them.
TRIGGER_CHARS = "`@%&"

NOT_ESCAPED = r"(?<!\\)"

ATTRIBUTE_PATTERN = re.compile(NOT_ESCAPED + r"@([-_a-zA-Z]+)")
PARAMETER_ENTITY_PATTERN = re.compile(NOT_ESCAPED + r"%(\S+?);")
ELEMENT_PATTERN = re.compile(NOT_ESCAPED + r"`<(\S+?)>")

ESCAPED_TRIGGER_PATTERN = re.compile(r"\\(?=[" + re.escape(TRIGGER_CHARS) + "])")


def general_entity_pattern(reserved: List[str]) -> re.Pattern:
    """
    Build the general entity pattern, skipping reserved references.

    Args:
        reserved: Literal prefixes after "&" that must not be linked
            (e.g. "amp;", "#")
    """
    exclusion = ""
    if reserved:
        alternatives = "|".join(re.escape(r) for r in reserved)
        exclusion = f"(?!(?:{alternatives}))"
    return re.compile(NOT_ESCAPED + "&" + exclusion + r"(\S+?);")


def strip_escapes(text: str) -> str:
    """Remove backslashes that were used to disable auto-linking."""
    return ESCAPED_TRIGGER_PATTERN.sub("", text)


@dataclass
class LinkRule:
    """A single shorthand-to-hyperlink rewrite."""

    name: str
    pattern: re.Pattern
    href: str  # Template with a {name} placeholder
    display: Callable[[str], str]

    def render(self, match) -> str:
        target = match.group(1)
        return f"<a href='{self.href.format(name=target)}'>{self.display(target)}</a>"


class LinkResolver:
    """
    Applies the ordered link rules to section text.

    Example:
        resolver = LinkResolver()
        resolver.resolve("See `<front> and @article-type")
        # "See <a href='#p=elem-front'>&lt;front&gt;</a> and
        #  <a href='#p=attr-article-type'>@article-type</a>"
    """

    def __init__(self, config: Optional[LinkConfig] = None):
        config = config or LinkConfig()
        self.rules: List[LinkRule] = [
            LinkRule(
                name="attribute",
                pattern=ATTRIBUTE_PATTERN,
                href=config.attribute_href,
                display=lambda n: f"@{n}",
            ),
            LinkRule(
                name="parameter_entity",
                pattern=PARAMETER_ENTITY_PATTERN,
                href=config.parameter_entity_href,
                display=lambda n: f"%{n};",
            ),
            LinkRule(
                name="general_entity",
                pattern=general_entity_pattern(config.reserved_entities),
                href=config.general_entity_href,
                display=lambda n: f"&amp;{n};",
            ),
            LinkRule(
                name="element",
                pattern=ELEMENT_PATTERN,
                href=config.element_href,
                display=lambda n: f"&lt;{n}&gt;",
            ),
        ]
        self.stats: Dict[str, int] = {rule.name: 0 for rule in self.rules}

    def resolve(self, text: str) -> str:
        """Return text with every unescaped shorthand reference linked."""
        for rule in self.rules:
            text, count = rule.pattern.subn(rule.render, text)
            if count:
                self.stats[rule.name] += count
                logger.debug(f"Linked {count} {rule.name} reference(s)")
        return text

    def reset_stats(self) -> None:
        for name in self.stats:
            self.stats[name] = 0

    @property
    def rule_names(self) -> List[str]:
        """Return rule names in application order."""
        return [rule.name for rule in self.rules]

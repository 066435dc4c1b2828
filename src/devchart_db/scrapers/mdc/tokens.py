"""Markup token stream.

The extractors in ``extract.py`` only ever see a flat stream of tokens:

    StartTag(name, attrs) / EndTag(name) / Text(data) / End()

``iter_tokens`` produces that stream from raw HTML by walking a BeautifulSoup
tree (html.parser builder) depth-first. Tag and attribute names arrive
lowercased. Comments, doctypes and other declarations are skipped.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag


@dataclass(frozen=True)
class StartTag:
    name: str
    attrs: dict[str, str] = field(default_factory=dict)

    def attr(self, key: str) -> str | None:
        return self.attrs.get(key)


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class Text:
    data: str


@dataclass(frozen=True)
class End:
    pass


Token = StartTag | EndTag | Text | End


def _attr_value(v: object) -> str:
    if isinstance(v, (list, tuple)):
        return " ".join(str(x) for x in v)
    return "" if v is None else str(v)


def iter_tokens(markup: bytes | str) -> Iterator[Token]:
    """Tokenize HTML into StartTag/EndTag/Text tokens, terminated by End."""
    soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)

    # explicit stack; deeply nested pages must not hit the recursion limit
    stack: list[tuple[Tag | None, Iterator]] = [(None, iter(list(soup.contents)))]
    while stack:
        parent, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if parent is not None:
                yield EndTag(parent.name)
            continue

        if isinstance(child, Tag):
            yield StartTag(child.name, {k: _attr_value(v) for k, v in child.attrs.items()})
            stack.append((child, iter(list(child.contents))))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            yield Text(str(child))

    yield End()

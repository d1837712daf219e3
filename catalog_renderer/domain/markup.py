"""
Markup fragment tree.

Parses a rendered fragment into an immutable node tree and serializes it back.

Key behaviors:
- serialize(parse_fragment(s)) == s for any input, malformed markup included
- Elements keep their original start/end tag text; only elements whose
  attributes were replaced are rebuilt (attribute values re-escaped)
- Stray closing tags and unmatched '<' stay in the output as text
- Unclosed elements are closed implicitly and serialize without an end tag
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field, replace

VOID_ELEMENTS = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    ]
)

# Content of these elements is text, never markup
RAW_TEXT_ELEMENTS = frozenset(["script", "style", "textarea", "title"])

# Regex patterns for markup tokenizing
TOKEN_PATTERN = re.compile(
    r"<!--.*?-->|<(/?)([a-zA-Z][\w:.-]*)((?:[^>\"']|\"[^\"]*\"|'[^']*')*)>",
    re.DOTALL,
)
ATTR_PATTERN = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)

Attributes = tuple[tuple[str, str | None], ...]


def parse_attributes(attr_string: str) -> Attributes:
    """
    Parse attributes from the inside of a start tag.

    Names are lower-cased and values unescaped. Valueless attributes map to
    None. The first occurrence of a duplicated name wins.
    """
    attrs: list[tuple[str, str | None]] = []
    seen: set[str] = set()
    for match in ATTR_PATTERN.finditer(attr_string):
        name = match.group(1).lower()
        if name in seen:
            continue
        seen.add(name)
        raw = next((g for g in match.groups()[1:] if g is not None), None)
        attrs.append((name, html.unescape(raw) if raw is not None else None))
    return tuple(attrs)


def parse_style(style: str | None) -> dict[str, str]:
    """Parse an inline style attribute into ordered declarations."""
    declarations: dict[str, str] = {}
    for declaration in (style or "").split(";"):
        prop, sep, value = declaration.partition(":")
        if sep and prop.strip():
            declarations[prop.strip().lower()] = value.strip()
    return declarations


def format_style(declarations: Mapping[str, str]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in declarations.items())


# --- Nodes ---


@dataclass(frozen=True)
class Text:
    """Raw character data, comments and anything that is not an element."""

    raw: str

    def serialize(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Element:
    """An element with its attributes and children."""

    tag: str
    attrs: Attributes = ()
    children: tuple[Node, ...] = ()
    start_tag: str | None = None
    end_tag: str | None = None
    self_closing: bool = False
    implicit_end: bool = False

    def get(self, name: str, default: str | None = None) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    def has_attr(self, name: str) -> bool:
        return any(key == name for key, _ in self.attrs)

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple((self.get("class") or "").split())

    def has_class(self, name: str) -> bool:
        return name in self.classes

    @property
    def style(self) -> dict[str, str]:
        return parse_style(self.get("style"))

    def with_attr(self, name: str, value: str | None) -> Element:
        """Return a copy with one attribute set; the start tag is rebuilt on serialize."""
        attrs = list(self.attrs)
        for i, (key, _) in enumerate(attrs):
            if key == name:
                attrs[i] = (name, value)
                break
        else:
            attrs.append((name, value))
        return replace(self, attrs=tuple(attrs), start_tag=None)

    def with_style(self, updates: Mapping[str, str]) -> Element:
        """Merge CSS declarations into the inline style."""
        current = self.style
        merged = {**current, **updates}
        if merged == current and self.has_attr("style"):
            return self
        return self.with_attr("style", format_style(merged))

    def iter_elements(self) -> Iterator[Element]:
        """Yield descendant elements in document order."""
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter_elements()

    def serialize(self) -> str:
        start = self.start_tag if self.start_tag is not None else _build_start_tag(self)
        inner = "".join(child.serialize() for child in self.children)
        return f"{start}{inner}{self._end()}"

    def _end(self) -> str:
        if self.self_closing or self.tag in VOID_ELEMENTS:
            return ""
        if self.end_tag is not None:
            return self.end_tag
        if self.implicit_end:
            return ""
        return f"</{self.tag}>"


Node = Text | Element


@dataclass(frozen=True)
class Fragment:
    """Top-level sequence of nodes produced by one render."""

    children: tuple[Node, ...] = ()

    def iter_elements(self) -> Iterator[Element]:
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter_elements()

    def find_by_class(self, class_name: str) -> list[Element]:
        return [el for el in self.iter_elements() if el.has_class(class_name)]

    def map_elements(self, fn: Callable[[Element], Element]) -> Fragment:
        children = map_elements(self.children, fn)
        if children is self.children:
            return self
        return Fragment(children=children)

    def serialize(self) -> str:
        return "".join(child.serialize() for child in self.children)


def map_elements(
    nodes: tuple[Node, ...],
    fn: Callable[[Element], Element],
) -> tuple[Node, ...]:
    """
    Apply fn to every element in document order (parent before children).

    Returns the same tuple object when fn changed nothing, so untouched
    subtrees are shared between the input and output trees.
    """
    changed = False
    result: list[Node] = []
    for node in nodes:
        new: Node = node
        if isinstance(node, Element):
            new_el = fn(node)
            children = map_elements(new_el.children, fn)
            if children is not new_el.children:
                new_el = replace(new_el, children=children)
            new = new_el
        if new is not node:
            changed = True
        result.append(new)
    return tuple(result) if changed else nodes


def _build_start_tag(element: Element) -> str:
    parts = [element.tag]
    for name, value in element.attrs:
        if value is None:
            parts.append(name)
        else:
            parts.append(f'{name}="{html.escape(value, quote=True)}"')
    tail = " /" if element.self_closing else ""
    return f"<{' '.join(parts)}{tail}>"


# --- Parser ---


@dataclass
class _OpenElement:
    tag: str
    attrs: Attributes
    start_tag: str
    children: list[Node] = field(default_factory=list)

    def close(self, end_tag: str | None) -> Element:
        return Element(
            tag=self.tag,
            attrs=self.attrs,
            children=tuple(self.children),
            start_tag=self.start_tag,
            end_tag=end_tag,
            implicit_end=end_tag is None,
        )


def parse_fragment(markup: str) -> Fragment:
    """Parse a markup string into a Fragment tree."""
    root: list[Node] = []
    stack: list[_OpenElement] = []

    def append(node: Node) -> None:
        (stack[-1].children if stack else root).append(node)

    pos = 0
    while pos < len(markup):
        match = TOKEN_PATTERN.search(markup, pos)
        if match is None:
            append(Text(markup[pos:]))
            break

        if match.start() > pos:
            append(Text(markup[pos : match.start()]))
        pos = match.end()
        token = match.group(0)

        if token.startswith("<!--"):
            append(Text(token))
            continue

        is_closing = bool(match.group(1))
        tag = match.group(2).lower()
        attr_string = match.group(3)

        if is_closing:
            depth = next(
                (i for i in range(len(stack) - 1, -1, -1) if stack[i].tag == tag),
                None,
            )
            if depth is None:
                # Stray end tag
                append(Text(token))
                continue
            while len(stack) > depth + 1:
                unclosed = stack.pop()
                append_to = stack[-1].children
                append_to.append(unclosed.close(None))
            closed = stack.pop().close(token)
            append(closed)
            continue

        self_closing = attr_string.rstrip().endswith("/")
        if self_closing:
            attr_string = attr_string.rstrip()[:-1]
        attrs = parse_attributes(attr_string)

        if self_closing or tag in VOID_ELEMENTS:
            append(Element(tag=tag, attrs=attrs, start_tag=token, self_closing=self_closing))
            continue

        if tag in RAW_TEXT_ELEMENTS:
            end = re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE).search(markup, pos)
            content_end = end.start() if end else len(markup)
            content = markup[pos:content_end]
            children: tuple[Node, ...] = (Text(content),) if content else ()
            append(
                Element(
                    tag=tag,
                    attrs=attrs,
                    children=children,
                    start_tag=token,
                    end_tag=end.group(0) if end else None,
                    implicit_end=end is None,
                )
            )
            pos = end.end() if end else len(markup)
            continue

        stack.append(_OpenElement(tag=tag, attrs=attrs, start_tag=token))

    while stack:
        unclosed = stack.pop()
        append(unclosed.close(None))

    return Fragment(children=tuple(root))

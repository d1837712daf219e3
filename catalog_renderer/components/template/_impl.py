"""
TemplateEngine - Mustache-style binding of an item and its catalog.

Pure function: same (template, item, catalog) always produces the same output.
No I/O, no clock, inputs are never mutated.

Key behaviors:
- {{path}} scalar substitution, HTML-escaped (quotes included)
- {{#path}}...{{/path}} repeats over lists, enters mappings, includes once otherwise
- {{^path}}...{{/path}} inverted inclusion
- Handlebars block helpers ({{#if}}, {{#unless}}, {{#each}}, {{#with}},
  {{else}}, {{this}}) are rewritten to mustache sections before tokenizing
- Unresolved paths and partials render as "" - no tag survives in the output
- Malformed templates raise TemplateSyntaxError
"""

from __future__ import annotations

import html
import json
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from chevron.tokenizer import ChevronError, tokenize

from catalog_renderer.domain.entities import Catalog, Item
from catalog_renderer.domain.errors import TemplateSyntaxError
from catalog_renderer.rules.models import TemplateRules

DEFAULT_TEMPLATE_RULES = TemplateRules()

# Section modes produced by the helper rewrite
MODE_SECTION = ""
MODE_IF = "?"
MODE_EACH = "*"
MODE_WITH = "="

_HELPER_MODES = {"if": MODE_IF, "each": MODE_EACH, "with": MODE_WITH}

# Body of a helper tag, between the delimiters
HELPER_PATTERN = re.compile(
    r"\s*(?:([#/])\s*(if|unless|each|with)\b(.*?)|(else))\s*", re.DOTALL
)

_MISSING = object()


# --- Template Tree ---


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Variable:
    key: str
    escape: bool = True


@dataclass(frozen=True)
class Section:
    key: str
    body: tuple[TemplateNode, ...]
    inverted: bool = False
    mode: str = MODE_SECTION


TemplateNode = Literal | Variable | Section


# --- Handlebars Rewrite ---


def _rewrite_tag(
    match: re.Match[str],
    stack: list[tuple[str, str, str]],
    template: str,
    tag: Callable[[str], str],
) -> str:
    if match.group(4):
        if not stack:
            raise TemplateSyntaxError("{{else}} outside of a block helper", template)
        helper, key, closing = stack[-1]
        if helper == "unless":
            stack[-1] = (helper, key, f"/{MODE_IF}{key}")
            return tag(closing) + tag(f"#{MODE_IF}{key}")
        stack[-1] = (helper, key, f"/{key}")
        return tag(closing) + tag(f"^{key}")

    opener, helper, key = match.group(1), match.group(2), match.group(3).strip()
    if opener == "#":
        if not key:
            raise TemplateSyntaxError(f"{{{{#{helper}}}}} requires a path", template)
        if helper == "unless":
            stack.append((helper, key, f"/{key}"))
            return tag(f"^{key}")
        mode = _HELPER_MODES[helper]
        stack.append((helper, key, f"/{mode}{key}"))
        return tag(f"#{mode}{key}")

    if not stack or stack[-1][0] != helper:
        open_helper = stack[-1][0] if stack else None
        raise TemplateSyntaxError(
            f"Trying to close {{{{/{helper}}}}}, last open helper is {open_helper!r}",
            template,
        )
    return tag(stack.pop()[2])


def rewrite_helpers(template: str) -> str:
    """
    Rewrite handlebars block helpers into mustache sections.

    {{#if x}}a{{else}}b{{/if}} becomes {{#?x}}a{{/?x}}{{^x}}b{{/x}}; the mode
    prefix on the key tells the renderer how the section behaves. Tags are
    scanned the way the mustache tokenizer reads them: comments are left
    alone and set-delimiter tags switch the delimiters used from then on.
    """
    # Each open block: (helper name, key, closing tag body)
    stack: list[tuple[str, str, str]] = []
    out: list[str] = []
    l_del, r_del = "{{", "}}"

    def tag(body: str) -> str:
        return f"{l_del}{body}{r_del}"

    pos = 0
    while pos < len(template):
        start = template.find(l_del, pos)
        end = template.find(r_del, start + len(l_del)) if start != -1 else -1
        if end == -1:
            # Unclosed tags are reported by the tokenizer
            out.append(template[pos:])
            break

        out.append(template[pos:start])
        body = template[start + len(l_del) : end]
        pos = end + len(r_del)

        match = HELPER_PATTERN.fullmatch(body)
        if match is not None:
            out.append(_rewrite_tag(match, stack, template, tag))
            continue

        out.append(template[start:pos])
        stripped = body.strip()
        if len(stripped) > 1 and stripped[0] == "=" and stripped[-1] == "=":
            delimiters = stripped[1:-1].split()
            if len(delimiters) == 2:
                l_del, r_del = delimiters

    if stack:
        raise TemplateSyntaxError(f"Block helper '{stack[-1][0]}' was never closed", template)
    return "".join(out)


# --- Parsing ---


def _split_mode(key: str, helpers: bool) -> tuple[str, str]:
    if helpers and key[:1] in (MODE_IF, MODE_EACH, MODE_WITH):
        return key[0], key[1:]
    return MODE_SECTION, key


def parse_template(
    template: str,
    config: TemplateRules = DEFAULT_TEMPLATE_RULES,
) -> tuple[TemplateNode, ...]:
    """
    Parse a template source into a tree of literals, variables and sections.

    Raises:
        TemplateSyntaxError: unclosed tag, mismatched or unclosed section.
    """
    source = rewrite_helpers(template) if config.handlebars_helpers else template

    try:
        tokens = list(tokenize(source))
    except (ChevronError, IndexError, ValueError) as e:
        raise TemplateSyntaxError(str(e), template) from e

    # Open sections: (tag type, raw key, children)
    stack: list[tuple[str, str, list[TemplateNode]]] = [("root", "", [])]

    for token in tokens:
        tag_type, key = token[0], token[1]

        if tag_type == "literal":
            if key:
                stack[-1][2].append(Literal(key))
        elif tag_type in ("variable", "no escape"):
            stack[-1][2].append(Variable(key=key.strip(), escape=tag_type == "variable"))
        elif tag_type in ("section", "inverted section"):
            stack.append((tag_type, key.strip(), []))
        elif tag_type == "end":
            open_type, open_key, body = stack[-1]
            if open_type == "root" or open_key != key.strip():
                raise TemplateSyntaxError(
                    f"Trying to close section '{key.strip()}', last open is '{open_key}'",
                    template,
                )
            stack.pop()
            mode, bare_key = _split_mode(open_key, config.handlebars_helpers)
            stack[-1][2].append(
                Section(
                    key=bare_key,
                    body=tuple(body),
                    inverted=open_type == "inverted section",
                    mode=mode,
                )
            )
        # Comments, partials and delimiter changes produce no output

    if len(stack) > 1:
        raise TemplateSyntaxError(f"Section '{stack[-1][1]}' was never closed", template)

    return tuple(stack[0][2])


# --- Binding ---


def build_binding_context(item: Item, catalog: Catalog | None = None) -> dict[str, Any]:
    """
    Build the root scope for one render.

    The item's own keys sit at the root; `item` and `catalog` are explicit roots.
    """
    item_doc = item.to_document()
    catalog_doc = catalog.to_document() if catalog is not None else {}
    return {**item_doc, "item": item_doc, "catalog": catalog_doc}


def _step(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(segment, _MISSING)
    if (
        isinstance(value, Sequence)
        and not isinstance(value, str)
        and segment.isdigit()
        and int(segment) < len(value)
    ):
        return value[int(segment)]
    return _MISSING


def _walk(value: Any, segments: list[str]) -> Any:
    for segment in segments:
        value = _step(value, segment)
        if value is _MISSING:
            break
    return value


def resolve_path(key: str, scopes: Sequence[Any]) -> Any:
    """
    Resolve a dotted binding path against a scope stack (innermost last).

    The first segment is searched from the innermost scope outward; the rest
    are resolved strictly inside what it found.
    """
    if key in (".", "this"):
        return scopes[-1]
    if key.startswith("this."):
        return _walk(scopes[-1], key[5:].split("."))

    head, *rest = key.split(".")
    for scope in reversed(scopes):
        found = _step(scope, head)
        if found is not _MISSING:
            return _walk(found, rest)
    return _MISSING


def format_scalar(value: Any) -> str:
    """Format a bound value as text (before escaping)."""
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return ",".join(format_scalar(v) for v in value)
    return str(value)


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str)


def _render_nodes(
    nodes: tuple[TemplateNode, ...],
    scopes: list[Any],
    out: list[str],
    config: TemplateRules,
) -> None:
    for node in nodes:
        if isinstance(node, Literal):
            out.append(node.text)
        elif isinstance(node, Variable):
            value = resolve_path(node.key, scopes)
            if value is _MISSING:
                continue
            text = format_scalar(value)
            if node.escape or not config.allow_raw_bindings:
                text = html.escape(text, quote=True)
            out.append(text)
        else:
            _render_section(node, scopes, out, config)


def _render_section(
    section: Section,
    scopes: list[Any],
    out: list[str],
    config: TemplateRules,
) -> None:
    value = resolve_path(section.key, scopes)
    present = value is not _MISSING and bool(value)

    if section.inverted:
        if not present:
            _render_nodes(section.body, scopes, out, config)
        return
    if not present:
        return

    if section.mode == MODE_IF:
        _render_nodes(section.body, scopes, out, config)
    elif section.mode == MODE_WITH:
        _render_nodes(section.body, [*scopes, value], out, config)
    elif section.mode == MODE_EACH:
        elements = value.values() if isinstance(value, Mapping) else value
        if isinstance(value, Mapping) or _is_list(value):
            for element in elements:
                _render_nodes(section.body, [*scopes, element], out, config)
    elif _is_list(value):
        for element in value:
            _render_nodes(section.body, [*scopes, element], out, config)
    else:
        _render_nodes(section.body, [*scopes, value], out, config)


def render_nodes(
    nodes: tuple[TemplateNode, ...],
    context: Mapping[str, Any],
    config: TemplateRules = DEFAULT_TEMPLATE_RULES,
) -> str:
    out: list[str] = []
    _render_nodes(nodes, [context], out, config)
    return "".join(out)


def render(
    template: str,
    item: Item,
    catalog: Catalog | None = None,
    config: TemplateRules = DEFAULT_TEMPLATE_RULES,
) -> str:
    """
    Render a template against one item and its owning catalog.

    Raises:
        TemplateSyntaxError: If the template is malformed.
    """
    nodes = parse_template(template, config)
    return render_nodes(nodes, build_binding_context(item, catalog), config)

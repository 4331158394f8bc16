"""
CSS feature extraction built on tinycss2.
"""

import logging
import re
from typing import Iterable, Iterator, List

import tinycss2

from ..checker_base import BaseExtractor
from ..registry import VENDOR_PREFIX

logger = logging.getLogger(__name__)

# Value keywords that identify a feature on their own
CSS_KEYWORDS = frozenset({
    'initial', 'inherit', 'unset', 'revert', 'revert-layer',
    'fit-content', 'max-content', 'min-content', 'stretch',
    'start', 'end', 'flex-start', 'flex-end',
    'space-between', 'space-around', 'space-evenly',
    'flex', 'inline-flex', 'grid', 'inline-grid', 'subgrid',
    'sticky', 'contents',
})

CSS_UNITS = frozenset({'vh', 'vw', 'vmin', 'vmax', 'ch', 'rem', 'fr'})

MEDIA_FEATURES = frozenset({
    'prefers-color-scheme', 'prefers-reduced-motion', 'prefers-contrast',
    'hover', 'pointer', 'any-hover', 'any-pointer',
    'display-mode', 'orientation', 'aspect-ratio',
})

# Function notations that are plain syntax, not features
IGNORED_FUNCTIONS = frozenset({'url', 'local', 'format', 'tech', 'attr'})

DEEP_COMBINATOR = 'deep-combinator'

_RANGE_PREFIX = re.compile(r'^(?:min|max)-')


def _parse_contents(content) -> list:
    return tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True)


def _is_literal(token, value: str) -> bool:
    return token.type == 'literal' and token.value == value


class CSSExtractor(BaseExtractor):
    """Detects web features in stylesheets (CSS, SCSS, Sass, Less).

    Any parse error anywhere in the file discards the whole file's usages.
    """

    def _run_extraction(self):
        self._errors = []
        rules = tinycss2.parse_stylesheet(self.text, skip_comments=True, skip_whitespace=True)
        self._walk(rules)
        if self._errors:
            error = self._errors[0]
            logger.warning(
                "Failed to parse CSS in %s (line %s: %s); skipping file",
                self.file_path, error.source_line, error.message,
            )
            self.usages = []

    def _walk(self, nodes: Iterable):
        for node in nodes:
            if node.type == 'error':
                self._errors.append(node)
            elif node.type == 'declaration':
                self._check_declaration(node)
            elif node.type == 'qualified-rule':
                self._check_selector(node)
                self._walk(_parse_contents(node.content))
            elif node.type == 'at-rule':
                self._check_at_rule(node)
                if node.content is not None:
                    self._walk(_parse_contents(node.content))

    def _tokens(self, tokens: Iterable) -> Iterator:
        """Flatten component values, descending into functions and blocks."""
        for token in tokens:
            if token.type == 'error':
                self._errors.append(token)
                continue
            if token.type in ('whitespace', 'comment'):
                continue
            yield token
            if token.type == 'function':
                yield from self._tokens(token.arguments)
            elif token.type in ('() block', '[] block', '{} block'):
                yield from self._tokens(token.content)

    def _check_declaration(self, decl):
        """Property name, function calls, keywords and units in the value."""
        scope = ('declaration', decl.source_line, decl.source_column)
        value = tinycss2.serialize(decl.value).strip()
        context = f"{decl.name}: {value}"
        if decl.important:
            context += ' !important'

        def add(token: str):
            self._add_usage(token, decl.source_line, decl.source_column, context, scope)

        if decl.name.startswith('--'):
            add('--')
        else:
            add(decl.lower_name)
            stripped = VENDOR_PREFIX.sub('', decl.lower_name)
            if stripped != decl.lower_name:
                add(stripped)

        for token in self._tokens(decl.value):
            if token.type == 'function':
                if token.lower_name not in IGNORED_FUNCTIONS:
                    add(token.lower_name)
            elif token.type == 'ident':
                if token.lower_value in CSS_KEYWORDS:
                    add(token.lower_value)
            elif token.type == 'dimension':
                if token.lower_unit in CSS_UNITS:
                    add(f"{token.lower_unit}-unit")

    def _check_selector(self, rule):
        scope = ('selector', rule.source_line, rule.source_column)
        context = tinycss2.serialize(rule.prelude).strip()
        for token in self._selector_tokens(rule.prelude):
            self._add_usage(token, rule.source_line, rule.source_column, context, scope)

    def _selector_tokens(self, prelude: Iterable) -> List[str]:
        """Pseudo-classes and elements, attribute names and deep combinators."""
        found: List[str] = []
        tokens = [t for t in prelude if t.type not in ('whitespace', 'comment')]
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.type == 'error':
                self._errors.append(token)
            elif _is_literal(token, ':'):
                j = i + 1
                if j < len(tokens) and _is_literal(tokens[j], ':'):
                    j += 1
                if j < len(tokens):
                    target = tokens[j]
                    if target.type == 'ident':
                        found.append(target.lower_value)
                        i = j
                    elif target.type == 'function':
                        found.append(target.lower_name)
                        found.extend(self._selector_tokens(target.arguments))
                        i = j
            elif token.type == '[] block':
                names = [t for t in token.content if t.type == 'ident']
                if names:
                    found.append(f"[{names[0].lower_value}]")
            elif _is_literal(token, '>'):
                if (i + 2 < len(tokens) and _is_literal(tokens[i + 1], '>')
                        and _is_literal(tokens[i + 2], '>')):
                    found.append(DEEP_COMBINATOR)
                    i += 2
            elif _is_literal(token, '/'):
                if (i + 2 < len(tokens) and tokens[i + 1].type == 'ident'
                        and tokens[i + 1].lower_value == 'deep'
                        and _is_literal(tokens[i + 2], '/')):
                    found.append(DEEP_COMBINATOR)
                    i += 2
            elif token.type == 'function':
                found.extend(self._selector_tokens(token.arguments))
            i += 1
        return found

    def _check_at_rule(self, rule):
        scope = ('at-rule', rule.source_line, rule.source_column)
        name = rule.lower_at_keyword
        params = tinycss2.serialize(rule.prelude).strip()
        context = f"@{rule.at_keyword} {params}".strip()

        def add(token: str):
            self._add_usage(token, rule.source_line, rule.source_column, context, scope)

        add(f"@{name}")
        if name == 'media':
            for token in self._tokens(rule.prelude):
                if token.type != 'ident':
                    continue
                feature = _RANGE_PREFIX.sub('', token.lower_value)
                if feature in MEDIA_FEATURES:
                    add(feature)
        elif name == 'supports':
            for prop in self._supports_properties(rule.prelude):
                add(prop)
        elif name == 'container':
            add('container-queries')
        elif name == 'layer':
            add('cascade-layers')

    def _supports_properties(self, prelude: Iterable) -> List[str]:
        """Property names of every ``(property: value)`` condition."""
        properties: List[str] = []
        for token in self._tokens(prelude):
            if token.type != '() block':
                continue
            inner = [t for t in token.content if t.type not in ('whitespace', 'comment')]
            if len(inner) >= 2 and inner[0].type == 'ident' and _is_literal(inner[1], ':'):
                properties.append(inner[0].lower_value)
        return properties

"""
Line-based feature detection for JavaScript and TypeScript sources.
"""

import re
from typing import List, Pattern, Tuple

from ..checker_base import BaseExtractor
from ..utils import is_comment


def _rules(*pairs: Tuple[str, str]) -> List[Tuple[Pattern, str]]:
    return [(re.compile(pattern), token) for pattern, token in pairs]


SYNTAX_RULES = _rules(
    (r'=>', 'arrow-functions'),
    (r'`[^`]*\$\{', 'template-literals'),
    (r'\.\.\.[A-Za-z_$\[{(]', 'spread-syntax'),
    (r'\basync\s+function\b', 'async-functions'),
    (r'\bawait\s+', 'async-await'),
    (r'\?\?', 'nullish-coalescing'),
    (r'\?\.(?!\d)', 'optional-chaining'),
    (r'\bclass\s+[A-Za-z_$][\w$]*', 'es6-class'),
    (r'(?<![/*])\*\*(?![/*])', 'exponentiation-operator'),
)

API_RULES = _rules(
    (r'\bfetch\s*\(', 'fetch'),
    (r'\bnew\s+Promise\s*\(', 'promises'),
    (r'\bnavigator\.serviceWorker\b', 'serviceworker'),
    (r'\bnavigator\.geolocation\b', 'geolocation'),
    (r'\bnavigator\.share\b', 'web-share'),
    (r'\bnavigator\.clipboard\b', 'clipboard-api'),
    (r'\b(?:localStorage|sessionStorage)\.', 'webstorage'),
    (r'\bnew\s+IntersectionObserver\b', 'intersectionobserver'),
    (r'\bnew\s+ResizeObserver\b', 'resizeobserver'),
    (r'\bnew\s+MutationObserver\b', 'mutationobserver'),
    (r'\bnew\s+AbortController\b', 'abortcontroller'),
    (r'\bnew\s+Map\s*\(', 'map'),
    (r'\bnew\s+Set\s*\(', 'set'),
    (r'\bnew\s+WeakMap\b', 'weakmap'),
    (r'\bnew\s+WeakSet\b', 'weakset'),
    (r'\bSymbol\s*\(', 'symbol'),
    (r'\bnew\s+Proxy\b', 'proxy'),
    (r'\brequestAnimationFrame\s*\(', 'requestanimationframe'),
    (r'\bnew\s+URL\s*\(', 'url'),
    (r'\bnew\s+URLSearchParams\b', 'url-api'),
    (r'\bnew\s+FormData\b', 'formdata'),
    (r'\bnew\s+Blob\b', 'blob'),
    (r'\bnew\s+FileReader\b', 'filereader'),
    (r'\bnew\s+Worker\b', 'web-workers'),
    (r'\bnew\s+WebSocket\b', 'websockets'),
    (r'\bnew\s+EventSource\b', 'eventsource'),
    (r'\bnew\s+XMLHttpRequest\b', 'xhr'),
)

ARRAY_METHODS = (
    'find', 'findIndex', 'includes', 'entries', 'keys', 'values',
    'map', 'filter', 'reduce', 'forEach', 'some', 'every',
    'flat', 'flatMap', 'from', 'of',
)
STRING_METHODS = (
    'startsWith', 'endsWith', 'includes', 'repeat', 'padStart', 'padEnd',
    'trim', 'trimStart', 'trimEnd', 'replaceAll',
)
OBJECT_METHODS = (
    'assign', 'keys', 'values', 'entries', 'fromEntries',
    'getOwnPropertyDescriptors', 'hasOwn',
)

# Method patterns match any receiver except ``Object``, whose static methods
# have their own table.
METHOD_RULES = (
    [(re.compile(rf'(?<!Object)\.{m}\s*\('), f'array-{m}') for m in ARRAY_METHODS]
    + [(re.compile(rf'(?<!Object)\.{m}\s*\('), f'string-{m}') for m in STRING_METHODS]
    + [(re.compile(rf'\bObject\.{m}\s*\('), f'object-{m}') for m in OBJECT_METHODS]
)

DETECTION_RULES: List[Tuple[Pattern, str]] = SYNTAX_RULES + API_RULES + METHOD_RULES


class ScriptExtractor(BaseExtractor):
    """Regex-per-line detector.

    Reports at line granularity: column is always 0 and one usage is kept per
    (line, feature). An AST-backed extractor can replace it through the
    ``BaseExtractor.extract`` contract.
    """

    rules: List[Tuple[Pattern, str]] = DETECTION_RULES

    def _run_extraction(self):
        for i, line in enumerate(self.lines, 1):
            if not line.strip() or is_comment(line):
                continue
            for pattern, token in self.rules:
                if pattern.search(line):
                    self._add_usage(token, i, 0, line.strip(), scope=i)

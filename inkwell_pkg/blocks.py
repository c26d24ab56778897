"""
Block-level markdown parsing.

The body is first split into tagged lines: plain text lines and
placeholders standing in for fenced code blocks, which are rendered and
escaped up front so that nothing downstream ever sees raw code. The
parser then walks the lines with a small classifier, consuming one
contiguous run per block.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple, Union

from .inline import inline_format
from .utils import escape_html

FENCE_OPEN_RE = re.compile(r'^```(\w*)')
FENCE_CLOSE_RE = re.compile(r'^```\s*$')
HEADING_RE = re.compile(r'^(#{1,3})\s+(.*)')
RULE_RE = re.compile(r'^(\*{3,}|-{3,}|_{3,})\s*$')
QUOTE_MARKER = '&gt;'
QUOTE_STRIP_RE = re.compile(r'^&gt;\s?')
UNORDERED_RE = re.compile(r'^[-*+]\s+')
ORDERED_RE = re.compile(r'^\d+\.\s+')


@dataclass(frozen=True)
class Plain:
    """An ordinary line of markdown."""
    text: str


@dataclass(frozen=True)
class FencePlaceholder:
    """Marks where a fenced code block sat in the line stream."""
    index: int


Line = Union[Plain, FencePlaceholder]


class BlockKind(Enum):
    FENCE = 'fence'
    BLANK = 'blank'
    HEADING = 'heading'
    RULE = 'rule'
    BLOCKQUOTE = 'blockquote'
    UNORDERED_LIST = 'unordered_list'
    ORDERED_LIST = 'ordered_list'
    PARAGRAPH = 'paragraph'


def render_fence(code_lines: Sequence[str], lang: str) -> str:
    """Render a fenced code block. Content is always escaped."""
    code = escape_html('\n'.join(code_lines))
    lang_attr = f' class="language-{lang}"' if lang else ''
    return f'<pre><code{lang_attr}>{code}</code></pre>'


def extract_fences(lines: Sequence[str]) -> Tuple[List[Line], List[str]]:
    """
    Pull fenced code blocks out of the raw lines.

    Returns:
        Tuple of (tagged lines, rendered fence blocks). Each
        FencePlaceholder indexes into the fence list.
    """
    tagged: List[Line] = []
    fences: List[str] = []
    in_fence = False
    lang = ''
    code_lines: List[str] = []

    for line in lines:
        if not in_fence:
            match = FENCE_OPEN_RE.match(line)
            if match:
                in_fence = True
                lang = match.group(1)
                code_lines = []
            else:
                tagged.append(Plain(line))
        elif FENCE_CLOSE_RE.match(line):
            in_fence = False
            fences.append(render_fence(code_lines, lang))
            tagged.append(FencePlaceholder(len(fences) - 1))
        else:
            code_lines.append(line)

    # An unterminated fence runs to the end of the document
    if in_fence:
        fences.append(render_fence(code_lines, lang))
        tagged.append(FencePlaceholder(len(fences) - 1))

    return tagged, fences


def is_quote_line(text: str) -> bool:
    return text.startswith(QUOTE_MARKER + ' ') or text == QUOTE_MARKER


def classify_line(line: Line) -> BlockKind:
    """Decide which kind of block a line starts. First match wins."""
    if isinstance(line, FencePlaceholder):
        return BlockKind.FENCE
    text = line.text
    if text.strip() == '':
        return BlockKind.BLANK
    if HEADING_RE.match(text):
        return BlockKind.HEADING
    if RULE_RE.match(text.strip()):
        return BlockKind.RULE
    if is_quote_line(text):
        return BlockKind.BLOCKQUOTE
    if UNORDERED_RE.match(text):
        return BlockKind.UNORDERED_LIST
    if ORDERED_RE.match(text):
        return BlockKind.ORDERED_LIST
    return BlockKind.PARAGRAPH


class BlockParser:
    """
    Turns a sequence of tagged lines into block HTML.

    Lines must already be escaped (or deliberately left raw); the parser
    only adds markup.
    """

    def __init__(self, lines: Sequence[Line], fences: Sequence[str] = ()):
        self.lines = list(lines)
        self.fences = list(fences)
        self.pos = 0
        self._handlers: Dict[BlockKind, Callable[[], Union[str, None]]] = {
            BlockKind.FENCE: self._fence,
            BlockKind.BLANK: self._blank,
            BlockKind.HEADING: self._heading,
            BlockKind.RULE: self._rule,
            BlockKind.BLOCKQUOTE: self._blockquote,
            BlockKind.UNORDERED_LIST: self._unordered_list,
            BlockKind.ORDERED_LIST: self._ordered_list,
            BlockKind.PARAGRAPH: self._paragraph,
        }

    def parse(self) -> List[str]:
        """Parse all lines and return the block HTML fragments in order."""
        blocks = []
        self.pos = 0
        while self.pos < len(self.lines):
            kind = classify_line(self.lines[self.pos])
            block = self._handlers[kind]()
            if block is not None:
                blocks.append(block)
        return blocks

    def render(self) -> str:
        return '\n'.join(self.parse())

    def _take_run(self, kind: BlockKind) -> List[str]:
        """Consume the contiguous run of lines classified as ``kind``."""
        run = []
        while self.pos < len(self.lines) and classify_line(self.lines[self.pos]) is kind:
            run.append(self.lines[self.pos].text)
            self.pos += 1
        return run

    def _fence(self):
        placeholder = self.lines[self.pos]
        self.pos += 1
        return self.fences[placeholder.index]

    def _blank(self):
        self.pos += 1
        return None

    def _heading(self):
        match = HEADING_RE.match(self.lines[self.pos].text)
        self.pos += 1
        level = len(match.group(1))
        return f'<h{level}>{inline_format(match.group(2))}</h{level}>'

    def _rule(self):
        self.pos += 1
        return '<hr>'

    def _blockquote(self):
        stripped = [QUOTE_STRIP_RE.sub('', text, count=1) for text in self._take_run(BlockKind.BLOCKQUOTE)]

        groups = []
        current = []
        for text in stripped:
            if text.strip() == '':
                if current:
                    groups.append(current)
                current = []
            else:
                current.append(text)
        if current:
            groups.append(current)

        paragraphs = '\n'.join(f'<p>{inline_format(" ".join(group))}</p>' for group in groups)
        return f'<blockquote>{paragraphs}</blockquote>'

    def _list(self, kind: BlockKind, marker_re, tag: str) -> str:
        items = [inline_format(marker_re.sub('', text, count=1)) for text in self._take_run(kind)]
        body = '\n'.join(f'<li>{item}</li>' for item in items)
        return f'<{tag}>{body}</{tag}>'

    def _unordered_list(self):
        return self._list(BlockKind.UNORDERED_LIST, UNORDERED_RE, 'ul')

    def _ordered_list(self):
        return self._list(BlockKind.ORDERED_LIST, ORDERED_RE, 'ol')

    def _paragraph(self):
        text = '\n'.join(self._take_run(BlockKind.PARAGRAPH))
        return f'<p>{inline_format(text)}</p>'

"""Generic ordered tag tree for the SGML body of an OFX file.

The body is parsed with BeautifulSoup's `html.parser` backend, which expands
the standard entities (`&lt;`, `&gt;`, `&amp;`, `&nbsp;`) and lower-cases tag
names.  OFX 1.x leaf elements usually have no end tag:

    <STMTTRN>
      <TRNTYPE>PAYMENT
      <MEMO>
      <TRNAMT>-16.40
    </STMTTRN>

and the HTML parser would nest every following element inside the unclosed
leaf.  `close_leaf_tags` first adds the missing end tags: an element that is
never explicitly closed is a leaf, whatever its text, and ends where the next
tag starts.
"""

from typing import Iterator, List, NamedTuple, Optional, Set, Tuple
import io
import logging
import re

import bs4

from .errors import ParseError

logger = logging.getLogger('ofx_tag_tree')

_TAG_PATTERN = re.compile(r'<(/?)([A-Za-z][A-Za-z0-9._]*)\s*>')


class TagNode(NamedTuple):
    name: str
    value: Optional[str]
    children: Tuple['TagNode', ...]

    def find_all(self, name: str) -> Iterator['TagNode']:
        return (child for child in self.children if child.name == name)

    def find(self, name: str) -> Optional['TagNode']:
        """Returns the first child named `name`, or `None`.

        Duplicates are not checked here; `schema.project` rejects them for
        fields that are not repeated.
        """
        return next(self.find_all(name), None)

    @property
    def text(self) -> str:
        return self.value if self.value is not None else ''


def _explicitly_closed(tags: List[re.Match]) -> Tuple[Set[int], Set[int]]:
    """Matches end tags to start tags.

    Returns the indices of start tags that have an end tag, and the indices of
    start tags that are outermost elements.  An end tag closes the innermost
    open element of the same name; elements opened after it are left open.
    """
    closed = set()  # type: Set[int]
    outermost = set()  # type: Set[int]
    stack = []  # type: List[Tuple[str, int]]
    for i, m in enumerate(tags):
        name = m.group(2).upper()
        if not m.group(1):
            if not stack:
                outermost.add(i)
            stack.append((name, i))
            continue
        for depth in range(len(stack) - 1, -1, -1):
            if stack[depth][0] == name:
                closed.add(stack[depth][1])
                del stack[depth:]
                break
        else:
            logger.debug('ignoring unmatched end tag %r', m.group(0))
    return closed, outermost


def close_leaf_tags(contents: str) -> str:
    """Adds an end tag after the text of every element that lacks one."""
    tags = list(_TAG_PATTERN.finditer(contents))
    closed, outermost = _explicitly_closed(tags)
    out = io.StringIO()
    pos = 0
    for i, m in enumerate(tags):
        out.write(contents[pos:m.end()])
        pos = m.end()
        if m.group(1) or i in closed or i in outermost:
            continue
        end = tags[i + 1].start() if i + 1 < len(tags) else len(contents)
        out.write(contents[pos:end])
        out.write('</%s>' % m.group(2))
        pos = end
    out.write(contents[pos:])
    return out.getvalue()


def _leaf_text(tag: bs4.Tag) -> Optional[str]:
    if not tag.contents:
        return None
    first = tag.contents[0]
    # Comments, declarations and the like are PreformattedStrings.
    if not isinstance(first, bs4.NavigableString) or isinstance(
            first, bs4.element.PreformattedString):
        return None
    # `&nbsp;` survives as a space; only the layout whitespace is stripped.
    text = first.strip(' \t\r\n').replace('\xa0', ' ')
    return text or None


def normalize(tag: bs4.Tag) -> TagNode:
    """Converts a bs4 element into a `TagNode`.

    An element with child elements is an aggregate and has no value.
    """
    children = tuple(
        normalize(child) for child in tag.children
        if isinstance(child, bs4.Tag))
    if children:
        return TagNode(tag.name.upper(), None, children)
    return TagNode(tag.name.upper(), _leaf_text(tag), ())


def parse_tag_tree(contents: str) -> TagNode:
    """Parses the body text, starting at `<OFX>`, into its root `TagNode`."""
    soup = bs4.BeautifulSoup(close_leaf_tags(contents), 'html.parser')
    root = soup.find('ofx')
    if root is None:
        raise ParseError('no <OFX> element found in body')
    children = tuple(
        normalize(child) for child in root.find_all(True, recursive=False))
    logger.debug('parsed tag tree with %d top-level nodes', len(children))
    return TagNode('OFX', None, children)

"""
Syntax Advisory

Best-effort structural checks over generated Mermaid code. Warnings are a
diagnostic aid for logs only; they never change output or fail a request.
"""

import re
from typing import List


COMMENT_PREFIX = "%%"
EDGE_ARROWS = ("-->", "-.->", "==>")
BRACKET_KINDS = (
    ("square brackets", "[", "]"),
    ("curly braces", "{", "}"),
    ("parentheses", "(", ")"),
)

# Mermaid identifiers are ASCII word characters
NODE_OPENER_RE = re.compile(r"\w+\[", re.ASCII)


def advise(code: str) -> List[str]:
    """
    Collect warnings about structural issues in Mermaid code.

    Args:
        code: Assembled diagram source

    Returns:
        Human-readable warnings; empty when nothing looks wrong
    """
    if not isinstance(code, str) or not code:
        return []

    warnings = []
    balance = {opener: 0 for _, opener, _ in BRACKET_KINDS}
    closers = {closer: opener for _, opener, closer in BRACKET_KINDS}

    for line_number, raw_line in enumerate(code.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        for char in line:
            if char in balance:
                balance[char] += 1
            elif char in closers:
                balance[closers[char]] -= 1

        node_openers = NODE_OPENER_RE.findall(line)
        if len(node_openers) > 1 and not any(arrow in line for arrow in EDGE_ARROWS):
            warnings.append(f"Line {line_number}: possible concatenated node definitions")

    for kind, opener, closer in BRACKET_KINDS:
        count = balance[opener]
        if count > 0:
            warnings.append(f"Unbalanced {kind}: missing {count} '{closer}'")
        elif count < 0:
            warnings.append(f"Unbalanced {kind}: extra {-count} '{closer}'")

    return warnings

"""
Tests for the best-effort Mermaid syntax advisory.
"""

from core.syntax_advisory import advise


def test_balanced_diagram_has_no_warnings():
    assert advise("A[x]\nB[y]\nA --> B") == []


def test_unterminated_square_bracket():
    assert advise("A[x") == ["Unbalanced square brackets: missing 1 ']'"]


def test_extra_closers_are_reported():
    warnings = advise("A[x]]\nB{y}}\nC(z))")
    assert "Unbalanced square brackets: extra 1 ']'" in warnings
    assert "Unbalanced curly braces: extra 1 '}'" in warnings
    assert "Unbalanced parentheses: extra 1 ')'" in warnings


def test_imbalance_is_counted_across_lines():
    assert advise("class User {\n  +id: string\n") == ["Unbalanced curly braces: missing 1 '}'"]


def test_concatenated_nodes_are_flagged_with_line_number():
    warnings = advise("flowchart TD\nA[Start]B[Next]\nA --> B")
    assert warnings == ["Line 2: possible concatenated node definitions"]


def test_nodes_joined_by_edges_are_not_flagged():
    code = "flowchart TD\nA[Start] --> B[Next]\nB -.-> C[Maybe]\nC ==> D[Done]"
    assert advise(code) == []


def test_comment_lines_are_ignored():
    assert advise("%% A[unclosed B[also\nA[x]") == []


def test_empty_or_invalid_input_never_raises():
    assert advise("") == []
    assert advise(None) == []

"""
System prompt construction for Mermaid generation.

The prompt is assembled from independent sections (goals, diagram type,
syntax, style, output contract, self-check, examples) in Chinese or English.
"""

from typing import List, Optional

from utils.config import Config


FENCE = Config.FENCE_MARKER


def _goals(is_zh: bool) -> str:
    if is_zh:
        return ("目的与目标：\n"
                "- 将用户输入准确映射为可编译的 Mermaid 图。\n"
                "- 覆盖关键实体/步骤与关系，保持清晰、可读、无冗余。")
    return ("Goals:\n"
            "- Map user input into a compilable Mermaid diagram.\n"
            "- Cover key entities/steps and relations; keep it clear and readable.")


def _type_rule(diagram_type: str, is_zh: bool) -> str:
    if diagram_type and diagram_type != "auto":
        if is_zh:
            return f"图类型：\n- 必须使用 {diagram_type} 类型（不得更换类型）。"
        return f"Diagram type:\n- You MUST use type {diagram_type} (do not switch types)."
    if is_zh:
        return "图类型：\n- 根据内容选择最合适的一种：flowchart、sequence 或 class（仅一种）。"
    return "Diagram type:\n- Choose exactly one best fit: flowchart, sequence, or class."


def _syntax_rules(flow_direction: str, is_zh: bool) -> str:
    if is_zh:
        return "\n".join([
            "语法与转义：",
            "- 节点 ID 不包含空格与特殊字符；展示文本使用方括号包裹。",
            "- **重要**：每个节点必须独立完整定义，每行只能定义一个节点。",
            "  格式：节点ID[节点文本]",
            "  ❌ 错误示例：A[节点1 B[节点2]  （连写，缺少闭合）",
            "  ❌ 错误示例：A[节点1]B[节点2]  （同行多个节点）",
            "  ✅ 正确示例：",
            "    A[节点1]",
            "    B[节点2]",
            "    A --> B",
            "- HTML 特殊字符 < > & # 使用实体编码（&lt; &gt; &amp; &#35;）。",
            "- 使用 %% 表示注释；边标签使用 |label| 语法。",
            f"- 若使用 flowchart，默认方向为 {flow_direction}（示例：flowchart {flow_direction}）。",
        ])
    return "\n".join([
        "Syntax & Escaping:",
        "- Node IDs contain no spaces/special chars; show text inside brackets.",
        "- **Important**: Each node must be defined independently and completely, one per line.",
        "  Format: NodeID[NodeText]",
        "  ❌ Wrong: A[Node1 B[Node2]  (connected, missing closure)",
        "  ❌ Wrong: A[Node1]B[Node2]  (multiple nodes on same line)",
        "  ✅ Correct:",
        "    A[Node1]",
        "    B[Node2]",
        "    A --> B",
        "- HTML special chars < > & # must be HTML-encoded (&lt; &gt; &amp; &#35;).",
        "- Use %% for comments; edge labels use |label| syntax.",
        f"- If using flowchart, default direction is {flow_direction} (e.g., flowchart {flow_direction}).",
    ])


def _style_guidelines(max_nodes: int, max_edges: int, is_zh: bool) -> str:
    if is_zh:
        return (f"风格与复杂度：\n"
                f"- 节点不超过 {max_nodes} 个、边不超过 {max_edges} 条；超限请抽象/分组（subgraph）。\n"
                f"- 如需颜色/层级区分，应使用 classDef/class：\n"
                f"  示例：\n"
                f"  classDef group fill:#eef,stroke:#55f;\n"
                f"  class A,B group")
    return (f"Style & Complexity:\n"
            f"- Up to {max_nodes} nodes and {max_edges} edges; if exceeded, abstract/group with subgraph.\n"
            f"- For color/hierarchy, use classDef/class:\n"
            f"  Example:\n"
            f"  classDef group fill:#eef,stroke:#55f;\n"
            f"  class A,B group")


def _output_contract(is_zh: bool) -> str:
    if is_zh:
        return ("输出格式（严格）：\n"
                f"- 仅输出一个以 mermaid 标注的 fenced code block（{FENCE}mermaid 开始，{FENCE} 结束）。\n"
                "- 不得包含任何额外文字、解释或前后缀。")
    return ("Output contract (strict):\n"
            f"- Output exactly one fenced code block labeled mermaid ({FENCE}mermaid ... {FENCE}).\n"
            "- No extra text, explanations, or wrappers.")


def _self_check(is_zh: bool) -> str:
    if is_zh:
        return ("自检（不要输出自检过程）：\n"
                "- 关键实体/步骤是否覆盖？主要关系是否完整？\n"
                "- Mermaid 语法是否可编译？是否只包含一个 mermaid fenced code？")
    return ("Self-check (do not output):\n"
            "- Are key entities/steps covered and relations complete?\n"
            "- Does it compile as Mermaid? Exactly one mermaid fenced code?")


def _examples(flow_direction: str, is_zh: bool) -> str:
    labels = {
        "title": "示例（极简）：" if is_zh else "Examples (minimal):",
        "start": "开始" if is_zh else "Start",
        "process": "处理" if is_zh else "Process",
        "branch": "分支" if is_zh else "Branch",
        "yes": "是" if is_zh else "Yes",
        "no": "否" if is_zh else "No",
        "success": "成功" if is_zh else "Success",
        "fail": "失败" if is_zh else "Fail",
        "request": "请求" if is_zh else "Request",
        "response": "响应" if is_zh else "Response",
    }
    colon = "：" if is_zh else ":"
    lines: List[str] = [
        labels["title"],
        f"- flowchart{colon}",
        f"{FENCE}mermaid",
        f"flowchart {flow_direction}",
        f"A[{labels['start']}] --> B[{labels['process']}]",
        f"B --> C{{{labels['branch']}}}",
        f"C -->|{labels['yes']}| D[{labels['success']}]",
        f"C -->|{labels['no']}| E[{labels['fail']}]",
        FENCE,
        f"- sequence{colon}",
        f"{FENCE}mermaid",
        "sequenceDiagram",
        f"Alice->>Bob: {labels['request']}",
        f"Bob-->>Alice: {labels['response']}",
        FENCE,
        f"- class{colon}",
        f"{FENCE}mermaid",
        "classDiagram",
        "class User {",
        "  +id: string",
        "  +name: string",
        "}",
        "User <|-- Admin",
        FENCE,
    ]
    return "\n".join(lines)


def build_mermaid_system_prompt(diagram_type: Optional[str] = "auto",
                                language: str = "zh",
                                max_nodes: Optional[int] = None,
                                max_edges: Optional[int] = None,
                                flow_direction: Optional[str] = None) -> str:
    """
    Build the system prompt sent upstream for Mermaid generation.

    Args:
        diagram_type: "auto" or a concrete Mermaid type (flowchart, sequence, class)
        language: "zh" or "en"; anything other than "zh" renders English
        max_nodes: Maximum node count, defaults to Config.MAX_NODES
        max_edges: Maximum edge count, defaults to Config.MAX_EDGES
        flow_direction: Default flowchart direction, defaults to Config.FLOW_DIRECTION

    Returns:
        The assembled prompt text
    """
    diagram_type = diagram_type or "auto"
    max_nodes = max_nodes if isinstance(max_nodes, int) else Config.MAX_NODES
    max_edges = max_edges if isinstance(max_edges, int) else Config.MAX_EDGES
    flow_direction = flow_direction or Config.FLOW_DIRECTION
    is_zh = language == "zh"

    def title(zh: str, en: str) -> str:
        return zh if is_zh else en

    sections = [
        title("目的与目标", "Goals"),
        _goals(is_zh),
        "",
        title("图类型规则", "Diagram Type Rule"),
        _type_rule(diagram_type, is_zh),
        "",
        title("语法与转义", "Syntax & Escaping"),
        _syntax_rules(flow_direction, is_zh),
        "",
        title("风格与复杂度", "Style & Complexity"),
        _style_guidelines(max_nodes, max_edges, is_zh),
        "",
        title("输出格式", "Output Contract"),
        _output_contract(is_zh),
        "",
        title("自检清单", "Self-checklist"),
        _self_check(is_zh),
        "",
        title("示例", "Examples"),
        _examples(flow_direction, is_zh),
    ]

    return "\n".join(sections)

"""
Mermaid flowchart builder for open pull requests.

Pure function: takes ChangeRequests, returns Mermaid source. Branches become
nodes, each pull request becomes one labelled edge from its source branch to
its target branch plus a click action pointing at the pull request page.
"""

import re
from typing import Literal

from models.data_models import ChangeRequest

# Characters with syntactic meaning in Mermaid labels/statements (or in the
# surrounding HTML) are replaced by a single space.
UNSAFE_LABEL_CHARS = re.compile(r'[\r\n\[\](){}:;"|<>`]')


def sanitize_label(text: str) -> str:
    """Make arbitrary text safe to interpolate into a Mermaid label.

    Each unsafe character becomes one space, so "A[B]:C" -> "A B  C".
    """
    return UNSAFE_LABEL_CHARS.sub(" ", text).strip()


def build_mermaid_code(
    change_requests: list[ChangeRequest],
    direction: Literal["LR", "RL"] = "LR",
    label_mode: Literal["number", "status"] = "number",
) -> str:
    """
    Build a Mermaid ``graph`` from a list of pull requests.

    Node ids are ``b0, b1, ...`` in order of first appearance so branch names
    with slashes or Mermaid keywords (``end``) cannot break the syntax; the
    branch name itself is the node label.

    Args:
        change_requests: Open pull requests in API order
        direction: "LR" (left to right) or "RL" (right to left)
        label_mode: "number" labels edges "PR #<n> <title>";
            "status" labels edges Draft/Open and shows the title on the
            source node

    Returns:
        Mermaid source, one statement per line
    """
    if direction not in ("LR", "RL"):
        raise ValueError(f"Unsupported direction: {direction}")
    if label_mode not in ("number", "status"):
        raise ValueError(f"Unsupported label mode: {label_mode}")

    node_ids: dict[str, str] = {}
    node_labels: dict[str, str] = {}

    for pr in change_requests:
        for branch in (pr.source_branch, pr.target_branch):
            if branch not in node_ids:
                node_ids[branch] = f"b{len(node_ids)}"
                node_labels[branch] = sanitize_label(branch)

    if label_mode == "status":
        titled = set()
        for pr in change_requests:
            if pr.source_branch not in titled:
                titled.add(pr.source_branch)
                node_labels[pr.source_branch] = sanitize_label(pr.title) or node_labels[pr.source_branch]

    lines = [f"graph {direction}"]

    for branch, node_id in node_ids.items():
        lines.append(f'  {node_id}["{node_labels[branch]}"]')

    for pr in change_requests:
        source = node_ids[pr.source_branch]
        target = node_ids[pr.target_branch]

        if label_mode == "status":
            label = "Draft" if pr.is_draft else "Open"
        else:
            label = f"PR #{pr.number} {sanitize_label(pr.title)}".strip()

        lines.append(f"  {source} --> |{label}| {target}")
        lines.append(f'  click {source} href "{pr.url.replace(chr(34), "%22")}" _blank')

    return "\n".join(lines) + "\n"

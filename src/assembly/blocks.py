"""
Exam Prep API - Block Builder
Groups one exam's questions into atomic selection blocks.
"""
from typing import Dict, Iterable, List

from .models import Block, Question, _finite_number


def build_blocks(questions: Iterable[Question]) -> List[Block]:
    """
    Partition questions into blocks.

    Questions sharing a group_id form one block, sorted ascending by order
    (stable, so equal orders keep discovery order). A missing or non-finite
    order sorts as 0. Every ungrouped question becomes its own singleton
    block.

    Args:
        questions: One exam's questions, in any order

    Returns:
        Group blocks in first-seen order, followed by singleton blocks
    """
    groups: Dict[str, List[Question]] = {}
    singles: List[Block] = []

    for question in questions:
        if question.group_id:
            groups.setdefault(question.group_id, []).append(question)
        else:
            singles.append(Block(questions=(question,)))

    blocks = [
        Block(questions=tuple(sorted(members, key=lambda q: _finite_number(q.order))), group_id=group_id)
        for group_id, members in groups.items()
    ]
    blocks.extend(singles)
    return blocks

"""
Tests for randomized block selection.
Tests src/assembly/selector.py
"""
import random
import pytest
from unittest.mock import MagicMock

from src.assembly.blocks import build_blocks
from src.assembly.models import Block
from src.assembly.selector import select_blocks


def _block(question_factory, name: str, size: int) -> Block:
    return Block(
        questions=tuple(question_factory(f"{name}-{i}", group_id=name, order=i) for i in range(size)),
        group_id=name
    )


@pytest.mark.unit
class TestSelectBlocks:
    """Tests for the greedy fill and its fallback."""

    def test_zero_target_returns_empty(self, exam_factory):
        blocks = build_blocks(exam_factory("e", 0, singles=5).questions)
        rng = MagicMock(spec=random.Random)

        selection = select_blocks(blocks, 0, rng)

        assert selection.blocks == []
        assert selection.total == 0
        assert selection.fallback_used is False
        rng.shuffle.assert_not_called()

    def test_negative_target_returns_empty(self, exam_factory, rng):
        blocks = build_blocks(exam_factory("e", 0, singles=5).questions)
        assert select_blocks(blocks, -3, rng).blocks == []

    def test_empty_pool(self, rng):
        selection = select_blocks([], 5, rng)
        assert selection.blocks == []
        assert selection.fallback_used is False

    def test_singletons_sample_without_replacement(self, exam_factory):
        blocks = build_blocks(exam_factory("e", 0, singles=10).questions)

        for seed in range(20):
            selection = select_blocks(blocks, 4, random.Random(seed))
            ids = [q.id for b in selection.blocks for q in b.questions]
            assert selection.total == 4
            assert len(set(ids)) == 4

    def test_target_larger_than_pool_takes_everything(self, exam_factory, rng):
        blocks = build_blocks(exam_factory("e", 0, singles=3, groups={"g": 4}).questions)

        selection = select_blocks(blocks, 50, rng)

        assert selection.total == 7
        assert len(selection.blocks) == len(blocks)
        assert selection.fallback_used is False

    def test_never_exceeds_target_without_fallback(self, question_factory):
        blocks = [_block(question_factory, f"b{i}", size) for i, size in enumerate([4, 3, 2, 5, 1, 3])]

        for seed in range(50):
            selection = select_blocks(blocks, 7, random.Random(seed))
            assert selection.fallback_used is False
            assert selection.total <= 7
            assert selection.total == sum(b.size for b in selection.blocks)

    def test_skips_oversized_block_and_keeps_walking(self, question_factory):
        big = _block(question_factory, "big", 5)
        small = _block(question_factory, "small", 2)
        rng = MagicMock(spec=random.Random)
        rng.shuffle.side_effect = lambda pool: None  # keep [big, small]

        selection = select_blocks([big, small], 3, rng)

        assert selection.blocks == [small]
        assert selection.total == 2

    def test_fallback_takes_smallest_block(self, question_factory, rng):
        blocks = [_block(question_factory, "five", 5), _block(question_factory, "four", 4)]

        selection = select_blocks(blocks, 3, rng)

        assert selection.fallback_used is True
        assert len(selection.blocks) == 1
        assert selection.blocks[0].group_id == "four"
        assert selection.total == 4

    def test_fallback_tie_break_is_first_in_shuffled_order(self, question_factory):
        first = _block(question_factory, "first", 4)
        second = _block(question_factory, "second", 4)
        rng = MagicMock(spec=random.Random)
        rng.shuffle.side_effect = lambda pool: pool.reverse()

        selection = select_blocks([first, second], 2, rng)

        assert selection.blocks == [second]

    def test_single_block_exceeding_target(self, exam_factory, rng):
        """Weight 10 at base 25 gives target 3; a 5-question set still comes back whole."""
        exam = exam_factory("e", 10, groups={"passage": 5})
        blocks = build_blocks(exam.questions)

        selection = select_blocks(blocks, 3, rng)

        assert selection.fallback_used is True
        assert selection.total == 5
        assert [q.id for q in selection.blocks[0].questions] == [q.id for q in exam.questions]

    def test_input_list_not_mutated(self, exam_factory, rng):
        blocks = build_blocks(exam_factory("e", 0, singles=8).questions)
        before = list(blocks)

        select_blocks(blocks, 4, rng)

        assert blocks == before

    def test_same_seed_same_selection(self, exam_factory):
        blocks = build_blocks(exam_factory("e", 0, singles=6, groups={"g": 3, "h": 2}).questions)

        first = select_blocks(blocks, 6, random.Random(99))
        second = select_blocks(blocks, 6, random.Random(99))

        assert first.blocks == second.blocks

"""
Exam Prep API - Exam Assembler
Builds one randomized, block-aware question list out of weighted exams.

Pipeline per request:
    1. Per exam: build blocks, compute target, select blocks
    2. Merge every exam's selected blocks into one pool
    3. Shuffle the pool again so exams are interleaved
    4. Walk the pool and keep blocks while the total stays within max
    5. If even the first block is larger than max, keep that one block alone

The whole computation is synchronous and stateless. Each call owns its random
source and accumulators, so concurrent requests never share state.
"""
import logging
import random
from typing import Any, Iterable, List, Optional

from .blocks import build_blocks
from .models import AssemblyResult, Block, Exam, ExamAllocation, Question
from .quota import DEFAULT_BASE, DEFAULT_MAX, compute_target, resolve_base, resolve_max
from .selector import select_blocks, shuffled

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Fresh random source; pass a seed for reproducible assemblies."""
    return random.Random(seed)


def trim_to_cap(blocks: Iterable[Block], max_questions: int):
    """
    Keep whole blocks, in order, while the running total fits max_questions.

    Returns:
        (kept blocks, forced) where forced is True when the first block was
        larger than the cap and was kept on its own.
    """
    kept: List[Block] = []
    used = 0

    for block in blocks:
        if used + block.size <= max_questions:
            kept.append(block)
            used += block.size
        elif used == 0:
            kept.append(block)
            return kept, True

    return kept, False


class ExamAssembler:
    """Assembles a mixed question list from weighted exams."""

    def __init__(
        self,
        default_base: int = DEFAULT_BASE,
        default_max: int = DEFAULT_MAX
    ):
        self.default_base = default_base
        self.default_max = default_max

    def assemble(
        self,
        exams: Iterable[Exam],
        base: Any = None,
        max_questions: Any = None,
        rng: Optional[random.Random] = None
    ) -> AssemblyResult:
        """
        Assemble a question list.

        Args:
            exams: Exams with their questions already loaded
            base: Requested base size (missing / <= 0 uses the default)
            max_questions: Global cap (missing / <= 0 uses the default)
            rng: Random source; a fresh unseeded one when None

        Returns:
            AssemblyResult with the effective base / max and the final questions
        """
        rng = rng or make_rng()
        base = resolve_base(base, self.default_base)
        max_questions = resolve_max(max_questions, self.default_max)

        result = AssemblyResult(base=base, max=max_questions)
        pool: List[Block] = []

        for exam in exams:
            blocks = build_blocks(exam.questions)
            target = compute_target(base, exam.weight_percent)
            selection = select_blocks(blocks, target, rng)
            pool.extend(selection.blocks)

            result.allocations.append(ExamAllocation(
                exam_id=exam.id,
                target=target,
                block_count=len(blocks),
                selected_questions=selection.total,
                fallback_used=selection.fallback_used
            ))
            logger.debug(
                f"Exam {exam.id}: target={target}, blocks={len(blocks)}, "
                f"selected={selection.total}, fallback={selection.fallback_used}"
            )

        kept, forced = trim_to_cap(shuffled(pool, rng), max_questions)
        result.fallback_used = forced

        questions: List[Question] = []
        for block in kept:
            questions.extend(block.questions)
        result.questions = questions

        logger.info(
            f"Assembled {result.count} questions from {len(result.allocations)} exams "
            f"(base={base}, max={max_questions}, requested={result.requested})"
        )
        if forced:
            logger.warning(
                f"First block exceeds max={max_questions}; returning it alone "
                f"({result.count} questions)"
            )

        return result


def assemble_exam(
    exams: Iterable[Exam],
    base: Any = None,
    max_questions: Any = None,
    rng: Optional[random.Random] = None
) -> AssemblyResult:
    """Module-level shortcut using the built-in defaults (base 25, max 100)."""
    return ExamAssembler().assemble(exams, base=base, max_questions=max_questions, rng=rng)

"""
Exam Prep API - Exam Assembly Module
Block-aware weighted question selection
"""
from .models import (
    Question,
    Exam,
    Block,
    BlockSelection,
    ExamAllocation,
    AssemblyResult
)
from .blocks import build_blocks
from .quota import DEFAULT_BASE, DEFAULT_MAX, compute_target, resolve_base, resolve_max
from .selector import select_blocks
from .assembler import ExamAssembler, assemble_exam, make_rng, trim_to_cap
from .images import to_absolute_image_url

__all__ = [
    "Question",
    "Exam",
    "Block",
    "BlockSelection",
    "ExamAllocation",
    "AssemblyResult",
    "build_blocks",
    "DEFAULT_BASE",
    "DEFAULT_MAX",
    "compute_target",
    "resolve_base",
    "resolve_max",
    "select_blocks",
    "ExamAssembler",
    "assemble_exam",
    "make_rng",
    "trim_to_cap",
    "to_absolute_image_url"
]

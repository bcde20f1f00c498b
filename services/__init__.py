# Classi v1.0.0
"""
Services package for Classi.
Contains the reference file codec and the scoring pipeline.
"""
from services.codec import encrypt, decrypt, encrypt_file, decrypt_file
from services.scoring import (
    ScoreResult,
    load_tree,
    load_reference_tree,
    load_candidate_tree,
    score_trees,
    score_files,
    format_report
)

__all__ = [
    "encrypt",
    "decrypt",
    "encrypt_file",
    "decrypt_file",
    "ScoreResult",
    "load_tree",
    "load_reference_tree",
    "load_candidate_tree",
    "score_trees",
    "score_files",
    "format_report"
]

"""
核心层：数据模型、标识符、存储和 raw 模式判定
"""

from .ids import (
    DEFAULT_ID_LENGTH,
    ID_ALPHABET,
    MAX_NOTE_ID_LENGTH,
    extract_note_id,
    generate_note_id,
    is_valid_note_id,
    validate_note_id,
)
from .models import Note, SaveAction, SaveResult
from .raw_mode import is_raw_request
from .store import NoteStore

__all__ = [
    'Note',
    'SaveAction',
    'SaveResult',
    'NoteStore',
    'ID_ALPHABET',
    'DEFAULT_ID_LENGTH',
    'MAX_NOTE_ID_LENGTH',
    'generate_note_id',
    'is_valid_note_id',
    'validate_note_id',
    'extract_note_id',
    'is_raw_request',
]

from .schema import DIFFICULTIES, QTYPES, MODES, DIAGRAM_KINDS, DTYPES, AnswerRow
from .store import (
    AnswerHistory,
    init_store,
    validate_records,
    append_answers,
    load_all,
    query_question,
    query_slice,
    export_ndjson,
)

__all__ = [
    "DIFFICULTIES",
    "QTYPES",
    "MODES",
    "DIAGRAM_KINDS",
    "DTYPES",
    "AnswerRow",
    "AnswerHistory",
    "init_store",
    "validate_records",
    "append_answers",
    "load_all",
    "query_question",
    "query_slice",
    "export_ndjson",
]

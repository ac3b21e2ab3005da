"""CSV export of candidate lists and clinical samples.

Encoding is a pure function of (records, columns): same input, same bytes.
Handing the document to the user (download, save dialog) is left to the
caller.
"""

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, NamedTuple

from glycoatlas.models import ClinicalSample, ExpressionRecord

_NEEDS_QUOTING = ('"', ",", "\n", "\r")


class Fmt(str, Enum):
    FIXED4 = "fixed4"  # expression-like magnitudes
    FIXED1 = "fixed1"  # durations
    SCI4 = "sci4"  # p-values, FDR
    TEXT = "text"  # verbatim, quoted only when needed
    QUOTED = "quoted"  # free text, always quoted


class Column(NamedTuple):
    header: str
    extract: Callable[[Any], Any]
    fmt: Fmt = Fmt.TEXT


def quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def format_value(value: Any, fmt: Fmt) -> str:
    if fmt is Fmt.FIXED4:
        return f"{float(value):.4f}"
    if fmt is Fmt.FIXED1:
        return f"{float(value):.1f}"
    if fmt is Fmt.SCI4:
        return f"{float(value):.4e}"

    text = "" if value is None else str(getattr(value, "value", value))
    if fmt is Fmt.QUOTED or any(ch in text for ch in _NEEDS_QUOTING):
        return quote(text)
    return text


def encode_csv(records: Iterable[Any], columns: Sequence[Column]) -> str:
    """Header line plus one line per record, in input order, no trailing newline."""
    lines = [",".join(format_value(c.header, Fmt.TEXT) for c in columns)]
    for record in records:
        lines.append(",".join(format_value(c.extract(record), c.fmt) for c in columns))
    return "\n".join(lines)


EXPRESSION_COLUMNS: list[Column] = [
    Column("GeneID", lambda r: r.gene_id),
    Column("Symbol", lambda r: r.symbol),
    Column("Category", lambda r: r.category),
    Column("Tumor_Expression_Log2CPM", lambda r: r.tumor_expression, Fmt.FIXED4),
    Column("Normal_Expression_Log2CPM", lambda r: r.normal_expression, Fmt.FIXED4),
    Column("Log2FC", lambda r: r.fold_change, Fmt.FIXED4),
    Column("P_Value", lambda r: r.p_value, Fmt.SCI4),
    Column("FDR", lambda r: r.fdr, Fmt.SCI4),
    Column("Evidence", lambda r: r.evidence, Fmt.QUOTED),
    Column("Localization", lambda r: r.localization, Fmt.QUOTED),
]


def sample_columns(tumor_type: str, gene_symbol: str) -> list[Column]:
    return [
        Column("Sample_ID", lambda s: s.sample_id),
        Column("Tumor_Type", lambda s: tumor_type),
        Column("Gene", lambda s: gene_symbol),
        Column("Expression_Level", lambda s: s.expression_level, Fmt.FIXED4),
        Column("Group", lambda s: s.group),
        Column("Survival_Months", lambda s: s.survival_months, Fmt.FIXED1),
        Column("Vital_Status", lambda s: s.status),
    ]


def encode_expression(records: Iterable[ExpressionRecord]) -> str:
    return encode_csv(records, EXPRESSION_COLUMNS)


def encode_samples(samples: Iterable[ClinicalSample], tumor_type: str, gene_symbol: str) -> str:
    return encode_csv(samples, sample_columns(tumor_type, gene_symbol))


def expression_filename(tumor_code: str, category: str) -> str:
    return f"{tumor_code}_{category}_GlycoRNA_Data.csv"


def samples_filename(tumor_code: str, gene_symbol: str) -> str:
    return f"{tumor_code}_{gene_symbol}_Clinical_Samples.csv"

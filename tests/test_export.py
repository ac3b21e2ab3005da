"""Tests for the CSV export encoder."""

from conftest import make_record

from glycoatlas.export import (
    EXPRESSION_COLUMNS,
    Column,
    Fmt,
    encode_csv,
    encode_expression,
    encode_samples,
    expression_filename,
    format_value,
    samples_filename,
)
from glycoatlas.models import ClinicalSample

EXPRESSION_HEADER = (
    "GeneID,Symbol,Category,Tumor_Expression_Log2CPM,Normal_Expression_Log2CPM,"
    "Log2FC,P_Value,FDR,Evidence,Localization"
)


def test_empty_input_yields_header_only():
    doc = encode_expression([])
    assert doc == EXPRESSION_HEADER
    assert doc.splitlines() == [EXPRESSION_HEADER]


def test_expression_row_formatting():
    record = make_record(
        symbol="RNY1",
        gene_id="ENSG00000201098",
        category="YRNA",
        tumor_expression=8.12346,
        normal_expression=5.5,
        fold_change=-1.0,
        p_value=0.000012345,
        fdr=0.0002,
        evidence="Binds Siglec receptors",
        localization="Cell surface",
    )

    header, row = encode_expression([record]).split("\n")

    assert header == EXPRESSION_HEADER
    assert row == (
        "ENSG00000201098,RNY1,YRNA,8.1235,5.5000,-1.0000,1.2345e-05,2.0000e-04,"
        '"Binds Siglec receptors","Cell surface"'
    )
    assert len(row.split(",")) == len(EXPRESSION_COLUMNS)


def test_embedded_quotes_are_doubled():
    record = make_record(evidence='He said "ok"')
    row = encode_expression([record]).split("\n")[1]
    assert '"He said ""ok"""' in row


def test_text_quoted_only_when_needed():
    assert format_value("plain", Fmt.TEXT) == "plain"
    assert format_value("a,b", Fmt.TEXT) == '"a,b"'
    assert format_value('5" tall', Fmt.TEXT) == '"5"" tall"'
    assert format_value("line\nbreak", Fmt.TEXT) == '"line\nbreak"'
    assert format_value("plain", Fmt.QUOTED) == '"plain"'


def test_rows_keep_input_order_and_output_is_deterministic():
    records = [make_record(symbol=s) for s in ("Z-last", "A-first", "M-mid")]

    first = encode_expression(records)
    second = encode_expression(records)

    assert first == second
    symbols = [line.split(",")[1] for line in first.split("\n")[1:]]
    assert symbols == ["Z-last", "A-first", "M-mid"]
    assert not first.endswith("\n")


def test_custom_columns():
    columns = [Column("Name", lambda r: r["name"]), Column("Score", lambda r: r["score"], Fmt.FIXED1)]
    doc = encode_csv([{"name": "x", "score": 2.25}, {"name": "y,z", "score": 3}], columns)
    assert doc == 'Name,Score\nx,2.2\n"y,z",3.0'


def test_sample_export():
    samples = [
        ClinicalSample(sample_id="TCGA-A1-0001", expression_level=9.123456, group="High",
                       survival_months=14.25, status="DECEASED"),
        ClinicalSample(sample_id="TCGA-A1-0002", expression_level=3.2, group="Low",
                       survival_months=60.0, status="living"),
    ]

    lines = encode_samples(samples, "BRCA", "RNY5").split("\n")

    assert lines == [
        "Sample_ID,Tumor_Type,Gene,Expression_Level,Group,Survival_Months,Vital_Status",
        "TCGA-A1-0001,BRCA,RNY5,9.1235,High,14.2,DECEASED",
        "TCGA-A1-0002,BRCA,RNY5,3.2000,Low,60.0,LIVING",
    ]


def test_filenames():
    assert expression_filename("BRCA", "tRNA") == "BRCA_tRNA_GlycoRNA_Data.csv"
    assert samples_filename("LUAD", "RNY1") == "LUAD_RNY1_Clinical_Samples.csv"

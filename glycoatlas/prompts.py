_SYSTEM = """\
You are a specialised bioinformatics database for glycosylated RNAs (glycoRNAs)
profiled across TCGA tumor types. Answer with a single JSON object only, no
markdown fences and no prose outside the JSON. Use exactly the snake_case keys
given in the request.
"""

_EXPRESSION = """\
Query: RNA category '{category}' in TCGA tumor type '{tumor_code}'.

List {count} specific RNA transcripts known or highly predicted to be glycoRNAs.
Return {{"records": [...]}} where each record has:
- gene_id, symbol, category (strings)
- tumor_expression, normal_expression (log2 CPM, numbers)
- fold_change, p_value, fdr (numbers)
- evidence (brief mechanism, string)
- localization (string)
"""

_DETAILED = """\
Comprehensive multi-omics analysis of the glycoRNA '{symbol}' in TCGA-{tumor_code}.

Return one object with keys gene_symbol, tumor_type and:
1. survival: {{p_val_log_rank, hazard_ratio, interpretation,
   data: [{{time, survival_prob, group}}], samples: [{{sample_id,
   expression_level, group, survival_months, status}}]}}.
   Kaplan-Meier points in months; group is exactly "High Expression" or
   "Low Expression". 15 samples with TCGA barcodes; sample group is "High"
   or "Low"; status is "LIVING" or "DECEASED".
2. clinical: expression by 'Pathologic Stage' (Stage I-IV) and 'Gender':
   [{{feature_name, p_value, groups: [{{name, average_expression, count}}]}}].
3. enrichment: top 5 GO (GO_BP/GO_CC/GO_MF) and KEGG terms:
   [{{id, term, category, p_value, count, gene_ratio}}].
4. immune: Spearman rho with 6 immune cell types:
   [{{cell_type, correlation, p_value}}].
5. drugs: top 5 drugs whose IC50 correlates with expression:
   [{{drug_name, correlation, mechanism, p_value}}].
"""


def system_prompt() -> str:
    return _SYSTEM


def expression_prompt(tumor_code: str, category: str, count: int) -> str:
    return _EXPRESSION.format(tumor_code=tumor_code, category=category, count=count)


def detailed_prompt(symbol: str, tumor_code: str) -> str:
    return _DETAILED.format(symbol=symbol, tumor_code=tumor_code)

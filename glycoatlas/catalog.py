"""Fixed selection catalogs: TCGA tumor types and glycoRNA categories."""

from enum import Enum

from pydantic import BaseModel


class RnaCategory(str, Enum):
    tRNA = "tRNA"
    YRNA = "YRNA"
    snRNA = "snRNA"
    rRNA = "rRNA"
    snoRNA = "snoRNA"


class TumorType(BaseModel):
    code: str
    name: str


TUMOR_TYPES: list[TumorType] = [
    TumorType(code="ACC", name="Adrenocortical Carcinoma"),
    TumorType(code="BLCA", name="Bladder Urothelial Carcinoma"),
    TumorType(code="BRCA", name="Breast Invasive Carcinoma"),
    TumorType(code="CESC", name="Cervical Squamous Cell Carcinoma"),
    TumorType(code="CHOL", name="Cholangiocarcinoma"),
    TumorType(code="COAD", name="Colon Adenocarcinoma"),
    TumorType(code="ESCA", name="Esophageal Carcinoma"),
    TumorType(code="GBM", name="Glioblastoma Multiforme"),
    TumorType(code="HNSC", name="Head and Neck Squamous Cell Carcinoma"),
    TumorType(code="KICH", name="Kidney Chromophobe"),
    TumorType(code="KIRC", name="Kidney Renal Clear Cell Carcinoma"),
    TumorType(code="KIRP", name="Kidney Renal Papillary Cell Carcinoma"),
    TumorType(code="LGG", name="Brain Lower Grade Glioma"),
    TumorType(code="LIHC", name="Liver Hepatocellular Carcinoma"),
    TumorType(code="LUAD", name="Lung Adenocarcinoma"),
    TumorType(code="LUSC", name="Lung Squamous Cell Carcinoma"),
    TumorType(code="OV", name="Ovarian Serous Cystadenocarcinoma"),
    TumorType(code="PAAD", name="Pancreatic Adenocarcinoma"),
    TumorType(code="PRAD", name="Prostate Adenocarcinoma"),
    TumorType(code="READ", name="Rectum Adenocarcinoma"),
    TumorType(code="SKCM", name="Skin Cutaneous Melanoma"),
    TumorType(code="STAD", name="Stomach Adenocarcinoma"),
    TumorType(code="THCA", name="Thyroid Carcinoma"),
    TumorType(code="UCEC", name="Uterine Corpus Endometrial Carcinoma"),
]

_BY_CODE: dict[str, TumorType] = {t.code: t for t in TUMOR_TYPES}

RNA_CATEGORIES: list[RnaCategory] = list(RnaCategory)


def validate_tumor_code(code: str) -> str:
    """Return the code if it is in the catalog, else raise ValueError."""
    if not code:
        raise ValueError("tumor_code is required")
    if code not in _BY_CODE:
        raise ValueError(
            f"Unknown tumor type: {code}. "
            f"Available: {', '.join(sorted(_BY_CODE))}"
        )
    return code


def validate_category(category: str | RnaCategory) -> RnaCategory:
    """Coerce to RnaCategory, raising ValueError for anything outside the enum."""
    if not category:
        raise ValueError("rna_category is required")
    try:
        return RnaCategory(category)
    except ValueError:
        raise ValueError(
            f"Unknown RNA category: {category}. "
            f"Available: {', '.join(c.value for c in RnaCategory)}"
        ) from None

# ============================================================================
# src/pdf_chat/constants/medical_keywords.py
# ============================================================================
"""
Medical Report Keywords
- Keyword list used to recognise blood-test / lab reports
- Match threshold

Matching is case-insensitive substring matching; each keyword counts
once no matter how often it appears. Changing either the list or the
threshold changes which documents get the medical analysis prompt, so
bump MEDICAL_KEYWORDS_VERSION with any edit.
"""

MEDICAL_KEYWORDS_VERSION = "2"

# Minimum number of distinct keywords for a document to count as a medical report
MEDICAL_KEYWORD_THRESHOLD = 3

# Lower-case only. No entry may be a substring of another entry.
MEDICAL_KEYWORDS = (
    # Report framing
    "blood test",
    "laboratory",
    "lab results",
    "lab report",
    "clinical",
    "reference range",
    "specimen",

    # Lipid panel
    "lipid panel",
    "cholesterol",
    "triglycerides",
    "hdl",
    "ldl",

    # Glucose
    "glucose",
    "hba1c",

    # Complete blood count
    "complete blood count",
    "cbc",
    "hemoglobin",
    "hematocrit",
    "platelet",
    "wbc",
    "rbc",
    "mcv",
    "mchc",

    # Thyroid
    "thyroid",
    "tsh",

    # Kidney / liver function
    "creatinine",
    "urea",
    "bilirubin",
    "albumin",
    "sgot",
    "sgpt",

    # Vitamins / iron
    "vitamin d",
    "ferritin",
)

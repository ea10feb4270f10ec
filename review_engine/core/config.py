import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Request bodies are JSON text; the platform caps checked text at 50k chars
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024)))  # 1 MB soft cap

# Rating aggregation
CRITERIA = ("originality", "methodology", "clarity", "significance", "references")
BASELINE_RATING = 3
RATING_MIN = 1
RATING_MAX = 5

LEVEL_IMPACT = {
    "high": -1.5,
    "medium": -1.0,
    "low": 0.0,
}

# Substring match against the lowercased suggestion category
CRITERIA_KEYWORDS = {
    "methodology": ("method", "approach", "technical", "logic", "reason"),
    "originality": ("original", "novel", "innovation"),
    "clarity": ("clear", "clarity", "writing", "structure", "presentation"),
    "significance": ("impact", "significan", "important", "relevan"),
    "references": ("reference", "citation", "literature"),
}

# Plagiarism status thresholds (similarity %, half-open on the low side)
CLEAN_BELOW = float(os.getenv("CLEAN_BELOW", "10"))
SUSPICIOUS_BELOW = float(os.getenv("SUSPICIOUS_BELOW", "30"))

# Placeholder / test content policy
PLACEHOLDER_DETECTION = os.getenv("PLACEHOLDER_DETECTION", "true").lower() == "true"
PLACEHOLDER_MARKERS = tuple(
    m.strip().lower()
    for m in os.getenv(
        "PLACEHOLDER_MARKERS",
        "placeholder content,placeholder code,not a real article,"
        "not suitable for a meaningful review",
    ).split(",")
    if m.strip()
)
# the reviewer prompt asks for these verbatim, so they match case-sensitively
PLACEHOLDER_FLAGS = tuple(
    f.strip()
    for f in os.getenv("PLACEHOLDER_FLAGS", "TEST CONTENT,TEST CODE").split(",")
    if f.strip()
)

# "lines 1-100000" contributes only its endpoints past this span
MAX_LINE_RANGE = int(os.getenv("MAX_LINE_RANGE", "500"))

SNIPPET_WORKERS = int(os.getenv("SNIPPET_WORKERS", "4"))

# AI reviewer collaborator
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
STRUCTURED_REVIEW = os.getenv("STRUCTURED_REVIEW", "false").lower() == "true"

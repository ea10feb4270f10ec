# review_engine/services/llm.py
import os
import time
import logging
from typing import Optional

from pydantic import BaseModel

from review_engine.core.config import OPENAI_MODEL, STRUCTURED_REVIEW
from review_engine.models.report import SourceKind

log = logging.getLogger("llm")

ARTICLE_PROMPT = """\
You are an expert academic reviewer with deep knowledge in {field} research methodology, logical reasoning, and academic writing standards.

Please analyze the following academic article:

TITLE: {title}
ABSTRACT: {abstract}
{content}

First, determine if this is a real academic article or just a test/placeholder with minimal content.
If it appears to be a test article with placeholder text (like "test", "123", "lorem ipsum", etc.),
clearly identify this as "TEST CONTENT" and do not review it.

If it's a real article, provide a constructive analysis under these headings, one bullet per point:
Logic Issues:
Structure Issues:
Citation Issues:
General Issues:
"""

CODE_PROMPT = """\
You are an expert {language} developer with deep knowledge of software engineering best practices, code quality, and security.

Please analyze the following code:

```{language}
{content}
```

Context: {context}

First, determine if this is real code or just test/placeholder content.
If it appears to be placeholder code, clearly identify this as "TEST CODE" and do not review it.

If it's real code, provide a constructive analysis under these headings, one bullet per point,
mentioning line numbers as "line N" or "lines N-M" where relevant:
Bugs:
Performance:
Security:
Readability:
Suggestions:
"""

STRUCTURED_SUFFIX = (
    "\nReturn ONLY valid JSON with this exact shape:\n"
    '{"isTestContent": bool, "sections": {"<heading>": [str, ...]}}\n'
    "No prose, no markdown, no extra keys."
)


class GenerationError(BaseModel):
    message: str


class GenerationResult(BaseModel):
    success: bool
    text: Optional[str] = None
    error: Optional[GenerationError] = None
    model: Optional[str] = None


# Lazy singleton; constructing the client without a key raises
_client = None


def _openai():
    global _client
    if _client is None:
        from openai import OpenAI
        _client = OpenAI(timeout=60.0, max_retries=3)
    return _client


def is_configured() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))


def _chat(messages: list, model: str) -> str:
    """Single call to OpenAI Chat Completions."""
    log.info("LLM chat call model=%s, messages=%d", model, len(messages))
    resp = _openai().chat.completions.create(model=model, messages=messages, temperature=0.2)
    return resp.choices[0].message.content or ""


def build_prompt(
    content: str,
    source_kind: SourceKind = "article",
    title: str = "",
    abstract: str = "",
    field: str = "general academic",
    language: Optional[str] = None,
    context: str = "General code review",
    structured: bool = STRUCTURED_REVIEW,
) -> str:
    if source_kind == "code":
        prompt = CODE_PROMPT.format(language=language or "code", content=content, context=context)
    else:
        prompt = ARTICLE_PROMPT.format(field=field, title=title, abstract=abstract, content=content)
    return prompt + STRUCTURED_SUFFIX if structured else prompt


def generate_review(
    content: str,
    source_kind: SourceKind = "article",
    max_retries: int = 2,
    model: str = OPENAI_MODEL,
    **prompt_args,
) -> GenerationResult:
    """
    Ask the AI reviewer for a review of an article or code snippet.

    Never raises: a missing API key or a call that keeps failing comes back
    as success=False with the error message.
    """
    if not is_configured():
        log.info("OPENAI_API_KEY missing, AI reviewer disabled.")
        return GenerationResult(
            success=False, model=model,
            error=GenerationError(message="AI reviewer is not configured"),
        )

    messages = [
        {"role": "system", "content": "You are a rigorous, constructive peer reviewer."},
        {"role": "user", "content": build_prompt(content, source_kind, **prompt_args)},
    ]
    last_err: Optional[Exception] = None
    for attempt in range(max_retries + 1):
        try:
            text = _chat(messages, model)
            if text.strip():
                return GenerationResult(success=True, text=text, model=model)
            last_err = ValueError("Empty response from model")
        except Exception as e:
            last_err = e
            log.warning("LLM call failed (attempt %d): %s", attempt + 1, e)
        if attempt < max_retries:
            # exponential-ish backoff
            time.sleep(1.0 + 0.75 * attempt)
    return GenerationResult(
        success=False, model=model,
        error=GenerationError(message=f"AI review failed: {last_err}"),
    )

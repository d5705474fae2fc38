# highlighter.py
import re
from typing import Dict, Iterable, List, Optional, Pattern

from schemas import RecruiterAnalysisResult


def _unique_keywords(keywords: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for kw in keywords:
        kw = (kw or "").strip()
        if kw and kw.lower() not in seen:
            seen.add(kw.lower())
            result.append(kw)
    return result


def build_keyword_pattern(keywords: Iterable[str]) -> Optional[Pattern[str]]:
    """
    One case-insensitive alternation of all keywords.

    Longest keywords come first so "machine learning" wins over "learning".
    Word boundaries are only added on edges that are word characters, so
    "C++" and ".NET" still match.
    """
    unique = sorted(_unique_keywords(keywords), key=len, reverse=True)
    if not unique:
        return None

    alternatives = []
    for kw in unique:
        start = r"\b" if re.match(r"\w", kw[0]) else ""
        end = r"\b" if re.match(r"\w", kw[-1]) else ""
        alternatives.append(f"{start}{re.escape(kw)}{end}")
    return re.compile("(" + "|".join(alternatives) + ")", re.IGNORECASE)


def highlight_keywords(
    text: str,
    keywords: Iterable[str],
    prefix: str = "**",
    suffix: str = "**",
) -> str:
    pattern = build_keyword_pattern(keywords)
    if pattern is None or not text:
        return text
    return pattern.sub(lambda m: f"{prefix}{m.group(0)}{suffix}", text)


def count_keyword_hits(text: str, keywords: Iterable[str]) -> Dict[str, int]:
    """Occurrences of each keyword in text (keys keep the caller's spelling)."""
    unique = _unique_keywords(keywords)
    hits = {kw: 0 for kw in unique}
    pattern = build_keyword_pattern(unique)
    if pattern is None or not text:
        return hits

    by_lower = {kw.lower(): kw for kw in unique}
    for match in pattern.finditer(text):
        hits[by_lower[match.group(0).lower()]] += 1
    return hits


def keywords_from_analysis(
    analysis: RecruiterAnalysisResult,
    statuses: Iterable[str] = ("Match", "Partial"),
) -> List[str]:
    """Skill items from the JD that the analysis found (fully or partly) in the resume."""
    wanted = set(statuses)
    items = analysis.required_skills_match.items + analysis.nice_to_have_skills_match.items
    return _unique_keywords(i.item for i in items if i.status in wanted)

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-14
# Updated: 2026-10-16
# Description: CitationFormatter
# -----------------------------------------------------------------------------
from typing import Dict, Iterable, List, Sequence, Tuple

from retrieval.types import Citation, RetrievalResult

NO_RESULTS_MESSAGE = "No relevant passages found in the script for this query."


def to_citation(result: RetrievalResult) -> Citation:
    return Citation(
        episode_id=result.episode_id,
        episode_name=result.episode_name,
        chapter_id=result.chapter_id,
        message_id=result.message_id,
        text_eng=result.text_eng,
        speaker=result.speaker,
        text_jpn=result.text_jpn,
    )


def dedupe_citations(citations: Iterable[Citation]) -> List[Citation]:
    """
    Drop repeated passages. messageId is only unique within an
    (episode, chapter), so that triple is the key. First occurrence wins.
    """
    seen: set[Tuple[str, str, int]] = set()
    out: List[Citation] = []
    for c in citations:
        key = (c.episode_id, c.chapter_id, c.message_id)
        if key in seen:
            continue
        seen.add(key)
        out.append(c)
    return out


def group_results_by_episode(results: Iterable[RetrievalResult]) -> Dict[str, List[RetrievalResult]]:
    """
    Partition results by episode_id. Groups appear in order of first
    appearance and keep the supplied order within each group.
    """
    grouped: Dict[str, List[RetrievalResult]] = {}
    for result in results:
        grouped.setdefault(result.episode_id, []).append(result)
    return grouped


def format_search_results(results: Sequence[RetrievalResult], *, limit: int = 10) -> str:
    """
    Render results as numbered, fully cited passages for an answering agent's prompt.
    """
    if not results:
        return NO_RESULTS_MESSAGE

    lines: List[str] = ["Here are relevant passages from the script:", ""]
    for idx, result in enumerate(results[:limit], start=1):
        lines.append(
            f"[{idx}] Episode: {result.episode_name}, "
            f"Chapter: {result.chapter_id}, Message: {result.message_id}"
        )
        if result.speaker:
            lines.append(f"Speaker: {result.speaker}")
        lines.append(f"Text: {result.text_eng}")
        if result.text_jpn:
            lines.append(f"Japanese: {result.text_jpn}")
        lines.append(f"Relevance: {result.score * 100:.1f}%")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"

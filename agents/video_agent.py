"""
Video Summary Agent
Summarizes a YouTube video (or answers a question about it) from its transcript.

Transcript fetching and video search are injected collaborators, so this
module does no network I/O of its own:
    transcript_fetcher(video_id, url) -> str | None
    video_search(query) -> video_id | None
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from agents.orchestrator import QueryResolver
from memory.learning_store import VideoAnswerCache

logger = logging.getLogger(__name__)

VIDEO_ID_PATTERN = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
VIDEO_ID_LENGTH = 11

MAX_TRANSCRIPT_CHARS = 20000

SEARCH_TAG = re.compile(r"\|\|SEARCH: (.*?)\|\|")

DEFAULT_VIDEO_REQUEST = "Summarize this video and extract key learning points."

VIDEO_PROMPT_SUFFIX = (
    "\n\nIMPORTANT: Do not mention the source of the information (e.g. 'the transcript says', "
    "'in the video', 'based on the transcript'). Provide the answer directly as if you possess the knowledge."
    "\n\nFinally, suggest 3 related videos for further learning. Format them EXACTLY as: "
    "'||SEARCH: <search_query>||'. Do not add numbering or bullet points for these lines. Just the raw tags."
)


def extract_video_id(url: str) -> Optional[str]:
    """Return the 11-character video id from a YouTube URL, or None."""
    if not isinstance(url, str):
        return None
    match = VIDEO_ID_PATTERN.match(url)
    if match and len(match.group(2)) == VIDEO_ID_LENGTH:
        return match.group(2)
    return None


def truncate_transcript(text: str) -> str:
    if len(text) > MAX_TRANSCRIPT_CHARS:
        return text[:MAX_TRANSCRIPT_CHARS] + "... [truncated]"
    return text


def build_video_prompt(question: Optional[str]) -> str:
    return (question or DEFAULT_VIDEO_REQUEST) + VIDEO_PROMPT_SUFFIX


def split_search_tags(answer: str) -> Tuple[str, List[str]]:
    """
    Remove ||SEARCH: ...|| tags from an answer.

    Returns:
        (cleaned answer, search queries in order)
    """
    queries = SEARCH_TAG.findall(answer)
    return SEARCH_TAG.sub("", answer).strip(), queries


class VideoSummaryAgent:
    """
    Cached transcript-based answers for videos.
    """

    def __init__(self, resolver: QueryResolver, cache: VideoAnswerCache,
                 transcript_fetcher: Callable[[str, str], Optional[str]],
                 video_search: Optional[Callable[[str], Optional[str]]] = None):
        self.resolver = resolver
        self.cache = cache
        self.transcript_fetcher = transcript_fetcher
        self.video_search = video_search

    def _further_learning(self, queries: List[str]) -> List[str]:
        links = []
        if not self.video_search:
            return links

        for query in queries:
            try:
                video_id = self.video_search(query)
            except Exception as e:
                logger.warning("Failed to search video for '%s': %s", query, e)
                continue
            if video_id and len(video_id) == VIDEO_ID_LENGTH:
                links.append(f"[Watch: {query}](https://www.youtube.com/watch?v={video_id})")
        return links

    def summarize(self, url: str, question: Optional[str] = None) -> Dict:
        """
        Answer a question about a video, or summarize it.

        Args:
            url: YouTube URL
            question: Optional question; None asks for a summary

        Returns:
            Response dict with success, source, answer/error and transcript
        """
        video_id = extract_video_id(url)
        if not video_id:
            return {"success": False, "error": "Invalid YouTube URL"}

        cached = self.cache.get(video_id, question)
        if cached:
            logger.info("Cache hit for video %s", video_id)
            return {**cached, "source": "youtube_memory"}

        try:
            transcript = self.transcript_fetcher(video_id, url)
        except Exception as e:
            logger.error("Transcript retrieval failed for %s: %s", video_id, e)
            transcript = None

        if not transcript:
            return {
                "success": False,
                "error": "Failed to process YouTube video",
                "message": "Could not retrieve captions or transcribe video audio.",
            }

        transcript = truncate_transcript(transcript)

        result = self.resolver.resolve(
            build_video_prompt(question),
            context=f"This is a transcript from a YouTube video (URL: {url}).\n\nTRANSCRIPT:\n{transcript}",
            skip_math=question is None,
        )

        response = result.to_dict()
        if not result.success:
            return {**response, "transcript": transcript}

        answer, queries = split_search_tags(result.answer)
        links = self._further_learning(queries)
        if links:
            answer += "\n\n**Further Learning:**\n" + "\n".join(f"- {link}" for link in links)

        response.update({"answer": answer, "transcript": transcript, "source": "youtube"})
        self.cache.save(video_id, question, response)
        return response

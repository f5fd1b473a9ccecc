"""
Orchestrator
Tiered answer resolution: memory → dataset → symbolic solver → LLM.

Each stage short-circuits: as soon as one produces an answer, later stages do
not run. resolve() never raises; every failure becomes a ResolutionResult
with success=False and a readable message.
"""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from agents.math_classifier import MathCategory, MathClassifier
from agents.symbolic_solvers import solve_algebra, solve_integral
from config.settings import Settings, load_settings
from llm.answer_gateway import AnswerGateway
from llm.groq_client import GroqClient
from memory.learning_store import LearnedAnswerStore, VideoAnswerCache
from rag.dataset_search import CuratedDataset
from utils.answer_formatter import format_answer
from utils.language_detector import LanguageDetector, language_from_hint
from utils.source_context import SOURCE_KINDS, build_source_context

logger = logging.getLogger(__name__)


class ResultSource(str, Enum):
    MEMORY = "memory"
    DATASET = "dataset"
    SOLVER = "solver"
    AI_MATH = "ai_math"
    AI = "ai"


@dataclass
class ResolutionResult:
    success: bool
    source: Optional[ResultSource]
    answer: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict without empty fields."""
        data = {key: value for key, value in asdict(self).items() if value is not None}
        if self.source is not None:
            data["source"] = self.source.value
        return data


SOLVERS = {
    MathCategory.ALGEBRA: solve_algebra,
    MathCategory.INTEGRALS: solve_integral,
}


@dataclass
class PipelineContext:
    """
    Everything the resolver reads. Built once at startup and injected.
    """
    dataset: CuratedDataset
    learned_answers: LearnedAnswerStore
    video_cache: VideoAnswerCache
    gateway: AnswerGateway
    classifier: MathClassifier = field(default_factory=MathClassifier)
    detector: LanguageDetector = field(default_factory=LanguageDetector)

    @classmethod
    def from_settings(cls, settings: Settings = None, client=None) -> "PipelineContext":
        """
        Load the dataset and open the caches described by settings.

        Args:
            settings: Defaults to load_settings()
            client: Chat client; a GroqClient is created when omitted
        """
        settings = settings or load_settings()
        detector = LanguageDetector()

        if client is None:
            client = GroqClient(
                api_key=settings.groq_api_key,
                model=settings.model,
                timeout=settings.request_timeout,
            )

        return cls(
            dataset=CuratedDataset.load(settings.data_dir),
            learned_answers=LearnedAnswerStore(settings.learned_qa_file),
            video_cache=VideoAnswerCache(settings.video_cache_file),
            gateway=AnswerGateway(client, settings=settings, detector=detector),
            detector=detector,
        )


class QueryResolver:
    """
    Decides which answer source to trust for a question.

    Stages:
    1. Memory (only without context)
    2. Curated dataset
    3. Math classification (unless skip_math)
    4. Symbolic solver (algebra / integrals)
    5. LLM as math tutor (any math category)
    6. LLM as general tutor (non-math); answer is learned when the question
       was asked without context, history or a custom prompt
    """

    def __init__(self, context: PipelineContext):
        self.context = context

    def resolve(self, question: str, context: Optional[str] = None, language=None,
                skip_math: bool = False, history=None, system_prompt: Optional[str] = None) -> ResolutionResult:
        """
        Resolve a question.

        Args:
            question: Question text
            context: Source material (document text, transcript); disables memory
            language: DetectedLanguage or language code/name hint
            skip_math: Skip classification and solvers
            history: Prior {"role", "content"} turns
            system_prompt: Custom system prompt for the LLM

        Returns:
            ResolutionResult
        """
        if not isinstance(question, str) or not question.strip():
            return ResolutionResult(
                success=False,
                source=None,
                error="Question is required",
                message="Please enter a question.",
            )

        try:
            return self._resolve(question, context, language, skip_math, history, system_prompt)
        except Exception as e:
            logger.exception("Error in query resolution")
            return ResolutionResult(
                success=False,
                source=ResultSource.AI,
                error=str(e),
                message="Unable to process your question. Please try again or rephrase your question.",
            )

    def _resolve(self, question, context, language, skip_math, history, system_prompt) -> ResolutionResult:
        # Stage 1: learned answers, reserved for context-free questions
        if not context:
            learned = self._find_learned(question)
            if learned is not None:
                logger.info("Memory hit: \"%s...\"", question[:20])
                return ResolutionResult(success=True, source=ResultSource.MEMORY, answer=learned)

        # Stage 2: curated dataset
        match = self.context.dataset.search(question)
        if match.found:
            logger.info("Dataset hit: class=%s subject=%s", match.class_name, match.subject)
            return ResolutionResult(success=True, source=ResultSource.DATASET, answer=format_answer(match))

        # Stage 3: classification
        category = MathCategory.UNKNOWN
        if not skip_math:
            category = self.context.classifier.classify(question)

        # Stage 4: symbolic solvers
        solver = SOLVERS.get(category)
        if solver is not None:
            solution = solver(question)
            if solution.ok:
                logger.info("Solved symbolically (%s)", category.value)
                return ResolutionResult(
                    success=True,
                    source=ResultSource.SOLVER,
                    answer=format_answer(solution),
                    category=category.value,
                )
            logger.debug("Solver mismatch: %s", solution.reason)

        detected = language_from_hint(language) or self.context.detector.detect(question)

        # Stage 5: LLM math tutor
        if category.is_math:
            logger.info("Math problem detected (%s), using AI math solver", category.value)
            return self._ask_math(question, category, detected, context, history, system_prompt)

        # Stage 6: LLM general tutor
        logger.info("Dataset and solver miss, switching to AI")
        return self._ask_general(question, detected, context, history, system_prompt)

    def _find_learned(self, question: str) -> Optional[str]:
        try:
            record = self.context.learned_answers.find(question)
        except Exception as e:
            logger.error("Learned-answer lookup failed: %s", e)
            return None
        if isinstance(record, dict) and record.get("answer"):
            return record["answer"]
        return None

    def _ask_math(self, question, category, language, context, history, system_prompt) -> ResolutionResult:
        try:
            reply = self.context.gateway.ask(
                question,
                is_math_problem=True,
                language=language,
                context=context,
                history=history,
                system_prompt=system_prompt,
            )
        except Exception as e:
            logger.error("Error in math solving: %s", e)
            return ResolutionResult(
                success=False,
                source=ResultSource.AI_MATH,
                error=str(e),
                message="Unable to solve the math problem. Please try again or rephrase your question.",
                category=category.value,
            )

        if not reply.ok:
            return ResolutionResult(
                success=False,
                source=ResultSource.AI_MATH,
                error=reply.text,
                message="Math solver unavailable. Please check your API configuration.",
                category=category.value,
            )

        return ResolutionResult(
            success=True,
            source=ResultSource.AI_MATH,
            answer=format_answer(reply.text),
            category=category.value,
        )

    def _ask_general(self, question, language, context, history, system_prompt) -> ResolutionResult:
        try:
            reply = self.context.gateway.ask(
                question,
                is_math_problem=False,
                language=language,
                context=context,
                history=history,
                system_prompt=system_prompt,
            )
        except Exception as e:
            logger.error("Error in query resolution: %s", e)
            return ResolutionResult(
                success=False,
                source=ResultSource.AI,
                error=str(e),
                message="Unable to process your question. Please try again or rephrase your question.",
            )

        if not reply.ok:
            return ResolutionResult(
                success=False,
                source=ResultSource.AI,
                error=reply.text,
                message="AI service unavailable. Please try a different question or check your API configuration.",
            )

        if not context and not history and not system_prompt:
            self._learn(question, reply.text)

        return ResolutionResult(success=True, source=ResultSource.AI, answer=format_answer(reply.text))

    def _learn(self, question: str, answer: str) -> None:
        # A failed write must not affect the answer already produced.
        try:
            self.context.learned_answers.learn(question, answer, source=ResultSource.AI.value)
        except Exception as e:
            logger.error("Could not learn answer: %s", e)

    def resolve_from_source(self, kind: str, extracted_text: str, question: Optional[str] = None,
                            pages: Optional[int] = None) -> ResolutionResult:
        """
        Resolve text produced by an upstream extractor.

        image/audio/video: the extracted text is the question.
        pdf: an explicit question is answered against the document text.
        """
        if kind not in SOURCE_KINDS:
            return ResolutionResult(
                success=False,
                source=None,
                error=f"Unsupported source: {kind}",
                message="This kind of upload is not supported.",
            )

        if not isinstance(extracted_text, str) or not extracted_text.strip():
            return ResolutionResult(
                success=False,
                source=None,
                error=f"No text could be extracted from the {kind}",
                message="Could not read any text. Please try a clearer file.",
            )

        if kind == "pdf":
            if not question:
                return ResolutionResult(
                    success=False,
                    source=None,
                    error="Question is required",
                    message="Ask a question about the document.",
                )
            return self.resolve(question, context=build_source_context(kind, extracted_text, pages))

        return self.resolve(extracted_text, context=build_source_context(kind, extracted_text))


def main():
    """Resolve a few sample questions end to end."""
    from utils.logging_config import setup_logging

    settings = load_settings()
    setup_logging(settings.log_level)
    resolver = QueryResolver(PipelineContext.from_settings(settings))

    for question in ["2x - 4 = 10", "integrate 2x+3", "What is photosynthesis?"]:
        result = resolver.resolve(question)
        print(f"\nQ: {question} [{result.source.value if result.source else '-'}]")
        print(result.answer or result.message)


if __name__ == "__main__":
    main()

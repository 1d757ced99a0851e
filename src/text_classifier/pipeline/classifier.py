"""
ClassifierPipeline: single-call text classification.

Flow for one request:
1. Tokenize text through the Vocabulary
2. Normalize to the model's fixed sequence length
3. Run the inference adapter
4. Decode scores via the LabelMap and rank them

There are no retries and no partial results: the first ClassifierError
aborts the call. The pipeline only adds request context (stage, text
length) to the error before re-raising it.
"""

import time
from pathlib import Path
from typing import Optional

import structlog

from text_classifier.config import Settings
from text_classifier.exceptions import ClassifierError, InferenceError, ModelLoadError
from text_classifier.inference.base_adapter import BaseInferenceAdapter
from text_classifier.inference.onnx_adapter import OnnxRuntimeAdapter
from text_classifier.models.classification import ClassificationResult, TimingBreakdown
from text_classifier.monitoring.metrics import (
    classification_errors_total,
    classification_stage_seconds,
    classifications_total,
    short_output_buffers_total,
)
from text_classifier.pipeline.decoding import decode_scores
from text_classifier.pipeline.sequence import normalize_sequence
from text_classifier.tokenization.tokenizer import Tokenizer
from text_classifier.vocab.loader import VocabLoader
from text_classifier.vocab.tables import LabelMap, Vocabulary

logger = structlog.get_logger(__name__)


class ClassifierPipeline:
    """
    Orchestrates tokenizer, adapter and decoding for one classification.

    Vocabulary and LabelMap are loaded once and never mutated, so a single
    pipeline can serve concurrent calls; the adapter serializes engine runs.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        label_map: LabelMap,
        adapter: BaseInferenceAdapter,
        max_sequence_length: int = 30,
        pad_token_id: int = 0,
        strict_output_length: bool = False,
        collect_timing: bool = True,
    ):
        """
        Args:
            vocabulary: Word -> id table
            label_map: Class index -> label table
            adapter: Inference adapter (owned by the pipeline)
            max_sequence_length: Model input length L
            pad_token_id: Id used for right padding
            strict_output_length: Raise InferenceError when the engine
                returns fewer scores than there are labels
            collect_timing: Attach a TimingBreakdown to results
        """
        self.vocabulary = vocabulary
        self.label_map = label_map
        self.adapter = adapter
        self.tokenizer = Tokenizer(vocabulary)
        self.max_sequence_length = max_sequence_length
        self.pad_token_id = pad_token_id
        self.strict_output_length = strict_output_length
        self.collect_timing = collect_timing

        logger.info(
            "ClassifierPipeline initialized",
            vocabulary_size=len(vocabulary),
            class_count=label_map.class_count,
            max_sequence_length=max_sequence_length,
            adapter=repr(adapter),
            strict_output_length=strict_output_length,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        adapter: Optional[BaseInferenceAdapter] = None,
    ) -> "ClassifierPipeline":
        """
        Build a ready pipeline from configuration.

        Args:
            settings: Application settings
            adapter: Pre-built adapter; an OnnxRuntimeAdapter over
                ``settings.MODEL_PATH`` is created when omitted

        Raises:
            ModelLoadError: Model or resource files missing, or the engine
                could not create a session
            ResourceError: A resource file could not be read
            ParseError: A resource file is malformed
        """
        required = {"label_map": settings.LABEL_MAP_PATH, "vocabulary": settings.VOCAB_PATH}
        if adapter is None:
            required["model"] = settings.MODEL_PATH
        missing = {name: path for name, path in required.items() if not Path(path).is_file()}
        if missing:
            raise ModelLoadError("Missing model or json files", details={"missing": missing})

        loader = VocabLoader(
            oov_token=settings.OOV_TOKEN,
            oov_fallback_id=settings.OOV_FALLBACK_ID,
        )
        label_map, vocabulary = loader.load(settings.LABEL_MAP_PATH, settings.VOCAB_PATH)

        if adapter is None:
            adapter = OnnxRuntimeAdapter(
                model_path=settings.MODEL_PATH,
                input_name=settings.INPUT_TENSOR_NAME,
                output_name=settings.OUTPUT_TENSOR_NAME,
                log_severity=settings.ORT_LOG_SEVERITY,
                intra_op_threads=settings.ORT_INTRA_OP_THREADS,
            )

        return cls(
            vocabulary=vocabulary,
            label_map=label_map,
            adapter=adapter,
            max_sequence_length=settings.MAX_SEQUENCE_LENGTH,
            pad_token_id=settings.PAD_TOKEN_ID,
            strict_output_length=settings.STRICT_OUTPUT_LENGTH,
            collect_timing=settings.ENABLE_TIMING,
        )

    def prepare_tokens(self, text: str) -> list[int]:
        """Tokenize and normalize text to the model's input length."""
        return normalize_sequence(
            self.tokenizer.tokenize(text),
            self.max_sequence_length,
            pad_id=self.pad_token_id,
        )

    def classify(self, text: str) -> ClassificationResult:
        """
        Classify one text.

        Args:
            text: Raw user input

        Returns:
            ClassificationResult with ranked predictions and, when enabled,
            the per-stage timing

        Raises:
            ClassifierError: Any stage failure (typically InferenceError);
                ``details`` carries ``stage`` and ``text_length``
        """
        stage = "preprocess"
        class_count = self.label_map.class_count

        try:
            started = time.perf_counter()
            token_ids = self.prepare_tokens(text)
            preprocessed = time.perf_counter()

            stage = "inference"
            scores = self.adapter.predict_scores(token_ids, class_count)
            inferred = time.perf_counter()

            stage = "postprocess"
            if len(scores) < class_count:
                self._handle_short_output(len(scores), class_count)
            predictions = decode_scores(scores, self.label_map)
            finished = time.perf_counter()

        except ClassifierError as exc:
            exc.details.setdefault("stage", stage)
            exc.details.setdefault("text_length", len(text))
            classifications_total.labels(status="error").inc()
            classification_errors_total.labels(
                stage=stage, error_type=type(exc).__name__
            ).inc()
            logger.warning(
                "Classification failed",
                stage=stage,
                error_type=type(exc).__name__,
                error=exc.message,
            )
            raise

        timing = TimingBreakdown.from_stages(
            preprocess_ms=(preprocessed - started) * 1000,
            inference_ms=(inferred - preprocessed) * 1000,
            postprocess_ms=(finished - inferred) * 1000,
        )
        self._observe(timing)

        logger.info(
            "Classification completed",
            text_length=len(text),
            best_label=predictions[0].label if predictions else None,
            prediction_count=len(predictions),
            total_ms=round(timing.total_ms, 3),
        )

        return ClassificationResult(
            text=text,
            predictions=predictions,
            timing=timing if self.collect_timing else None,
        )

    def _handle_short_output(self, score_count: int, class_count: int) -> None:
        short_output_buffers_total.inc()
        if self.strict_output_length:
            raise InferenceError(
                f"Model returned {score_count} scores for {class_count} labels",
                details={"score_count": score_count, "class_count": class_count},
            )
        logger.warning(
            "Model returned fewer scores than labels; decoding what is available",
            score_count=score_count,
            class_count=class_count,
        )

    def _observe(self, timing: TimingBreakdown) -> None:
        classifications_total.labels(status="success").inc()
        classification_stage_seconds.labels(stage="preprocess").observe(timing.preprocess_ms / 1000)
        classification_stage_seconds.labels(stage="inference").observe(timing.inference_ms / 1000)
        classification_stage_seconds.labels(stage="postprocess").observe(timing.postprocess_ms / 1000)
        classification_stage_seconds.labels(stage="total").observe(timing.total_ms / 1000)

    def close(self) -> None:
        self.adapter.close()

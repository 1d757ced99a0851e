"""
Vocabulary and label-map loading.

Reads the two JSON resources shipped with a model:
- label map: {"0": "negative", "1": "positive", ...}
- vocabulary: {"<OOV>": 1, "good": 3, ...}

Shape is checked against JSON Schemas before the tables are built. Files
that cannot be read raise ResourceError; bad JSON or a wrong shape raises
ParseError.
"""

import json
import re
from pathlib import Path
from typing import Any, Union

import structlog
from jsonschema import Draft7Validator

from text_classifier.config import INT32_MAX
from text_classifier.exceptions import ParseError, ResourceError
from text_classifier.vocab.tables import LabelMap, Vocabulary

logger = structlog.get_logger(__name__)

# A source is either a filesystem path or the raw bytes of a JSON document
ResourceSource = Union[str, Path, bytes]

LABEL_MAP_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": {"type": "string"},
}

VOCAB_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": {"type": "integer", "minimum": 0, "maximum": INT32_MAX},
}

_CLASS_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_class_index(key: str) -> int | None:
    """
    Parse a label-map key into a class index.
    
    Returns None for keys that are not plain integers (surrounding
    whitespace, decimals, words) and for negative indices.
    
    Examples:
        >>> parse_class_index("3")
        3
        >>> parse_class_index("three") is None
        True
    """
    if not _CLASS_INDEX_PATTERN.fullmatch(key):
        return None
    index = int(key)
    return index if index >= 0 else None


class VocabLoader:
    """
    Load a LabelMap and a Vocabulary from JSON resources.
    
    Usage:
        loader = VocabLoader(oov_token="<OOV>")
        label_map, vocabulary = loader.load("label_map.json", "vocab.json")
    """
    
    def __init__(self, oov_token: str = "<OOV>", oov_fallback_id: int = 1):
        self.oov_token = oov_token
        self.oov_fallback_id = oov_fallback_id
        self._label_map_validator = Draft7Validator(LABEL_MAP_SCHEMA)
        self._vocab_validator = Draft7Validator(VOCAB_SCHEMA)
    
    def load(
        self, label_map_source: ResourceSource, vocab_source: ResourceSource
    ) -> tuple[LabelMap, Vocabulary]:
        """
        Load both resources.
        
        Args:
            label_map_source: Path to (or bytes of) the label-map JSON
            vocab_source: Path to (or bytes of) the vocabulary JSON
        
        Returns:
            Tuple of (LabelMap, Vocabulary)
        
        Raises:
            ResourceError: A file is missing or unreadable
            ParseError: A document is not valid JSON of the expected shape
        """
        label_map = self.load_label_map(label_map_source)
        vocabulary = self.load_vocabulary(vocab_source)
        return label_map, vocabulary
    
    def load_label_map(self, source: ResourceSource) -> LabelMap:
        document = self._read_json(source, kind="label_map")
        self._check_shape(self._label_map_validator, document, source, kind="label_map")
        
        labels: dict[int, str] = {}
        skipped: list[str] = []
        for key, label in document.items():
            index = parse_class_index(key)
            if index is None:
                skipped.append(key)
                continue
            labels[index] = label
        
        label_map = LabelMap(labels)
        
        if skipped:
            logger.debug("Skipped non-integer label-map keys", keys=skipped[:10])
        if not label_map.is_contiguous:
            logger.warning(
                "Label map indices are not contiguous; gaps decode as 'Unknown'",
                indices=sorted(labels)[:20],
                class_count=label_map.class_count,
            )
        logger.info(
            "Label map loaded",
            source=_describe(source),
            class_count=label_map.class_count,
        )
        return label_map
    
    def load_vocabulary(self, source: ResourceSource) -> Vocabulary:
        document = self._read_json(source, kind="vocabulary")
        self._check_shape(self._vocab_validator, document, source, kind="vocabulary")
        
        vocabulary = Vocabulary(
            {word: int(token_id) for word, token_id in document.items()},
            oov_token=self.oov_token,
            fallback_id=self.oov_fallback_id,
        )
        
        # Tokens are lowercased before lookup, so these keys can never match
        unreachable = [
            word for word in document if word != self.oov_token and word != word.lower()
        ]
        if unreachable:
            logger.warning(
                "Vocabulary has keys that are not lowercase and will never match",
                count=len(unreachable),
                keys=unreachable[:10],
            )
        if not vocabulary.has_oov_entry:
            logger.warning(
                "Vocabulary has no OOV entry; unknown words map to fallback id",
                oov_token=self.oov_token,
                fallback_id=self.oov_fallback_id,
            )
        logger.info(
            "Vocabulary loaded",
            source=_describe(source),
            size=len(vocabulary),
            oov_id=vocabulary.oov_id,
        )
        return vocabulary
    
    def _read_json(self, source: ResourceSource, kind: str) -> Any:
        if isinstance(source, bytes):
            raw = source
        else:
            path = Path(source)
            if not path.is_file():
                raise ResourceError(
                    f"{kind} resource not found: {path}",
                    path=str(path),
                    reason="missing",
                )
            try:
                raw = path.read_bytes()
            except OSError as e:
                raise ResourceError(
                    f"Failed to read {kind} resource: {path}",
                    path=str(path),
                    reason=str(e),
                ) from e
        
        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise ParseError(
                f"{kind} resource is not UTF-8 text",
                source=_describe(source),
                parse_errors=[str(e)],
            ) from e
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Failed to parse {kind} resource as JSON: {e.msg}",
                source=_describe(source),
                parse_errors=[f"{e.msg} at line {e.lineno} col {e.colno}"],
            ) from e
    
    def _check_shape(
        self,
        validator: Draft7Validator,
        document: Any,
        source: ResourceSource,
        kind: str,
    ) -> None:
        errors = list(validator.iter_errors(document))
        if not errors:
            return
        
        messages = []
        for error in errors[:10]:
            path = ".".join(str(p) for p in error.path) if error.path else "root"
            messages.append(f"{path}: {error.message}")
        
        raise ParseError(
            f"{kind} resource has the wrong shape: {len(errors)} error(s)",
            source=_describe(source),
            parse_errors=messages,
        )


def _describe(source: ResourceSource) -> str:
    if isinstance(source, bytes):
        return f"<{len(source)} bytes>"
    return str(source)

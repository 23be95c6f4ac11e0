"""Flatten remote results and classify embedded errors."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping

from mutalyzer_ld.errors import DomainError, MalformedResultError
from mutalyzer_ld.results.models import NORMALIZED_RESULT, ErrorMessage, SingletonWrapper

logger = logging.getLogger(__name__)


@dataclass
class ResultNormalizer:
    """
    Turns a raw remote result into a :data:`NORMALIZED_RESULT`.

    Example:

        >>> normalizer = ResultNormalizer()
        >>> raw = {"infoResult": {"version": "2.0.35", "versionParts": {"string": ["2", "0", "35"]}}}
        >>> normalizer.normalize(raw)
        {'version': '2.0.35', 'versionParts': ['2', '0', '35']}
    """

    errors_field: str = "errors"
    messages_field: str = "messages"

    def normalize(self, raw_result: Mapping[str, Any]) -> NORMALIZED_RESULT:
        """
        Unwrap, flatten and check a raw remote result.

        :param raw_result: the result of a remote call, wrapped in a single-entry record
        :return: flat mapping
        :raises MalformedResultError: if a wrapper does not hold exactly one entry
        :raises DomainError: on the first message with a fatal code
        """
        wrapper = SingletonWrapper.from_mapping(raw_result)
        logger.debug(f"Unwrapping {wrapper.key}")
        record = wrapper.unwrap()
        if record is None:
            # operations without output fields come back as an empty element
            record = {}
        if not isinstance(record, Mapping):
            raise MalformedResultError(f"{wrapper.key} is not a record: {type(record).__name__}")
        result: Dict[str, Any] = {}
        for key, value in record.items():
            if isinstance(value, Mapping):
                value = SingletonWrapper.from_mapping(value).unwrap()
            result[key] = value
        self._check_messages(result)
        return result

    def _check_messages(self, result: NORMALIZED_RESULT) -> None:
        if self._error_count(result) <= 0:
            return
        for msg in self._messages(result):
            if msg.is_fatal:
                logger.info(f"Remote service reported {msg.code}: {msg.text}")
                raise DomainError(msg.code, msg.text)

    def _error_count(self, result: NORMALIZED_RESULT) -> int:
        count = result.get(self.errors_field)
        if count in (None, ""):
            return 0
        try:
            return int(count)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric error count: {count!r}")
            return 0

    def _messages(self, result: NORMALIZED_RESULT) -> Iterable[ErrorMessage]:
        messages = result.get(self.messages_field) or []
        if isinstance(messages, Mapping):
            messages = [messages]
        for msg in messages:
            yield ErrorMessage.model_validate(msg)


def normalize(raw_result: Mapping[str, Any]) -> NORMALIZED_RESULT:
    """Normalize with the default settings."""
    return ResultNormalizer().normalize(raw_result)

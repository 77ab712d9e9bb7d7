"""Parser module for FAA NOTAM API (geoJson) responses."""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from routebrief.models.notice import NoticeRecord

logger = logging.getLogger(__name__)

# Field names in coreNOTAMData.notam, extracted as text
NOTAM_TEXT_FIELDS = (
    'id',
    'number',
    'type',
    'issued',
    'effectiveStart',
    'effectiveEnd',
    'text',
    'location',
    'classification',
    'icaoLocation',
    'coordinates',
    'radius',
    'series',
    'affectedFIR',
    'minimumFL',
    'maximumFL',
    'accountId',
    'lastUpdated',
)

# API field name -> NoticeRecord attribute
RECORD_FIELD_NAMES = {
    'id': 'id',
    'number': 'number',
    'type': 'type',
    'issued': 'issued',
    'effectiveStart': 'effective_start',
    'effectiveEnd': 'effective_end',
    'text': 'text',
    'location': 'location',
    'classification': 'classification',
    'icaoLocation': 'icao_location',
    'coordinates': 'coordinates',
    'radius': 'radius',
    'series': 'series',
    'affectedFIR': 'affected_fir',
    'minimumFL': 'minimum_fl',
    'maximumFL': 'maximum_fl',
    'accountId': 'account_id',
    'lastUpdated': 'last_updated',
    'formattedText': 'formatted_text',
    'selectionCode': 'selection_code',
    'traffic': 'traffic',
    'purpose': 'purpose',
    'scope': 'scope',
}

TIMESTAMP_FIELDS = ('issued', 'effectiveStart', 'effectiveEnd', 'lastUpdated')


@dataclass(frozen=True)
class QLineFields:
    """Classification tokens from the Q) line, e.g. Q) KZFW/QPIXX/I/NBO/A/000/999/..."""
    selection_code: str
    traffic: str
    purpose: str
    scope: str


def decode_q_line(formatted_text: Optional[str]) -> Optional[QLineFields]:
    """
    Decode the Q-line of an ICAO formatted NOTAM.

    The Q-line is expected on the second line of the text. The first token
    (FIR prefix, "Q) KZFW") is dropped; tokens 1-4 are the selection code,
    traffic, purpose and scope.

    Returns:
        QLineFields, or None if the text has no usable Q-line
    """
    if not formatted_text:
        return None

    lines = formatted_text.split('\n')
    if len(lines) < 2:
        return None

    q_parts = lines[1].split('/')
    if len(q_parts) < 5:
        return None

    return QLineFields(
        selection_code=q_parts[1],
        traffic=q_parts[2],
        purpose=q_parts[3],
        scope=q_parts[4],
    )


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an API timestamp such as "2026-02-02T15:22:00.000Z".

    Blank values and "PERM" give None.

    Raises:
        ValueError: if the value is not ISO-8601
    """
    if value is None:
        return None
    value = value.strip()
    if not value or value.upper() == 'PERM':
        return None

    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _as_text(value: Any) -> str:
    """Render a JSON leaf as text; missing or container values become ''."""
    if value is None or isinstance(value, (dict, list)):
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _child(node: Any, key: str) -> Any:
    """Step into a JSON object, tolerating missing keys and non-objects."""
    if isinstance(node, dict):
        return node.get(key)
    return None


@dataclass
class ItemFailure:
    """A NOTAM item (or the whole document, when index is None) that could not be parsed."""
    index: Optional[int]
    notice_id: Optional[str]
    reason: str


@dataclass
class ParseResult:
    """Records built from a response, plus the items that failed."""
    records: List[NoticeRecord] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class NoticeRecordParser:
    """Turns raw NOTAM API JSON into field maps or NoticeRecord values."""

    def parse_fields(self, raw_json: str) -> List[Dict[str, str]]:
        """
        Extract one field map per NOTAM item.

        Every primary field is present as text ('' when missing). When an
        ICAO translation exists, formattedText and the decoded Q-line fields
        are added. Items that cannot be read are skipped and logged.

        Args:
            raw_json: Response body from the NOTAM API

        Returns:
            List of field dictionaries keyed by API field name
        """
        items = self._load_items(raw_json, ParseResult())
        notam_list = []

        for index, item in enumerate(items or []):
            try:
                notam_list.append(self._extract_fields(item))
            except Exception as e:
                logger.warning(f"Skipping NOTAM item {index}: {e}")

        return notam_list

    def parse(self, raw_json: str) -> ParseResult:
        """
        Build NoticeRecord values for every NOTAM item.

        Items are processed independently: an item that fails to parse or
        validate is reported in ParseResult.failures and the rest continue.

        Args:
            raw_json: Response body from the NOTAM API

        Returns:
            ParseResult with records in document order and any failures
        """
        result = ParseResult()
        items = self._load_items(raw_json, result)
        if items is None:
            return result

        for index, item in enumerate(items):
            notice_id = None
            try:
                data = self._extract_fields(item)
                notice_id = data['id'] or None
                build = NoticeRecord.create(**self._to_record_values(data))
            except Exception as e:
                self._record_failure(result, index, notice_id, f"{type(e).__name__}: {e}")
                continue

            if build.ok:
                result.records.append(build.record)
            else:
                self._record_failure(result, index, notice_id, str(build.error))

        logger.info(
            f"Parsed {len(result.records)} NOTAM(s), "
            f"{len(result.failures)} failure(s)"
        )
        return result

    def _load_items(self, raw_json: str, result: ParseResult) -> Optional[List[Any]]:
        """Decode the document and return its items list, or None on failure."""
        try:
            root = json.loads(raw_json)
        except (TypeError, ValueError) as e:
            logger.error(f"NOTAM response is not valid JSON: {e}")
            result.failures.append(ItemFailure(None, None, f"Invalid JSON: {e}"))
            return None

        items = _child(root, 'items')
        if items is None:
            logger.warning("NOTAM response has no 'items' array")
            return []
        if not isinstance(items, list):
            logger.error(f"NOTAM response 'items' is {type(items).__name__}, expected list")
            result.failures.append(
                ItemFailure(None, None, f"'items' is {type(items).__name__}, expected list")
            )
            return None

        return items

    def _extract_fields(self, item: Any) -> Dict[str, str]:
        """Pull text fields and the ICAO translation out of one item."""
        if not isinstance(item, dict):
            raise ValueError(f"item is {type(item).__name__}, expected object")

        core_data = _child(_child(item, 'properties'), 'coreNOTAMData')
        notam_node = _child(core_data, 'notam')

        data = {name: _as_text(_child(notam_node, name)) for name in NOTAM_TEXT_FIELDS}

        translations = _child(core_data, 'notamTranslation')
        for translation in translations if isinstance(translations, list) else []:
            if _as_text(_child(translation, 'type')) != 'ICAO':
                continue

            full_text = _as_text(_child(translation, 'formattedText'))
            data['formattedText'] = full_text

            q_line = decode_q_line(full_text)
            if q_line:
                data['selectionCode'] = q_line.selection_code
                data['traffic'] = q_line.traffic
                data['purpose'] = q_line.purpose
                data['scope'] = q_line.scope

        return data

    def _to_record_values(self, data: Dict[str, str]) -> Dict[str, Any]:
        """Map API field names to record attributes and parse timestamps."""
        values = {}
        for api_name, value in data.items():
            if api_name in TIMESTAMP_FIELDS:
                try:
                    value = parse_timestamp(value)
                except ValueError:
                    raise ValueError(f"{api_name} is not a valid timestamp: {value!r}") from None
            values[RECORD_FIELD_NAMES[api_name]] = value
        return values

    @staticmethod
    def _record_failure(result: ParseResult, index: int, notice_id: Optional[str], reason: str):
        logger.warning(f"NOTAM item {index} ({notice_id or 'no id'}) failed: {reason}")
        result.failures.append(ItemFailure(index, notice_id, reason))

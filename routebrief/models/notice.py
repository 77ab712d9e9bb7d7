"""NOTAM domain model."""
from dataclasses import dataclass, field, fields, asdict
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, Iterable, Union

from routebrief.exceptions import NoticeValidationError


# Checked in this order; the first one missing is reported.
REQUIRED_FIELDS = (
    'id',
    'number',
    'type',
    'issued',
    'effective_start',
    'effective_end',
    'text',
)

REQUIRED_TIMESTAMP_FIELDS = ('issued', 'effective_start', 'effective_end')

OPTIONAL_TEXT_FIELDS = (
    'series',
    'affected_fir',
    'selection_code',
    'traffic',
    'purpose',
    'scope',
    'minimum_fl',
    'maximum_fl',
    'location',
    'classification',
    'account_id',
    'icao_location',
    'coordinates',
    'radius',
    'formatted_text',
)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    """Strip a string; whitespace-only becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """NOTAM times are UTC; naive datetimes are assumed to be UTC already."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        raise TypeError(f"Expected datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class NoticeRecord:
    """
    A single NOTAM as published by the FAA NOTAM API.

    Instances are immutable. Equality and hashing use ``id`` only (every other
    field is declared with ``compare=False``), so sets of records de-duplicate
    by source identity. Importance scores live outside the record in
    :class:`ImportanceScores`.

    Field origins mirror the ``coreNOTAMData.notam`` object of the API
    response; ``formatted_text`` comes from the ICAO entry of
    ``notamTranslation`` and the Q-line fields are decoded from it.
    """

    # Stable internal id from the source (e.g. "NOTAM_1_79817842")
    id: str

    # Required
    number: str = field(compare=False)
    type: str = field(compare=False)
    issued: datetime = field(compare=False)
    effective_start: datetime = field(compare=False)
    effective_end: datetime = field(compare=False)
    text: str = field(compare=False)

    # Optional
    series: Optional[str] = field(default=None, compare=False)
    affected_fir: Optional[str] = field(default=None, compare=False)
    selection_code: Optional[str] = field(default=None, compare=False)
    traffic: Optional[str] = field(default=None, compare=False)
    purpose: Optional[str] = field(default=None, compare=False)
    scope: Optional[str] = field(default=None, compare=False)
    minimum_fl: Optional[str] = field(default=None, compare=False)
    maximum_fl: Optional[str] = field(default=None, compare=False)
    location: Optional[str] = field(default=None, compare=False)
    classification: Optional[str] = field(default=None, compare=False)
    account_id: Optional[str] = field(default=None, compare=False)
    last_updated: Optional[datetime] = field(default=None, compare=False)
    icao_location: Optional[str] = field(default=None, compare=False)
    coordinates: Optional[str] = field(default=None, compare=False)
    radius: Optional[str] = field(default=None, compare=False)
    formatted_text: Optional[str] = field(default=None, compare=False)

    @classmethod
    def create(cls, **values: Any) -> 'NoticeBuildResult':
        """
        Validate field values and construct a record.

        Never raises for bad input; the outcome is reported in the returned
        :class:`NoticeBuildResult`. Unknown field names are reported as errors.

        Args:
            **values: Field values keyed by attribute name

        Returns:
            NoticeBuildResult holding either the record or the error
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            return NoticeBuildResult(
                error=NoticeValidationError(unknown[0], f"Unknown NOTAM field: {unknown[0]}")
            )

        normalized: Dict[str, Any] = {}

        for name in REQUIRED_FIELDS:
            value = values.get(name)
            if name in REQUIRED_TIMESTAMP_FIELDS:
                try:
                    value = _as_utc(value)
                except TypeError as e:
                    return NoticeBuildResult(error=NoticeValidationError(name, f"{name}: {e}"))
                if value is None:
                    return NoticeBuildResult(error=NoticeValidationError(name, f"{name} is required"))
            else:
                value = _blank_to_none(value)
                if value is None:
                    return NoticeBuildResult(error=NoticeValidationError(name))
            normalized[name] = value

        for name in OPTIONAL_TEXT_FIELDS:
            normalized[name] = _blank_to_none(values.get(name))

        try:
            normalized['last_updated'] = _as_utc(values.get('last_updated'))
        except TypeError as e:
            return NoticeBuildResult(error=NoticeValidationError('last_updated', f"last_updated: {e}"))

        return NoticeBuildResult(record=cls(**normalized))

    @staticmethod
    def builder() -> 'NoticeRecordBuilder':
        """Start a staged construction."""
        return NoticeRecordBuilder()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for JSON export."""
        result = {}
        for key, value in asdict(self).items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            else:
                result[key] = value
        return result

    def summary(self) -> str:
        """Generate a short human-readable block."""
        lines = []

        header = f"{self.number} | {self.icao_location or self.location or 'Unknown'}"
        lines.append(header)
        lines.append("=" * len(header))
        lines.append(f"Type: {self.type}")
        lines.append(
            f"Valid: {self.effective_start.strftime('%Y-%m-%d %H:%M UTC')}"
            f" → {self.effective_end.strftime('%Y-%m-%d %H:%M UTC')}"
        )

        if self.selection_code:
            q_str = f"Q-Code: {self.selection_code}"
            if self.traffic:
                q_str += f" traffic={self.traffic}"
            if self.purpose:
                q_str += f" purpose={self.purpose}"
            if self.scope:
                q_str += f" scope={self.scope}"
            lines.append(q_str)

        body_preview = self.text.replace('\n', ' ').strip()
        if len(body_preview) > 200:
            body_preview = body_preview[:200] + "..."
        lines.append(f"\n{body_preview}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        """Compact single-line representation."""
        return (
            f"<NoticeRecord {self.id} {self.number} "
            f"{self.icao_location or self.location or 'N/A'} "
            f"q={self.selection_code or '-'}>"
        )


@dataclass
class NoticeBuildResult:
    """Outcome of :meth:`NoticeRecord.create`: exactly one of record / error is set."""
    record: Optional[NoticeRecord] = None
    error: Optional[NoticeValidationError] = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    def unwrap(self) -> NoticeRecord:
        """Return the record or raise the validation error."""
        if self.error is not None:
            raise self.error
        return self.record


class NoticeRecordBuilder:
    """
    Staged constructor for :class:`NoticeRecord`.

    Each setter returns the builder so calls can be chained::

        record = (NoticeRecord.builder()
                  .id("NOTAM_1_79817842")
                  .number("A0228/26")
                  ...
                  .build())
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._importance_score = 0

    def _set(self, name: str, value: Any) -> 'NoticeRecordBuilder':
        self._values[name] = value
        return self

    # Required
    def id(self, value: str) -> 'NoticeRecordBuilder':
        return self._set('id', value)

    def number(self, value: str) -> 'NoticeRecordBuilder':
        return self._set('number', value)

    def type(self, value: str) -> 'NoticeRecordBuilder':
        return self._set('type', value)

    def issued(self, value: datetime) -> 'NoticeRecordBuilder':
        return self._set('issued', value)

    def effective_start(self, value: datetime) -> 'NoticeRecordBuilder':
        return self._set('effective_start', value)

    def effective_end(self, value: datetime) -> 'NoticeRecordBuilder':
        return self._set('effective_end', value)

    def text(self, value: str) -> 'NoticeRecordBuilder':
        return self._set('text', value)

    # Optional
    def series(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('series', value)

    def affected_fir(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('affected_fir', value)

    def selection_code(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('selection_code', value)

    def traffic(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('traffic', value)

    def purpose(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('purpose', value)

    def scope(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('scope', value)

    def minimum_fl(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('minimum_fl', value)

    def maximum_fl(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('maximum_fl', value)

    def location(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('location', value)

    def classification(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('classification', value)

    def account_id(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('account_id', value)

    def last_updated(self, value: Optional[datetime]) -> 'NoticeRecordBuilder':
        return self._set('last_updated', value)

    def icao_location(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('icao_location', value)

    def coordinates(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('coordinates', value)

    def radius(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('radius', value)

    def formatted_text(self, value: Optional[str]) -> 'NoticeRecordBuilder':
        return self._set('formatted_text', value)

    def importance_score(self, value: int) -> 'NoticeRecordBuilder':
        """Initial importance score, written to the scores passed to build()."""
        self._importance_score = int(value)
        return self

    def build(self, scores: Optional['ImportanceScores'] = None) -> NoticeRecord:
        """
        Validate and construct the record.

        Args:
            scores: Optional score table that receives the initial importance score

        Raises:
            NoticeValidationError: naming the first missing required field
        """
        record = NoticeRecord.create(**self._values).unwrap()
        if scores is not None:
            scores.set(record, self._importance_score)
        return record


NoticeRef = Union[NoticeRecord, str]


class ImportanceScores:
    """
    Importance score per NOTAM id, owned by the prioritization stage.

    Unscored records read as 0. Not thread-safe; share between workers only
    with external locking.
    """

    def __init__(self):
        self._scores: Dict[str, int] = {}

    @staticmethod
    def _key(ref: NoticeRef) -> str:
        return ref if isinstance(ref, str) else notice_key(ref)

    def get(self, ref: NoticeRef) -> int:
        return self._scores.get(self._key(ref), 0)

    def set(self, ref: NoticeRef, score: int):
        self._scores[self._key(ref)] = int(score)

    def __contains__(self, ref: NoticeRef) -> bool:
        return self._key(ref) in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def items(self):
        return self._scores.items()


def notice_key(record: NoticeRecord) -> str:
    """Identity key of a record: its stable source id."""
    return record.id


def dedupe_notices(records: Iterable[NoticeRecord]) -> List[NoticeRecord]:
    """Drop records whose id was already seen, keeping the first and the order."""
    seen = set()
    unique = []
    for record in records:
        key = notice_key(record)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique

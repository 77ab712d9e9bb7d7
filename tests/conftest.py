"""Shared fixtures: FAA NOTAM API geoJson payloads."""
import json

import pytest

ICAO_TEXT = (
    "A0228/26 NOTAMN\n"
    "Q) KZFW/QPIXX/I/NBO/A/000/999/3524N09736W005\n"
    "A) KOKC B) 2602021522 C) 2602282359\n"
    "E) INSTRUMENT APPROACH PROCEDURE CHANGED"
)


def make_item(notam_id="NOTAM_1_79817842", number="A0228/26", formatted_text=ICAO_TEXT, **overrides):
    """One entry of the response 'items' array."""
    notam = {
        "id": notam_id,
        "series": "A",
        "number": number,
        "type": "N",
        "issued": "2026-02-02T15:22:00.000Z",
        "affectedFIR": "KZFW",
        "minimumFL": "000",
        "maximumFL": "999",
        "location": "OKC",
        "effectiveStart": "2026-02-02T15:22:00.000Z",
        "effectiveEnd": "2026-02-28T23:59:00.000Z",
        "text": "INSTRUMENT APPROACH PROCEDURE CHANGED",
        "classification": "INTL",
        "accountId": "KOKC",
        "lastUpdated": "2026-02-02T15:22:00.000Z",
        "icaoLocation": "KOKC",
        "coordinates": "3524N09736W",
        "radius": "005",
    }
    notam.update(overrides)
    translations = [
        {"type": "LOCAL_FORMAT", "simpleText": "!OKC 02/047 OKC IAP CHANGED"},
    ]
    if formatted_text is not None:
        translations.append({"type": "ICAO", "formattedText": formatted_text})
    return {
        "type": "Feature",
        "properties": {
            "coreNOTAMData": {
                "notam": notam,
                "notamTranslation": translations,
            }
        },
        "geometry": {"type": "Point", "coordinates": [-97.6, 35.4]},
    }


def make_response(*items):
    return json.dumps({
        "pageSize": 1000,
        "pageNum": 1,
        "totalCount": len(items),
        "totalPages": 1,
        "items": list(items),
    })


@pytest.fixture
def sample_item():
    return make_item()


@pytest.fixture
def sample_response():
    """Three NOTAMs for KOKC."""
    return make_response(
        make_item(),
        make_item(
            notam_id="NOTAM_1_79817843",
            number="A0229/26",
            formatted_text=(
                "A0229/26 NOTAMN\n"
                "Q) KZFW/QMRLC/IV/NBO/A/000/999/3524N09736W005\n"
                "A) KOKC B) 2602031200 C) 2602041200\n"
                "E) RWY 17L/35R CLSD"
            ),
            text="RWY 17L/35R CLSD",
        ),
        make_item(
            notam_id="NOTAM_1_79817844",
            number="02/047",
            formatted_text=None,
            series="",
            classification="DOM",
        ),
    )

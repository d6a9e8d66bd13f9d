"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from pqa.store.attribute_store import AttributeStore


SAMPLE_DATA_DIR = Path(__file__).parent.parent / "data"


class InMemorySource:
    """DatasheetSource over a fixed list of documents; counts loads."""

    def __init__(self, documents):
        self.documents = documents
        self.load_count = 0

    def load_documents(self):
        self.load_count += 1
        return list(self.documents)


def _sample_documents():
    return [
        {
            "product": "6205",
            "dimensions": [
                {"name": "Bore diameter", "symbol": "d", "unit": "mm", "value": 25},
                {"name": "Outside diameter", "symbol": "D", "unit": "mm", "value": 52},
                {"name": "Width", "symbol": "B", "unit": "mm", "value": 15},
            ],
            "performance": [
                {"name": "Basic dynamic load rating", "unit": "kN", "value": 14.8},
                {"name": "Limiting speed", "unit": "r/min", "value": 18000},
            ],
            "logistics": [
                {"name": "EAN code", "value": "7316577208349"},
            ],
        },
        [
            {
                "designation": "6205 N",
                "dimensions": [
                    {"symbol": "B", "unit": "mm", "value": 15},
                ],
            },
            {
                "sku": "6306",
                "Height": "19mm",
                "dimensions": [
                    {"name": "Width", "unit": "mm", "value": 19},
                ],
            },
        ],
    ]


@pytest.fixture
def sample_documents():
    return _sample_documents()


@pytest.fixture
def source(sample_documents):
    return InMemorySource(sample_documents)


@pytest.fixture
def store(source):
    return AttributeStore(source)


@pytest.fixture
def datasheet_dir(tmp_path, sample_documents):
    """Write the sample documents as one JSON file each."""
    for i, doc in enumerate(sample_documents):
        (tmp_path / f"sheet_{i}.json").write_text(json.dumps(doc), encoding="utf-8")
    return tmp_path

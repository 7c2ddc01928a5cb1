from __future__ import annotations

import pytest

from src.halaqah_tracker.halaqah_tracker.store.memory import InMemoryRecordStore


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore(
        {
            "students": [
                {"id": 1, "code": "S001", "name": "Ahmad", "cohort": "Aliyah", "class_label": "1A"},
                {"id": 2, "code": "S002", "name": "Budi", "cohort": "Aliyah", "class_label": "1A"},
                {"id": 3, "code": "S003", "name": "Chandra", "cohort": "Aliyah", "class_label": "2B"},
                {"id": 4, "code": "S004", "name": "Dani", "cohort": "Mutawassithah", "class_label": "1A"},
            ],
            "teachers": [
                {"id": 1, "code": "M001", "name": "Ust. Fulan", "cohort": "Aliyah", "class_label": "1A"},
                {"id": 2, "code": "M002", "name": "Ust. Hamid", "cohort": "Mutawassithah", "class_label": "1A"},
            ],
            "class_supervisors": [
                {"id": 1, "name": "Ust. Hasan", "cohort": "Aliyah", "class_label": "1A", "phone": "0812-3456-789"},
                {"id": 2, "name": "Ust. Umar", "cohort": "Aliyah", "class_label": "2B", "phone": None},
            ],
        }
    )

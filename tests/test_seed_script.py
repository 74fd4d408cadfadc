"""Tests for the seed command-line script."""
import json

import pytest
from pydantic import ValidationError

from seed_transactions import read_seed_file
from sales_api.services.seed_service import SeedFormatError


class TestReadSeedFile:
    """Tests for read_seed_file."""

    def test_reads_array(self, tmp_path, seed_payload):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps(seed_payload), encoding="utf-8")

        records = read_seed_file(path)

        assert [r.price for r in records] == [329.85, 44.6]

    def test_rejects_object(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps({"transactions": []}), encoding="utf-8")

        with pytest.raises(SeedFormatError):
            read_seed_file(path)

    def test_rejects_malformed_record(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([{"title": "no price"}]), encoding="utf-8")

        with pytest.raises(ValidationError):
            read_seed_file(path)

from __future__ import annotations

import json
import os
import stat
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from brand_registry.dataset_io import dumps_dataset, load_dataset, merge_record, write_dataset
from brand_registry.models import BrandRecord
from brand_registry.normalization import collation_key


REPO = Path(__file__).resolve().parents[1]
DATA_PATH = REPO / "data" / "brands.json"


class TestDatasetIO(unittest.TestCase):
    def test_shipped_dataset_is_sorted(self) -> None:
        data = load_dataset(DATA_PATH)
        titles = [e["title"] for e in data["icons"]]
        self.assertEqual(titles, sorted(titles, key=collation_key))

    def test_merge_keeps_sort_order(self) -> None:
        data = load_dataset(DATA_PATH)
        before = [e["title"] for e in data["icons"]]
        record = BrandRecord(title="Zeta", hex="112233", source="https://zeta.example/")

        merged = merge_record(data, record)
        titles = [e["title"] for e in merged["icons"]]

        self.assertEqual(titles, sorted(titles, key=collation_key))
        self.assertEqual(len(titles), len(before) + 1)
        self.assertLess(titles.index("Maserati"), titles.index("Zeta"))
        self.assertLess(titles.index("X"), titles.index("Zeta"))
        # input document untouched
        self.assertEqual([e["title"] for e in data["icons"]], before)

    def test_merge_inserts_in_collated_position(self) -> None:
        data = {"icons": [{"title": "alpha"}, {"title": "Gamma"}]}
        record = BrandRecord(title="Beta", hex="112233", source="https://beta.example/")
        merged = merge_record(data, record)
        self.assertEqual([e["title"] for e in merged["icons"]], ["alpha", "Beta", "Gamma"])
        self.assertEqual(merged["icons"][1], record.to_dict())

    def test_merge_places_stroke_letter_title_among_its_base_letter(self) -> None:
        data = {"icons": [{"title": "Adobe"}, {"title": "Maserati"}, {"title": "Zeta"}]}
        record = BrandRecord(title="Ørsted", hex="112233", source="https://orsted.example/")
        merged = merge_record(data, record)
        self.assertEqual([e["title"] for e in merged["icons"]], ["Adobe", "Maserati", "Ørsted", "Zeta"])

    def test_write_roundtrip_and_format(self) -> None:
        data = {"icons": [{"title": "Citroën", "hex": "6E6E6E", "source": "https://www.citroen.com/"}]}
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "brands.json"
            write_dataset(path, data)
            text = path.read_text(encoding="utf-8")
            self.assertTrue(text.endswith("}\n"))
            self.assertIn("Citroën", text)
            self.assertIn('\n    "icons"', text)
            self.assertEqual(json.loads(text), data)
            self.assertEqual([p.name for p in Path(td).iterdir()], ["brands.json"])

    def test_rewrite_keeps_file_mode(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "brands.json"
            path.write_text(dumps_dataset({"icons": []}), encoding="utf-8")
            for mode in (0o644, 0o664):
                os.chmod(path, mode)
                write_dataset(path, {"icons": [{"title": "New"}]})
                self.assertEqual(stat.S_IMODE(path.stat().st_mode), mode)

    def test_interrupted_write_leaves_old_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "brands.json"
            original = dumps_dataset({"icons": []})
            path.write_text(original, encoding="utf-8")

            with patch("brand_registry.dataset_io.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    write_dataset(path, {"icons": [{"title": "New"}]})

            self.assertEqual(path.read_text(encoding="utf-8"), original)
            self.assertEqual([p.name for p in Path(td).iterdir()], ["brands.json"])

    def test_malformed_dataset_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "brands.json"
            path.write_text(json.dumps({"brands": []}), encoding="utf-8")
            with self.assertRaises(ValueError):
                load_dataset(path)

            path.write_text(json.dumps({"icons": [{"hex": "000000"}]}), encoding="utf-8")
            with self.assertRaises(ValueError):
                load_dataset(path)

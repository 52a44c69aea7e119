from __future__ import annotations

import io
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from rich.console import Console

from brand_registry import cli
from brand_registry.cli import build_parser, run_session
from brand_registry.config import Settings
from brand_registry.dataset_io import load_dataset
from brand_registry.normalization import collation_key
from tests.fakes import ScriptedPromptIO


REPO = Path(__file__).resolve().parents[1]


class TestCliSession(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        tmp = Path(self._td.name)
        shutil.copy(REPO / "data" / "brands.json", tmp / "brands.json")
        shutil.copy(REPO / "data" / "brands.schema.json", tmp / "brands.schema.json")
        self.settings = Settings(data_path=tmp / "brands.json", schema_path=tmp / "brands.schema.json")
        self.out = io.StringIO()
        self.console = Console(file=self.out, no_color=True, width=120)

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_confirmed_session_writes_sorted_dataset(self) -> None:
        prompts = ScriptedPromptIO(["Zeta", "abc", "https://zeta.example/", False, True, "MIT", "", True, True, False, "Zed", True])

        with patch.object(cli, "write_dataset", wraps=cli.write_dataset) as write:
            code = run_session(settings=self.settings, io=prompts, console=self.console)

        self.assertEqual(write.call_count, 1)

        self.assertEqual(code, 0)
        self.assertIn("Data written successfully.", self.out.getvalue())
        entries = load_dataset(self.settings.data_path)["icons"]
        titles = [e["title"] for e in entries]
        self.assertEqual(titles, sorted(titles, key=collation_key))
        self.assertIn(
            {"title": "Zeta", "hex": "AABBCC", "source": "https://zeta.example/", "license": {"type": "MIT"}, "aliases": {"aka": ["Zed"]}},
            entries,
        )

    def test_declined_session_leaves_file_untouched(self) -> None:
        before = self.settings.data_path.read_bytes()
        prompts = ScriptedPromptIO(["Zeta", "abc", "https://zeta.example/", False, False, False, False])

        with patch.object(cli, "write_dataset", wraps=cli.write_dataset) as write:
            code = run_session(settings=self.settings, io=prompts, console=self.console)

        self.assertEqual(write.call_count, 0)

        self.assertEqual(code, 1)
        self.assertIn("Aborted.", self.out.getvalue())
        self.assertEqual(self.settings.data_path.read_bytes(), before)

    def test_existing_title_is_rejected(self) -> None:
        prompts = ScriptedPromptIO(["Citroen", "Zeta", "abc", "https://zeta.example/", False, False, False, False])
        run_session(settings=self.settings, io=prompts, console=self.console)
        self.assertEqual(prompts.errors, ["This brand title or slug already exists"])

    def test_malformed_schema_is_fatal(self) -> None:
        self.settings.schema_path.write_text("{}", encoding="utf-8")
        before = self.settings.data_path.read_bytes()
        with self.assertRaises(ValueError):
            run_session(settings=self.settings, io=ScriptedPromptIO([]), console=self.console)
        self.assertEqual(self.settings.data_path.read_bytes(), before)


class TestCliParser(unittest.TestCase):
    def test_rejects_arguments(self) -> None:
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["--brand", "x"])

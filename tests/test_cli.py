from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from _testutil import ensure_repo_on_path

ENV_KEYS = ("MAINTRACK_RUNTIME_PROFILE", "MAINTRACK_PROFILE_NAME")


def _write_profile(td: Path) -> Path:
    p = td / "profile.yml"
    p.write_text(
        "profile_name: test\n"
        "adapters:\n"
        "  collection_store:\n"
        "    kind: binary_file\n"
        "    settings:\n"
        f"      data_dir: '{td / 'data'}'\n"
        "  log_sink:\n"
        "    kind: text_file\n"
        "    settings:\n"
        f"      path: '{td / 'data' / 'log.txt'}'\n",
        encoding="utf-8",
    )
    return p


class TestSession(unittest.TestCase):
    def test_save_then_load_keeps_counters(self) -> None:
        ensure_repo_on_path()

        from _fakes import sample_registry
        from maintrack.infra.config import parse_runtime_profile
        from maintrack.infra.factory import build_infra
        from maintrack.session import load_registry, save_registry

        with tempfile.TemporaryDirectory() as td:
            prof = parse_runtime_profile({
                "profile_name": "t",
                "adapters": {"collection_store": {"kind": "binary_file"}, "log_sink": {"kind": "null"}},
            })
            bundle = build_infra(profile=prof, base_dir=Path(td))
            reg = sample_registry()
            reg.assets.available = 7

            self.assertEqual(set(save_registry(reg, bundle).values()), {True})
            loaded = load_registry(bundle)

        self.assertEqual(loaded.assets.records(), reg.assets.records())
        self.assertEqual(loaded.assets.available, 7)
        self.assertEqual(loaded.departments.active_count, 2)
        self.assertEqual(len(loaded.orders), 0)
        self.assertEqual(loaded.assets.next_id(), 13)

    def test_empty_store_loads_empty_registry(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.config import parse_runtime_profile
        from maintrack.infra.factory import build_infra
        from maintrack.session import load_registry

        prof = parse_runtime_profile({
            "profile_name": "t",
            "adapters": {"collection_store": {"kind": "memory"}, "log_sink": {"kind": "null"}},
        })
        reg = load_registry(build_infra(profile=prof))
        self.assertEqual(len(reg.assets), 0)
        self.assertEqual(reg.assets.available, 0)
        self.assertEqual(reg.departments.next_id(), 10)


class TestMainMenu(unittest.TestCase):
    def test_create_department_then_view_logs(self) -> None:
        ensure_repo_on_path()

        from _fakes import Echo, MemoryLogSink, ScriptedPrompter
        from maintrack.console.menu import MainMenu
        from maintrack.stores import Registry

        reg = Registry()
        echo = Echo()
        prompter = ScriptedPrompter([2, 1, "Ops", "Ana Silva", 1, "912345678", 5, 1, 6])
        MainMenu(reg, prompter, MemoryLogSink(), echo=echo).run()

        self.assertEqual(reg.departments.find(10).name, "Ops")
        self.assertIn("Info: A new department was created.", echo.lines)
        self.assertEqual(echo.lines[-1], "Goodbye.")

    def test_back_returns_to_main_menu(self) -> None:
        ensure_repo_on_path()

        from _fakes import Echo, MemoryLogSink, ScriptedPrompter
        from maintrack.console.menu import MainMenu
        from maintrack.stores import Registry

        prompter = ScriptedPrompter([3, 4])
        with self.assertRaises(EOFError):
            MainMenu(Registry(), prompter, MemoryLogSink(), echo=Echo()).run()
        self.assertEqual(prompter.prompts[-1], "Choose a menu: ")


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._saved = {k: os.environ.pop(k, None) for k in ENV_KEYS}

    def tearDown(self) -> None:
        for k, v in self._saved.items():
            os.environ.pop(k, None)
            if v is not None:
                os.environ[k] = v

    def _run(self, argv):
        from maintrack.cli import main

        buf = io.StringIO()
        with redirect_stdout(buf):
            rc = main(argv)
        return rc, buf.getvalue()

    def test_report_json_from_saved_collections(self) -> None:
        ensure_repo_on_path()

        from _fakes import sample_registry
        from maintrack.infra.config import load_runtime_profile
        from maintrack.infra.factory import build_infra
        from maintrack.session import save_registry

        with tempfile.TemporaryDirectory() as td:
            profile_path = _write_profile(Path(td))
            bundle = build_infra(profile=load_runtime_profile(Path(td), cli_path=str(profile_path)))
            save_registry(sample_registry(), bundle)

            rc, out = self._run(["--runtime-profile", str(profile_path), "report", "assets", "--json"])
            self.assertEqual(rc, 0)
            doc = json.loads(out)
            self.assertEqual(doc["total"], 3)
            self.assertEqual(doc["by_category"]["vehicle"], 1)

            rc, out = self._run(["--runtime-profile", str(profile_path), "report", "unstable"])
            self.assertEqual(rc, 0)
            self.assertIn("There are no unstable assets", out)

    def test_describe(self) -> None:
        ensure_repo_on_path()

        with tempfile.TemporaryDirectory() as td:
            profile_path = _write_profile(Path(td))
            rc, out = self._run(["--runtime-profile", str(profile_path), "describe"])

        self.assertEqual(rc, 0)
        doc = json.loads(out)
        self.assertEqual(doc["profile_name"], "test")
        self.assertEqual(doc["adapters"]["prompter"], {"class": "NotConfigured"})

    def test_run_without_prompter_fails_cleanly(self) -> None:
        ensure_repo_on_path()

        with tempfile.TemporaryDirectory() as td:
            profile_path = _write_profile(Path(td))
            rc, out = self._run(["--runtime-profile", str(profile_path)])

        self.assertEqual(rc, 1)
        self.assertIn("[maintrack][ERROR]", out)

    def test_missing_profile_is_reported(self) -> None:
        ensure_repo_on_path()

        with tempfile.TemporaryDirectory() as td:
            rc, out = self._run(["--runtime-profile", str(Path(td) / "missing.yml"), "logs"])

        self.assertEqual(rc, 1)
        self.assertIn("runtime profile not found", out)


if __name__ == "__main__":
    unittest.main()

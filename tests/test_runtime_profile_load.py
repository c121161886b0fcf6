from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from _testutil import ensure_repo_on_path

ENV_KEYS = ("MAINTRACK_RUNTIME_PROFILE", "MAINTRACK_PROFILE_NAME")


class TestRuntimeProfileLoad(unittest.TestCase):
    def setUp(self) -> None:
        # Ensure env overrides do not interfere with these tests.
        self._saved = {k: os.environ.pop(k, None) for k in ENV_KEYS}

    def tearDown(self) -> None:
        for k, v in self._saved.items():
            os.environ.pop(k, None)
            if v is not None:
                os.environ[k] = v

    def test_repo_profile_defaults_to_local(self) -> None:
        repo_root = ensure_repo_on_path()

        from maintrack.infra.config import load_runtime_profile

        p = repo_root / "config" / "runtime_profile.yml"
        self.assertTrue(p.exists())

        prof = load_runtime_profile(repo_root, cli_path=str(p))
        self.assertEqual(prof.profile_name, "local")
        self.assertEqual(prof.adapters["collection_store"].kind, "binary_file")
        self.assertEqual(prof.adapters["log_sink"].kind, "text_file")
        self.assertEqual(prof.adapters["prompter"].kind, "console")

    def test_profile_name_env_selects_profile(self) -> None:
        repo_root = ensure_repo_on_path()

        from maintrack.infra.config import load_runtime_profile

        os.environ["MAINTRACK_PROFILE_NAME"] = "scratch"
        prof = load_runtime_profile(repo_root, cli_path=str(repo_root / "config" / "runtime_profile.yml"))
        self.assertEqual(prof.profile_name, "scratch")
        self.assertEqual(prof.adapters["collection_store"].kind, "memory")
        self.assertEqual(prof.adapters["log_sink"].kind, "null")

    def test_env_path_is_used_when_no_flag(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.config import load_runtime_profile

        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "profile.yml"
            p.write_text(
                "profile_name: ci\n"
                "adapters:\n"
                "  collection_store: {kind: memory}\n"
                "  log_sink: {kind: 'null'}\n",
                encoding="utf-8",
            )
            os.environ["MAINTRACK_RUNTIME_PROFILE"] = str(p)
            prof = load_runtime_profile(Path(td))
        self.assertEqual(prof.profile_name, "ci")
        self.assertNotIn("prompter", prof.adapters)

    def test_unknown_kind_is_rejected(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.config import load_runtime_profile
        from maintrack.infra.errors import ValidationError

        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "bad.yml"
            p.write_text(
                "profile_name: bad\n"
                "adapters:\n"
                "  collection_store: {kind: sqlite}\n"
                "  log_sink: {kind: text_file}\n",
                encoding="utf-8",
            )
            with self.assertRaises(ValidationError):
                load_runtime_profile(Path(td), cli_path=str(p))

    def test_missing_explicit_profile_is_an_error(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.config import load_runtime_profile
        from maintrack.infra.errors import ValidationError

        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ValidationError):
                load_runtime_profile(Path(td), cli_path=str(Path(td) / "nope.yml"))

    def test_builtin_profile_when_default_file_absent(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.config import load_runtime_profile

        with tempfile.TemporaryDirectory() as td:
            prof = load_runtime_profile(Path(td))
        self.assertEqual(prof.profile_name, "builtin_default")
        self.assertEqual(prof.source, "builtin")
        self.assertEqual(prof.settings_for("log_sink"), {"path": "data/log.txt"})


if __name__ == "__main__":
    unittest.main()

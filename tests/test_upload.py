"""Tests for batch screenshot upload orchestration."""

from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
from unittest.mock import patch

from pr_screenshots.errors import (
    AllUploadsFailedError,
    NoScreenshotsFoundError,
    ScreenshotDirectoryNotFoundError,
    StorageInitializationError,
    UploadFailedError,
)
from pr_screenshots.models import RunContext, S3Target, UploadedScreenshot
from pr_screenshots.storage.base import BaseStorage
from pr_screenshots.upload import UploadOutcome, collect_successes, upload_screenshots


class _FakeStorage(BaseStorage):
    """In-memory backend that can fail for chosen filenames."""

    def __init__(self, *, fail_on: set[str] | None = None, fail_init: bool = False) -> None:
        super().__init__(bucket="fake")
        self.fail_on = fail_on or set()
        self.fail_init = fail_init
        self.init_calls = 0
        self.uploads: list[str] = []

    @property
    def name(self) -> str:
        return "Fake"

    def _initialize(self) -> None:
        self.init_calls += 1
        if self.fail_init:
            raise RuntimeError("backend unavailable")

    def _upload_bytes(self, *, data: bytes, remote_path: str) -> str:
        if remote_path.rsplit("/", 1)[-1] in self.fail_on:
            raise RuntimeError(f"cannot store {remote_path}")
        self.uploads.append(remote_path)
        return f"https://cdn.example.com/{remote_path}"


class UploadScreenshotsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, *names: str) -> None:
        for name in names:
            path = self.root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"fake png")

    def test_uploads_in_sorted_order_with_resolved_paths(self) -> None:
        self._write("zeta.png", "alpha.png", "nested/mid.png")
        storage = _FakeStorage()

        results = upload_screenshots(self.root, storage, run=RunContext(pr_number=12, run_id=34))

        self.assertEqual([r.name for r in results], ["alpha.png", "mid.png", "zeta.png"])
        self.assertEqual(results[0].path, "pr-12/run-34/alpha.png")
        self.assertEqual(results[0].url, "https://cdn.example.com/pr-12/run-34/alpha.png")
        self.assertEqual(storage.init_calls, 1)

    def test_custom_template(self) -> None:
        self._write("home.png")

        results = upload_screenshots(
            self.root,
            _FakeStorage(),
            path_template="screens/{pr}/{filename}",
            run=RunContext(pr_number="9"),
        )

        self.assertEqual(results, [
            UploadedScreenshot(
                name="home.png",
                url="https://cdn.example.com/screens/9/home.png",
                path="screens/9/home.png",
            )
        ])

    def test_single_failure_is_skipped(self) -> None:
        self._write("a.png", "b.png", "c.png", "d.png")
        storage = _FakeStorage(fail_on={"b.png"})

        with self.assertLogs("pr_screenshots.upload", level="ERROR") as logs:
            results = upload_screenshots(self.root, storage, run=RunContext(1, 2))

        self.assertEqual([r.name for r in results], ["a.png", "c.png", "d.png"])
        self.assertTrue(any("b.png" in line for line in logs.output))

    def test_all_failures_raise(self) -> None:
        self._write("a.png", "b.png")
        storage = _FakeStorage(fail_on={"a.png", "b.png"})

        with self.assertRaises(AllUploadsFailedError) as ctx:
            upload_screenshots(self.root, storage, run=RunContext(1, 2))

        self.assertEqual(ctx.exception.attempted, 2)

    def test_no_screenshots_raises(self) -> None:
        (self.root / "notes.txt").write_text("nothing here", encoding="utf-8")
        storage = _FakeStorage()

        with self.assertRaises(NoScreenshotsFoundError):
            upload_screenshots(self.root, storage)

        self.assertEqual(storage.init_calls, 0)

    def test_missing_directory_raises_before_backend_setup(self) -> None:
        with patch("pr_screenshots.upload.create_storage") as mock_factory:
            with self.assertRaises(ScreenshotDirectoryNotFoundError):
                upload_screenshots(self.root / "missing", S3Target(region="r", bucket="b"))

        mock_factory.assert_not_called()

    def test_initialization_failure_is_fatal(self) -> None:
        self._write("a.png")
        storage = _FakeStorage(fail_init=True)

        with self.assertRaises(StorageInitializationError):
            upload_screenshots(self.root, storage)

        self.assertEqual(storage.uploads, [])

    def test_backend_construction_failure_is_initialization_error(self) -> None:
        self._write("a.png")
        target = S3Target(region="us-east-1", bucket="shots")

        with patch(
            "pr_screenshots.upload.create_storage", side_effect=RuntimeError("Invalid URL")
        ):
            with self.assertRaises(StorageInitializationError) as ctx:
                upload_screenshots(self.root, target)

        self.assertIn("Invalid URL", ctx.exception.message)
        self.assertIsInstance(ctx.exception.cause, RuntimeError)

    def test_storage_target_is_built_through_factory(self) -> None:
        self._write("a.png")
        fake = _FakeStorage()
        target = S3Target(region="us-east-1", bucket="shots")

        with patch("pr_screenshots.upload.create_storage", return_value=fake) as mock_factory:
            results = upload_screenshots(self.root, target, run=RunContext(1, 2))

        mock_factory.assert_called_once_with(target)
        self.assertEqual(len(results), 1)

    def test_missing_run_context_uses_unknown_pr(self) -> None:
        self._write("a.png")

        results = upload_screenshots(self.root, _FakeStorage())

        self.assertTrue(results[0].path.startswith("pr-unknown/run-"))
        self.assertTrue(results[0].path.endswith("/a.png"))


class CollectSuccessesTests(unittest.TestCase):
    def _ok(self, name: str) -> UploadOutcome:
        return UploadOutcome(
            file_path=name,
            remote_path=name,
            result=UploadedScreenshot(name=name, url=f"u/{name}", path=name),
        )

    def _failed(self, name: str) -> UploadOutcome:
        return UploadOutcome(
            file_path=name,
            remote_path=name,
            error=UploadFailedError("nope", remote_path=name),
        )

    def test_keeps_successes_in_order(self) -> None:
        results = collect_successes([self._ok("a"), self._failed("b"), self._ok("c")])

        self.assertEqual([r.name for r in results], ["a", "c"])

    def test_all_failed_raises(self) -> None:
        with self.assertRaises(AllUploadsFailedError):
            collect_successes([self._failed("a"), self._failed("b")])

    def test_no_attempts_is_empty(self) -> None:
        self.assertEqual(collect_successes([]), [])

    def test_outcome_ok_flag(self) -> None:
        self.assertTrue(self._ok("a").ok)
        self.assertFalse(self._failed("a").ok)


if __name__ == "__main__":
    unittest.main()

"""Tests for app.services.uploads.UploadResolver."""

import asyncio
import io
import logging

import pytest
from starlette.datastructures import UploadFile

from app.services.uploads import UploadResolver, is_download_field


def _upload(filename: str, data: bytes = b"data") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename)


@pytest.fixture
def resolver(tmp_path) -> UploadResolver:
    return UploadResolver(tmp_path / "uploads", tmp_path / "downloads")


class TestTargetFor:
    def test_images_are_named_after_their_field(self, resolver, tmp_path):
        path, public = resolver.target_for("new_heroImage", "My Photo.JPG")

        assert path.parent == tmp_path / "uploads"
        assert public.startswith("/uploads/new_heroImage-")
        assert public.endswith(".jpg")

    def test_documents_keep_their_original_name(self, resolver, tmp_path):
        path, public = resolver.target_for("reports_filePath_0", "Annual Report 2024.pdf")

        assert path.parent == tmp_path / "downloads"
        assert public.startswith("/downloads/")
        assert public.endswith("-Annual_Report_2024.pdf")

    def test_client_directories_are_dropped(self, resolver):
        _, public = resolver.target_for("documents_filePath_1", "..\\..\\secret\\minutes.docx")
        assert public.endswith("-minutes.docx")
        assert ".." not in public

    def test_download_marker(self):
        assert is_download_field("tenders_filePath_2")
        assert not is_download_field("initiatives_image_0")


class TestStore:
    def test_store_writes_file_and_returns_public_path(self, resolver, tmp_path):
        public = asyncio.run(resolver.store("cv", _upload("cv.pdf", b"%PDF")))

        stored = tmp_path / "uploads" / public.rsplit("/", 1)[1]
        assert stored.read_bytes() == b"%PDF"

    def test_empty_part_is_skipped(self, resolver):
        assert asyncio.run(resolver.store("new_heroImage", _upload(""))) is None

    def test_store_all_maps_field_names_and_skips_text(self, resolver):
        parts = [
            ("heroImage", "/uploads/old.jpg"),
            ("new_heroImage", _upload("hero.png")),
            ("initiatives_image_0", _upload("")),
            ("reports_filePath_0", _upload("report.pdf")),
        ]
        file_map = asyncio.run(resolver.store_all(parts))

        assert set(file_map) == {"new_heroImage", "reports_filePath_0"}
        assert file_map["new_heroImage"].startswith("/uploads/new_heroImage-")
        assert file_map["reports_filePath_0"].startswith("/downloads/")

    def test_log_orphans(self, caplog):
        with caplog.at_level(logging.WARNING):
            UploadResolver.log_orphans(["/uploads/a.jpg"], "content save failed")
        assert "Orphaned upload /uploads/a.jpg (content save failed)" in caplog.text

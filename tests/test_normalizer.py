"""Tests for app.services.normalizer."""

from app.services.normalizer import safe_extension, safe_filename


class TestSafeFilename:
    def test_whitespace_runs_become_underscores(self):
        assert safe_filename("Annual   Report 2024.pdf") == "Annual_Report_2024.pdf"

    def test_unicode_is_folded_to_ascii(self):
        assert safe_filename("Réserve Naturelle.pdf") == "Reserve_Naturelle.pdf"

    def test_path_components_are_removed(self):
        assert safe_filename("../../etc/passwd") == "passwd"
        assert safe_filename("C:\\Users\\me\\cv.docx") == "cv.docx"

    def test_leading_dots_are_stripped(self):
        assert safe_filename(".htaccess") == "htaccess"

    def test_falls_back_to_default(self):
        assert safe_filename("???") == "file"
        assert safe_filename("", default="upload") == "upload"


class TestSafeExtension:
    def test_lowercases_extension(self):
        assert safe_extension("Photo.JPG") == ".jpg"

    def test_no_extension(self):
        assert safe_extension("README") == ""

    def test_rejects_odd_extensions(self):
        assert safe_extension("archive.this-is-not-an-extension") == ""

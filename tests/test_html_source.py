"""Tests for reading and discovering exported HTML pages."""

import pytest

from fetchers import HtmlSourceReader, SourceReadError


@pytest.fixture
def reader(logger):
    return HtmlSourceReader({}, logger)


class TestRead:
    """Test single file reads."""

    def test_read(self, reader, page):
        """Test UTF-8 text is returned unchanged."""
        path = page('page.html', '<p>Grüße</p>')
        assert reader.read(path) == '<p>Grüße</p>'

    def test_missing_file(self, reader, tmp_path):
        """Test a missing file raises SourceReadError."""
        with pytest.raises(SourceReadError, match='does not exist'):
            reader.read(tmp_path / 'absent.html')

    def test_undecodable_file(self, reader, tmp_path):
        """Test invalid bytes raise SourceReadError."""
        path = tmp_path / 'binary.html'
        path.write_bytes(b'\xff\xfe<p>x</p>')
        with pytest.raises(SourceReadError, match='decode'):
            reader.read(path)

    def test_configured_encoding(self, logger, tmp_path):
        """Test export.encoding is used for reading."""
        path = tmp_path / 'latin.html'
        path.write_bytes('<p>café</p>'.encode('latin-1'))
        reader = HtmlSourceReader({'export': {'encoding': 'latin-1'}}, logger)
        assert reader.read(path) == '<p>café</p>'

    def test_load_job(self, reader, page, tmp_path):
        """Test a job carries the resolved path and the page body."""
        path = page('page.html', '<p>x</p>')
        job = reader.load_job(path, tmp_path / 'page.md')
        assert job.source_path == path.resolve()
        assert job.html_content == '<p>x</p>'


class TestDiscover:
    """Test export directory scanning."""

    def test_finds_html_pages_sorted(self, reader, page, tmp_path):
        """Test only .html and .htm pages are found, in sorted order."""
        page('space/b.html', '')
        page('space/a.HTM', '')
        page('index.html', '')
        page('styles/site.css', '')
        page('attachments/readme.txt', '')

        found = reader.discover(tmp_path)
        assert [p.relative_to(tmp_path).as_posix() for p in found] == [
            'index.html',
            'space/a.HTM',
            'space/b.html',
        ]

    def test_not_a_directory(self, reader, page):
        """Test a file path is rejected."""
        with pytest.raises(SourceReadError):
            reader.discover(page('page.html', ''))

"""Tests for output path resolution and overwrite protection."""

import pytest

from exporters import MarkdownExporter, OutputEncodeError, OutputExistsError
from models import ConversionJob, ConversionStatus


class TestResolveOutputPath:
    """Test where converted pages are written."""

    def test_next_to_input(self, logger, tmp_path):
        """Test the default path swaps the extension."""
        exporter = MarkdownExporter({}, logger)
        source = tmp_path / 'page.html'
        assert exporter.resolve_output_path(source) == (tmp_path / 'page.md').resolve()

    def test_explicit_output(self, logger, tmp_path):
        """Test an explicit path is used as given."""
        exporter = MarkdownExporter({}, logger)
        target = tmp_path / 'docs' / 'readme.markdown'
        assert exporter.resolve_output_path(tmp_path / 'page.html', str(target)) == target.resolve()

    def test_mirrored_into_output_directory(self, logger, tmp_path):
        """Test the relative path below the input root is mirrored."""
        exporter = MarkdownExporter({}, logger, output_dir=str(tmp_path / 'out'))
        source = tmp_path / 'export' / 'space' / 'page.html'
        resolved = exporter.resolve_output_path(source, input_root=tmp_path / 'export')
        assert resolved == (tmp_path / 'out' / 'space' / 'page.md').resolve()

    def test_output_directory_without_root(self, logger, tmp_path):
        """Test only the file name is kept without an input root."""
        exporter = MarkdownExporter({}, logger, output_dir=str(tmp_path / 'out'))
        resolved = exporter.resolve_output_path(tmp_path / 'deep' / 'page.htm')
        assert resolved == (tmp_path / 'out' / 'page.md').resolve()

    def test_configured_extension(self, logger, tmp_path):
        """Test export.output_extension is applied."""
        exporter = MarkdownExporter({'export': {'output_extension': '.markdown'}}, logger)
        assert exporter.resolve_output_path(tmp_path / 'page.html').name == 'page.markdown'


class TestExport:
    """Test writing and overwrite protection."""

    def make_job(self, output_path, markdown='# Title'):
        return ConversionJob(
            source_path=output_path.with_suffix('.html'),
            output_path=output_path,
            markdown_content=markdown,
            status=ConversionStatus.CONVERTED
        )

    def test_writes_file_and_parents(self, logger, tmp_path):
        """Test parents are created and stats updated."""
        exporter = MarkdownExporter({}, logger)
        target = tmp_path / 'a' / 'b' / 'page.md'
        job = self.make_job(target)

        assert exporter.export(job) == target
        assert target.read_text(encoding='utf-8') == '# Title'
        assert job.status is ConversionStatus.WRITTEN
        assert exporter.stats['files_written'] == 1
        assert exporter.stats['bytes_written'] == len('# Title')

    def test_refuses_existing_file(self, logger, tmp_path):
        """Test an existing file is kept and counted as refused."""
        exporter = MarkdownExporter({}, logger)
        target = tmp_path / 'page.md'
        target.write_text('keep me', encoding='utf-8')

        with pytest.raises(OutputExistsError, match='-f'):
            exporter.export(self.make_job(target))

        assert target.read_text(encoding='utf-8') == 'keep me'
        assert exporter.stats['files_refused'] == 1

    def test_overwrite_argument(self, logger, tmp_path):
        """Test the overwrite argument replaces the file."""
        exporter = MarkdownExporter({}, logger, overwrite=True)
        target = tmp_path / 'page.md'
        target.write_text('old', encoding='utf-8')

        exporter.export(self.make_job(target, 'new'))
        assert target.read_text(encoding='utf-8') == 'new'

    def test_overwrite_from_config(self, logger, tmp_path):
        """Test export.overwrite allows an existing file."""
        exporter = MarkdownExporter({'export': {'overwrite': True}}, logger)
        target = tmp_path / 'page.md'
        target.write_text('old', encoding='utf-8')
        exporter.check_writable(target)

    def test_configured_encoding(self, logger, tmp_path):
        """Test export.encoding is used for the bytes written."""
        exporter = MarkdownExporter({'export': {'encoding': 'latin-1'}}, logger)
        target = tmp_path / 'page.md'

        exporter.export(self.make_job(target, 'caf\u00e9'))
        assert target.read_bytes() == b'caf\xe9'

    def test_unencodable_markdown(self, logger, tmp_path):
        """Test text outside export.encoding raises and creates nothing."""
        exporter = MarkdownExporter({'export': {'encoding': 'ascii'}}, logger)
        target = tmp_path / 'out' / 'page.md'
        job = self.make_job(target, 'caf\u00e9')

        with pytest.raises(OutputEncodeError, match='ascii'):
            exporter.export(job)

        assert not target.exists()
        assert not target.parent.exists()
        assert job.status is ConversionStatus.CONVERTED
        assert exporter.stats['files_written'] == 0

    def test_format_bytes(self):
        """Test human-readable sizes."""
        assert MarkdownExporter._format_bytes(0) == '0 B'
        assert MarkdownExporter._format_bytes(512) == '512.0 B'
        assert MarkdownExporter._format_bytes(2048) == '2.0 KB'

"""Tests for the command-line entry point and its exit codes."""

import pytest

from convert import __version__, create_argument_parser, main

PAGE = '<html><head><title>Guide</title></head><body><div class="wiki-content"><p>Step one</p></div></body></html>'


class TestMdCommand:
    """Test single file conversion through main()."""

    def test_converts_next_to_input(self, page, capsys):
        """Test a page converts next to its input with status lines."""
        source = page('guide.html', PAGE)

        assert main(['md', str(source)]) == 0
        assert source.with_suffix('.md').read_text(encoding='utf-8') == '# Guide\n\nStep one'
        out = capsys.readouterr().out
        assert 'Parsing' in out
        assert 'Successfully converted to' in out

    def test_existing_output_needs_force(self, page, capsys):
        """Test an existing output exits 2 until -f is given."""
        source = page('guide.html', PAGE)
        existing = page('guide.md', 'mine')

        assert main(['md', str(source)]) == 2
        assert 'already exists' in capsys.readouterr().err
        assert existing.read_text(encoding='utf-8') == 'mine'

        assert main(['md', str(source), '-f']) == 0
        assert existing.read_text(encoding='utf-8') == '# Guide\n\nStep one'

    def test_output_option(self, page, tmp_path):
        """Test -o writes to the given path."""
        source = page('guide.html', PAGE)
        target = tmp_path / 'site' / 'guide.md'
        assert main(['md', str(source), '-o', str(target)]) == 0
        assert target.exists()

    def test_missing_input(self, tmp_path):
        """Test a missing input is a usage error."""
        assert main(['md', str(tmp_path / 'absent.html')]) == 2

    def test_undecodable_input(self, tmp_path, capsys):
        """Test undecodable bytes exit 1."""
        source = tmp_path / 'binary.html'
        source.write_bytes(b'\xff\xfe\x00')
        assert main(['md', str(source)]) == 1
        assert 'Failed to decode' in capsys.readouterr().err

    def test_unencodable_output(self, page, tmp_path, capsys):
        """Test markdown outside export.encoding exits 1 and writes nothing."""
        source = page('cafe.html', '<p>caf&eacute;</p>')
        config = tmp_path / 'config.yaml'
        config.write_text('export:\n  encoding: ascii\n', encoding='utf-8')

        assert main(['--config', str(config), 'md', str(source)]) == 1
        err = capsys.readouterr().err
        assert 'ascii' in err
        assert 'Configuration error' not in err
        assert not source.with_suffix('.md').exists()


class TestBatchCommand:
    """Test directory conversion through main()."""

    def test_batch(self, page, tmp_path, capsys):
        """Test a mirrored batch with a JSON report."""
        page('export/one.html', PAGE)
        page('export/nested/two.html', '<p>Two</p>')
        report = tmp_path / 'report.json'

        code = main([
            'batch', str(tmp_path / 'export'),
            '-o', str(tmp_path / 'md'),
            '--report', str(report),
            '--no-progress',
        ])

        assert code == 0
        assert (tmp_path / 'md' / 'nested' / 'two.md').read_text(encoding='utf-8') == 'Two'
        assert report.exists()
        assert 'Converted 2 of 2 files' in capsys.readouterr().out

    def test_batch_with_failures(self, page, tmp_path):
        """Test any failed file makes the batch exit 1."""
        page('export/ok.html', '<p>ok</p>')
        (tmp_path / 'export' / 'bad.html').write_bytes(b'\xff\xfe\x00')
        assert main(['batch', str(tmp_path / 'export'), '--no-progress']) == 1

    def test_batch_missing_directory(self, tmp_path):
        """Test a missing directory is a usage error."""
        assert main(['batch', str(tmp_path / 'absent'), '--no-progress']) == 2


class TestConfiguration:
    """Test configuration and argument errors."""

    def test_missing_config_file(self, page, tmp_path, capsys):
        """Test a missing config file exits 2."""
        source = page('guide.html', PAGE)
        assert main(['--config', str(tmp_path / 'absent.yaml'), 'md', str(source)]) == 2
        assert 'not found' in capsys.readouterr().err

    def test_invalid_config(self, page, tmp_path, capsys):
        """Test an invalid value exits 2 with a configuration error."""
        source = page('guide.html', PAGE)
        config = tmp_path / 'config.yaml'
        config.write_text('conversion:\n  max_depth: 0\n', encoding='utf-8')

        assert main(['--config', str(config), 'md', str(source)]) == 2
        assert 'Configuration error' in capsys.readouterr().err

    def test_unset_log_file_variable(self, page, tmp_path, monkeypatch, capsys):
        """Test a log file placeholder without a value exits 2 and creates no file."""
        monkeypatch.delenv('CONVERT_MISSING_LOG', raising=False)
        monkeypatch.chdir(tmp_path)
        source = page('guide.html', PAGE)
        config = tmp_path / 'config.yaml'
        config.write_text('logging:\n  file: ${CONVERT_MISSING_LOG}\n', encoding='utf-8')

        assert main(['--config', str(config), 'md', str(source)]) == 2
        assert 'CONVERT_MISSING_LOG' in capsys.readouterr().err
        assert not (tmp_path / '${CONVERT_MISSING_LOG}').exists()
        assert not source.with_suffix('.md').exists()

    def test_config_extension(self, page, tmp_path):
        """Test export.output_extension from the file is used."""
        source = page('guide.html', PAGE)
        config = tmp_path / 'config.yaml'
        config.write_text('export:\n  output_extension: .markdown\n', encoding='utf-8')

        assert main(['--config', str(config), 'md', str(source)]) == 0
        assert (tmp_path / 'guide.markdown').exists()

    def test_command_is_required(self):
        """Test a missing subcommand is an argparse error."""
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2

    def test_version(self, capsys):
        """Test --version prints the version."""
        with pytest.raises(SystemExit) as excinfo:
            main(['--version'])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_parser_options(self):
        """Test global and subcommand options parse together."""
        args = create_argument_parser().parse_args(['-vv', 'batch', 'export', '--no-progress', '-f'])
        assert args.verbose == 2
        assert args.command == 'batch'
        assert args.force is True
        assert args.no_progress is True
        assert args.output is None

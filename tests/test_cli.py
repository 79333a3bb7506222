"""Tests for the mdvars command line."""

import io
import os
import shutil
import tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

import yaml

from mdvars.cli.main import main
from mdvars.cli.commands.common import parse_assignments


class TestCLI(TestCase):
    """End-to-end runs of the CLI commands."""

    def setUp(self):
        """Set up test environment."""
        self.test_dir = Path(tempfile.mkdtemp())

        self.document = self.test_dir / 'doc.md'
        self.document.write_text(
            "<!-- @var greeting: Hello -->\n{{greeting}}, {{name}}! {{unknown}}",
            encoding='utf-8'
        )

        self.vars_file = self.test_dir / 'vars.yaml'
        self.vars_file.write_text(
            "variables:\n  - name: name\n    value: World\n",
            encoding='utf-8'
        )

        self.original_cwd = Path.cwd()
        os.chdir(self.test_dir)

    def tearDown(self):
        """Clean up test environment."""
        os.chdir(self.original_cwd)
        shutil.rmtree(self.test_dir)

    def run_cli(self, *args):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            exit_code = main(list(args))
        return exit_code, stdout.getvalue()

    def test_no_command_prints_help(self):
        exit_code, _ = self.run_cli()
        self.assertEqual(exit_code, 1)

    def test_process_with_vars_file(self):
        exit_code, output = self.run_cli('process', str(self.document), '--vars', str(self.vars_file))
        self.assertEqual(exit_code, 0)
        self.assertEqual(output, "Hello, World! {{unknown}}")

    def test_set_overrides_vars_file(self):
        exit_code, output = self.run_cli(
            'process', str(self.document),
            '--vars', str(self.vars_file),
            '--set', 'name=There'
        )
        self.assertEqual(exit_code, 0)
        self.assertEqual(output, "Hello, There! {{unknown}}")

    def test_process_to_out_file(self):
        out = self.test_dir / 'build' / 'out.md'
        exit_code, output = self.run_cli('process', str(self.document), '--out', str(out))
        self.assertEqual(exit_code, 0)
        self.assertEqual(output, "")
        self.assertEqual(out.read_text(encoding='utf-8'), "Hello, {{name}}! {{unknown}}")

    def test_strict_reports_unresolved(self):
        exit_code, output = self.run_cli(
            'process', str(self.document), '--set', 'name=World', '--strict', '--quiet'
        )
        self.assertEqual(exit_code, 2)
        self.assertEqual(output, "Hello, World! {{unknown}}")

    def test_strict_passes_when_resolved(self):
        exit_code, _ = self.run_cli(
            'process', str(self.document), '--set', 'name=World', '--set', 'unknown=?', '--strict'
        )
        self.assertEqual(exit_code, 0)

    def test_missing_document(self):
        exit_code, _ = self.run_cli('process', str(self.test_dir / 'missing.md'), '--quiet')
        self.assertEqual(exit_code, 1)

    def test_unsupported_document(self):
        other = self.test_dir / 'doc.json'
        other.write_text('{}', encoding='utf-8')
        exit_code, _ = self.run_cli('process', str(other), '--quiet')
        self.assertEqual(exit_code, 2)

    def test_malformed_vars_file(self):
        self.vars_file.write_text("variables: nope\n", encoding='utf-8')
        exit_code, _ = self.run_cli('process', str(self.document), '--vars', str(self.vars_file), '--quiet')
        self.assertEqual(exit_code, 2)

    def test_missing_vars_file(self):
        exit_code, _ = self.run_cli('process', str(self.document), '--vars', 'nope.yaml', '--quiet')
        self.assertEqual(exit_code, 2)

    def test_bad_set_pair(self):
        exit_code, _ = self.run_cli('process', str(self.document), '--set', 'novalue', '--quiet')
        self.assertEqual(exit_code, 2)

    def test_export_merges_sources(self):
        exit_code, output = self.run_cli('export', '--vars', str(self.vars_file), '--set', 'extra=1')
        self.assertEqual(exit_code, 0)
        self.assertEqual(yaml.safe_load(output), {
            'variables': [
                {'name': 'extra', 'value': '1'},
                {'name': 'name', 'value': 'World'},
            ]
        })

    def test_export_to_file(self):
        out = self.test_dir / 'exported' / 'vars.yaml'
        exit_code, _ = self.run_cli('export', '--set', 'a=b', '--out', str(out))
        self.assertEqual(exit_code, 0)
        self.assertEqual(yaml.safe_load(out.read_text(encoding='utf-8')),
                         {'variables': [{'name': 'a', 'value': 'b'}]})

    def test_vars_lists_declarations(self):
        self.document.write_text(
            "<!-- @var a: 1 -->\n<!-- @var b: x -->\n<!-- @var a: 2 -->\ntext",
            encoding='utf-8'
        )
        exit_code, output = self.run_cli('vars', str(self.document))
        self.assertEqual(exit_code, 0)
        self.assertEqual(yaml.safe_load(output), {
            'variables': [
                {'name': 'a', 'value': '2'},
                {'name': 'b', 'value': 'x'},
            ]
        })


class TestParseAssignments(TestCase):

    def test_value_may_contain_equals(self):
        args = type('Args', (), {'set': ['url=a=b', 'empty=']})()
        self.assertEqual(parse_assignments(args), {'url': 'a=b', 'empty': ''})

    def test_no_pairs(self):
        args = type('Args', (), {'set': None})()
        self.assertEqual(parse_assignments(args), {})

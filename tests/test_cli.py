"""
Command Line Tests

Run with: pytest tests/test_cli.py -v
"""

import json

import pytest
import yaml
from lxml import etree

from scomment_core.cli import EXIT_MALFORMED, EXIT_OK, EXIT_SETUP, iter_sections, main

BATCH = {
    'comments': [
        {
            'identifier': '<article>',
            'sections': {'tags': 'root', 'notes': 'Holds `<front>'},
        },
        {
            'identifier': 'Article Module',
            'name': 'article.ent',
            'sections': [['notes', 'Module overview']],
        },
    ]
}


def write_batch(tmp_path, data, name="batch.yaml"):
    path = tmp_path / name
    if name.endswith(".json"):
        path.write_text(json.dumps(data), encoding='utf-8')
    else:
        path.write_text(yaml.dump(data), encoding='utf-8')
    return path


class TestIterSections:
    """Tests for batch section parsing."""

    def test_mapping(self):
        assert iter_sections({'sections': {'a': 'x', 'b': 'y'}}) == [('a', 'x'), ('b', 'y')]

    def test_pairs(self):
        assert iter_sections({'sections': [['a', 'x']]}) == [('a', 'x')]

    def test_missing(self):
        assert iter_sections({}) == []

    def test_mapping_item_rejected(self):
        """List items must be [name, text] pairs."""
        with pytest.raises(ValueError):
            iter_sections({'sections': [{'name': 'notes', 'text': 'hello'}]})

    def test_string_sections_rejected(self):
        with pytest.raises(ValueError):
            iter_sections({'sections': 'notes'})


class TestMain:
    """Tests for the scomment command."""

    def test_writes_output_file(self, tmp_path):
        batch = write_batch(tmp_path, BATCH)
        output = tmp_path / "out" / "scomments.xml"

        assert main([str(batch), "-o", str(output)]) == EXIT_OK

        root = etree.parse(str(output)).getroot()
        assert root.tag == "scomments"
        assert root[0].get("root") == "true"
        assert root[1].get("name") == "article.ent"
        assert root[1].get("title") == "Article Module"

    def test_writes_stdout(self, tmp_path, capsys):
        batch = write_batch(tmp_path, BATCH, "batch.json")
        assert main([str(batch)]) == EXIT_OK
        out = capsys.readouterr().out
        assert "<a href=\"#p=elem-front\">&lt;front&gt;</a>" in out

    def test_malformed_section_stops(self, tmp_path):
        data = {'comments': [{'identifier': '<p>', 'sections': {'notes': '<b>open'}}]}
        batch = write_batch(tmp_path, data)
        output = tmp_path / "out.xml"
        assert main([str(batch), "-o", str(output)]) == EXIT_MALFORMED
        assert not output.exists()

    def test_keep_going(self, tmp_path):
        data = {'comments': [{
            'identifier': '<p>',
            'sections': {'notes': '<b>open', 'tags': 'inline'},
        }]}
        batch = write_batch(tmp_path, data)
        output = tmp_path / "out.xml"
        assert main([str(batch), "-o", str(output), "--keep-going"]) == EXIT_MALFORMED

        root = etree.parse(str(output)).getroot()
        types = [a.get("type") for a in root.iter("annotation")]
        assert types == ["tags"]

    def test_converter_option(self, tmp_path, python_command):
        script = "import sys; sys.stdout.buffer.write(sys.stdin.buffer.read().upper())"
        data = {'comments': [{'identifier': '@id', 'sections': {'notes': 'unique'}}]}
        batch = write_batch(tmp_path, data)
        output = tmp_path / "out.xml"

        assert main([str(batch), "-o", str(output), "--converter", python_command(script)]) == EXIT_OK
        root = etree.parse(str(output)).getroot()
        assert root.find(".//annotation").text == "UNIQUE"

    def test_missing_batch(self, tmp_path):
        assert main([str(tmp_path / "missing.yaml")]) == EXIT_SETUP

    def test_non_mapping_entry(self, tmp_path, capsys):
        """A comment that is not a mapping is a setup error."""
        batch = write_batch(tmp_path, {'comments': ['<article>']})
        assert main([str(batch)]) == EXIT_SETUP
        assert capsys.readouterr().out == ""

    def test_section_mapping_item(self, tmp_path):
        """Sections written as name/text mappings are rejected."""
        data = {'comments': [{
            'identifier': '<p>',
            'sections': [{'name': 'notes', 'text': 'hello'}],
        }]}
        batch = write_batch(tmp_path, data)
        output = tmp_path / "out.xml"
        assert main([str(batch), "-o", str(output)]) == EXIT_SETUP
        assert not output.exists()

    def test_unbalanced_converter_quotes(self, tmp_path, capsys):
        """A converter command that cannot be split is a setup error."""
        batch = write_batch(tmp_path, BATCH)
        assert main([str(batch), "--converter", "pandoc 'x"]) == EXIT_SETUP
        assert "Invalid converter command" in capsys.readouterr().err

    def test_bad_config(self, tmp_path):
        batch = write_batch(tmp_path, BATCH)
        config = tmp_path / "config.ini"
        config.write_text("", encoding='utf-8')
        assert main([str(batch), "--config", str(config)]) == EXIT_SETUP

"""Tests for the LSP server — diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from rulelex.lsp import _validate, main
from rulelex.scanner import Scanner


@pytest.fixture
def scanner() -> Scanner:
    return Scanner([("[a-z]+", 1), ("\n", 2), (" ", -3)])


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.txt") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="text", version=0, text=source)
        )

    return ls, published, put


class TestIllegalCharacter:
    def test_first_line(self, lsp_env, scanner) -> None:
        ls, published, put = lsp_env
        put("abc ?")
        _validate(ls, "file:///test.txt", scanner)

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert d.message == "Illegal character: ?"
        assert d.source == "rulelex"
        assert d.range.start.line == 0
        assert d.range.start.character == 4
        assert d.range.end.character == 5

    def test_second_line(self, lsp_env, scanner) -> None:
        ls, published, put = lsp_env
        put("ok\n  x!")
        _validate(ls, "file:///test.txt", scanner)

        d = published[0].diagnostics[0]
        assert d.range.start.line == 1
        assert d.range.start.character == 3


class TestCleanDocument:
    def test_valid_document(self, lsp_env, scanner) -> None:
        ls, published, put = lsp_env
        put("hello\n  world")
        _validate(ls, "file:///test.txt", scanner)

        assert len(published) == 1
        assert published[0].diagnostics == []


class TestMain:
    def test_missing_rules_file(self, tmp_path, capsys) -> None:
        assert main(["--rules", str(tmp_path / "absent.toml")]) == 2
        assert "not found" in capsys.readouterr().err

    def test_invalid_pattern(self, tmp_path, capsys) -> None:
        rules = tmp_path / "rulelex.toml"
        rules.write_text("[[rules]]\npattern = '('\ncategory = 1\n")
        assert main(["--rules", str(rules)]) == 2
        assert "invalid pattern" in capsys.readouterr().err

    def test_undecodable_rules_file(self, tmp_path, capsys) -> None:
        rules = tmp_path / "rulelex.toml"
        rules.write_bytes(b"\xff\xfe[[rules]]\n")
        assert main(["--rules", str(rules)]) == 2
        assert "error:" in capsys.readouterr().err

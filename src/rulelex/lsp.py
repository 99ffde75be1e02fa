"""Minimal LSP server for rulelex — illegal character diagnostics only."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from rulelex import __version__
from rulelex.config import load_rules
from rulelex.errors import IllegalCharacter, RuleError
from rulelex.logger import get_logger
from rulelex.scanner import Scanner

logger = get_logger(__name__)

server = LanguageServer("rulelex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)

_scanner: Scanner | None = None


def _validate(ls: LanguageServer, uri: str, scanner: Scanner) -> None:
    """Scan the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        scanner.scan(doc.source)
    except IllegalCharacter as exc:
        # line is already 0-based; column counts from 1 after the newline
        line = exc.position.line
        col = exc.position.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="rulelex",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    if _scanner is not None:
        _validate(ls, params.text_document.uri, _scanner)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    if _scanner is not None:
        _validate(ls, params.text_document.uri, _scanner)


def main(argv: list[str] | None = None) -> int:
    """Server entry point. Returns 2 when the rule table cannot be loaded."""
    global _scanner

    p = argparse.ArgumentParser(prog="rulelex-lsp", description="rulelex language server")
    p.add_argument("-r", "--rules", required=True, metavar="FILE", help="Rule table (TOML)")
    args = p.parse_args(argv)

    try:
        _scanner = Scanner(load_rules(Path(args.rules)))
    except RuleError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.rules}: {exc}", file=sys.stderr)
        return 2

    logger.info("serving diagnostics with %d rules", len(_scanner.rules))
    server.start_io()
    return 0

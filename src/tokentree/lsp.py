"""Minimal LSP server for tokentree — lexer diagnostics only."""

from __future__ import annotations

import logging
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

from tokentree import __version__
from tokentree.config import LexerOptions, load_config, resolve_options
from tokentree.errors import LexError
from tokentree.lexer import tokenize

logger = logging.getLogger(__name__)

server = LanguageServer(
    "tokentree-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(exc: LexError) -> Diagnostic:
    line = exc.position.line - 1
    col = exc.position.column - 1
    message = exc.message
    if exc.expected:
        message += f" (expected one of: {', '.join(sorted(exc.expected))})"
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        ),
        message=message,
        severity=DiagnosticSeverity.Error,
        source="tokentree",
    )


def _options_for(path: str | None) -> LexerOptions:
    """Options from the tokentree.toml beside *path*, or defaults."""
    if path is None:
        return LexerOptions()
    try:
        return resolve_options(load_config(None, Path(path).parent))
    except (OSError, ValueError) as exc:
        # Malformed TOML or an out-of-range max_depth
        logger.warning("ignoring config for %s: %s", path, exc)
        return LexerOptions()


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        tokenize(doc.source, filename, _options_for(doc.path))
    except LexError as exc:
        diagnostics.append(_diagnostic(exc))

    logger.debug("publishing %d diagnostics for %s", len(diagnostics), uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()

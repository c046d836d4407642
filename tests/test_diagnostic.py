"""Diagnostic reporter tests: message format, error event, abort."""

import pytest

from code_generator import RecordingGenerator
from diagnostic import (CompilationError, Diagnostic, DiagnosticReporter, GrammarError,
                        IncompatibleTypeError, UndeclaredVariableError)
from my_types import Token, TokenKind as K


@pytest.fixture
def reporter_and_recorder():
    recorder = RecordingGenerator()
    return DiagnosticReporter("prog.txt", recorder), recorder


def test_report_formats_and_raises(reporter_and_recorder):
    reporter, recorder = reporter_and_recorder
    token = Token(K.IDENT, "x", 7)
    with pytest.raises(CompilationError) as info:
        reporter.report(token, "something went wrong")
    assert info.value.message == "line 7 in prog.txt: something went wrong"
    assert info.value.line == 7
    [event] = recorder.events
    assert event.kind == 'error'
    assert event.token == token
    assert event.message == info.value.message


def test_expected_message(reporter_and_recorder):
    reporter, _ = reporter_and_recorder
    with pytest.raises(GrammarError) as info:
        reporter.expected(Token(K.NUMBER, "3", 2), K.IDENT, K.IF)
    assert str(info.value) == "line 2 in prog.txt: Expected token(s) identifier/'if' but found number constant."
    assert info.value.expected == (K.IDENT, K.IF)
    assert info.value.found == K.NUMBER


def test_undeclared_message(reporter_and_recorder):
    reporter, _ = reporter_and_recorder
    with pytest.raises(UndeclaredVariableError) as info:
        reporter.undeclared(Token(K.IDENT, "z", 4))
    assert info.value.message == "line 4 in prog.txt: Variable z not defined"
    assert info.value.identifier == "z"


def test_incompatible_message(reporter_and_recorder):
    reporter, _ = reporter_and_recorder
    with pytest.raises(IncompatibleTypeError) as info:
        reporter.incompatible(Token(K.MINUS, "-", 5), "s")
    assert info.value.message == "line 5 in prog.txt: Invalid operation '-' on string variable: s"
    assert info.value.operator == K.MINUS


def test_to_diagnostic():
    error = CompilationError("line 1 in a: boom", 1)
    assert error.to_diagnostic() == Diagnostic("line 1 in a: boom", 1)


def test_report_builds_typed_errors(reporter_and_recorder):
    reporter, recorder = reporter_and_recorder
    token = Token(K.IDENT, "z", 9)
    with pytest.raises(UndeclaredVariableError) as info:
        reporter.report(token, "custom text", UndeclaredVariableError, identifier="z")
    assert info.value.message == "line 9 in prog.txt: custom text"
    assert info.value.identifier == "z"
    assert [e.message for e in recorder.of_kind('error')] == [info.value.message]


def test_every_helper_goes_through_report(reporter_and_recorder, monkeypatch):
    reporter, _ = reporter_and_recorder
    seen = []
    original = reporter.report

    def spy(token, explanation, *args, **kwargs):
        seen.append(explanation)
        return original(token, explanation, *args, **kwargs)

    monkeypatch.setattr(reporter, "report", spy)
    token = Token(K.MINUS, "-", 1)
    for call in (lambda: reporter.expected(token, K.IDENT),
                 lambda: reporter.undeclared(Token(K.IDENT, "q", 1)),
                 lambda: reporter.incompatible(token, "s")):
        with pytest.raises(CompilationError):
            call()
    assert seen == [
        "Expected token(s) identifier but found '-'.",
        "Variable q not defined",
        "Invalid operation '-' on string variable: s",
    ]

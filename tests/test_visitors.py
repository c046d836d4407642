"""Tree printer tests."""

from analyzer import check
from code_generator import RecordingGenerator
from visitors import TreePrinter, print_tree


def record(source):
    recorder = RecordingGenerator()
    check(source, "t.txt", recorder)
    return recorder


def test_tree_layout():
    text = print_tree(record("begin x := 1 end"))
    assert text.splitlines() == [
        "StatementPart",
        "  'begin'",
        "  StatementList",
        "    Statement",
        "      AssignmentStatement",
        "        identifier x",
        "        ':='",
        "        Expression",
        "          Term",
        "            Factor",
        "              number constant 1",
        "        /* declare x: Number */",
        "  'end'",
        "end of file",
    ]


def test_hide_types_and_show_locations():
    text = print_tree(record("begin\nx := \"a\"\nend"), show_types=False, show_locations=True)
    assert "declare" not in text
    assert "identifier x @2" in text
    assert "'end' @3" in text


def test_error_is_printed():
    text = print_tree(record("begin x := y end"))
    assert text.splitlines()[-1].strip() == "!! line 1 in t.txt: Variable y not defined"


def test_colors():
    printer = TreePrinter(use_colors=True)
    text = printer.print(record("begin x := 1 end").events)
    assert "\033[33mStatementPart\033[0m" in text


def test_printer_is_reusable():
    printer = TreePrinter()
    events = record("begin x := 1 end").events
    assert printer.print(events) == printer.print(events)

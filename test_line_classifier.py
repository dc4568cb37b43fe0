from line_classifier import (LineClassifier, LineKind, classify_source, is_executable,
                             strip_trailing_comment)


def kinds(source):
    return [line.kind for line in classify_source(source)]


def test_every_line_is_classified_including_blank_and_comments():
    source = "let x = 1;\n\n// note\nx = 2;"
    lines = classify_source(source)
    assert [line.line_number for line in lines] == [1, 2, 3, 4]
    assert [line.kind for line in lines] == [
        LineKind.DECLARATION, LineKind.OTHER, LineKind.OTHER, LineKind.ASSIGNMENT]


def test_text_is_trimmed_and_indent_recorded():
    line = classify_source("    total = total + i;   ")[0]
    assert line.text == "total = total + i;"
    assert line.indent == 4
    assert line.kind is LineKind.ASSIGNMENT


def test_declaration_wins_over_assignment():
    assert kinds("let a = 1\nconst b = 2\nvar c = 3") == [LineKind.DECLARATION] * 3


def test_comparison_is_not_an_assignment():
    assert LineClassifier.kind_of("x == 5") is LineKind.OTHER
    assert LineClassifier.kind_of("x === 5") is LineKind.OTHER


def test_compound_and_increment_assignments():
    assert LineClassifier.kind_of("i += 2;") is LineKind.ASSIGNMENT
    assert LineClassifier.kind_of("i++;") is LineKind.ASSIGNMENT
    assert LineClassifier.kind_of("n--") is LineKind.ASSIGNMENT


def test_conditionals():
    assert LineClassifier.kind_of("if (x > 1) {") is LineKind.CONDITIONAL
    assert LineClassifier.kind_of("else if (x) {") is LineKind.CONDITIONAL
    assert LineClassifier.kind_of("else {") is LineKind.CONDITIONAL
    assert LineClassifier.kind_of("} else {") is LineKind.CONDITIONAL


def test_conditional_keyword_needs_word_boundary():
    assert LineClassifier.kind_of("iffy()") is LineKind.FUNCTION_CALL


def test_loops():
    assert LineClassifier.kind_of("for (let i = 0; i < 3; i++) {") is LineKind.LOOP
    assert LineClassifier.kind_of("while (n > 0) {") is LineKind.LOOP
    assert LineClassifier.kind_of("do {") is LineKind.LOOP


def test_function_definition_return_output_and_call():
    assert LineClassifier.kind_of("function add(a, b) {") is LineKind.FUNCTION_DEFINITION
    assert LineClassifier.kind_of("return a + b;") is LineKind.RETURN
    assert LineClassifier.kind_of('console.log("hi");') is LineKind.OUTPUT
    assert LineClassifier.kind_of("console.error(err)") is LineKind.OUTPUT
    assert LineClassifier.kind_of("print(x)") is LineKind.OUTPUT
    assert LineClassifier.kind_of("add(1, 2);") is LineKind.FUNCTION_CALL


def test_arrow_function_assignment_is_an_assignment():
    # assignment is checked before function definitions
    assert LineClassifier.kind_of("add = (a, b) => a + b") is LineKind.ASSIGNMENT


def test_unknown_constructs_fall_back_to_other():
    assert LineClassifier.kind_of("}") is LineKind.OTHER
    assert LineClassifier.kind_of("break;") is LineKind.OTHER
    assert LineClassifier.kind_of("// console.log(1)") is LineKind.OTHER


def test_executable_lines_skip_blank_comment_and_braces():
    lines = classify_source("{\n\n// c\n}\n};\nx = 1;")
    assert [is_executable(line) for line in lines] == [False, False, False, False, False, True]


def test_trailing_comment_is_stripped_outside_strings():
    assert strip_trailing_comment("let x = 5; // five") == "let x = 5;"
    assert strip_trailing_comment('url = "http://x"; // site') == 'url = "http://x";'
    assert strip_trailing_comment("s = 'a\\'//b'") == "s = 'a\\'//b'"
    assert strip_trailing_comment("x = 1") == "x = 1"


def test_trailing_comment_does_not_change_the_kind():
    assert LineClassifier.kind_of("doIt(); // console.log(x)") is LineKind.FUNCTION_CALL
    lines = classify_source("} // end\nx = 1; // set")
    assert [is_executable(line) for line in lines] == [False, True]
    assert lines[1].text == "x = 1; // set"

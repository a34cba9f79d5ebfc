from order_import.parser import find_import_block
from order_import.parser import parse_import_line


def test_parse_named_import():
    record = parse_import_line("  import { Header, Footer as F } from './layout';  ")
    assert record.raw_text == "import { Header, Footer as F } from './layout';"
    assert record.specifier == "{ Header, Footer as F }"
    assert record.module_path == "'./layout'"
    assert record.is_named
    assert not record.is_asterisk
    assert not record.is_mixed
    assert not record.is_side_effect


def test_parse_default_namespace_and_mixed():
    default = parse_import_line('import React from "react"')
    assert default.specifier == "React"
    assert default.module_path == '"react"'
    assert not (default.is_named or default.is_asterisk or default.is_mixed or default.is_side_effect)

    namespace = parse_import_line("import * as path from 'path';")
    assert namespace.is_asterisk
    assert namespace.specifier == "* as path"

    mixed = parse_import_line("import PopupState, { bindMenu, bindTrigger } from 'material-ui-popup-state';")
    assert mixed.is_mixed
    assert not mixed.is_named
    assert mixed.specifier == "PopupState, { bindMenu, bindTrigger }"


def test_parse_side_effect_and_pinned():
    record = parse_import_line("import './styles.css';")
    assert record.is_side_effect
    assert record.specifier == ""
    assert not record.is_pinned

    pinned = parse_import_line("import '../fix-ts-path';", pinned_marker="fix-ts-path")
    assert pinned.is_side_effect
    assert pinned.is_pinned


def test_parse_rejects_non_imports():
    assert parse_import_line("import {} from 'x';") is None
    assert parse_import_line("import type { Props } from './types';") is None
    assert parse_import_line("import a from 'b'; // trailing comment") is None
    assert parse_import_line("const a = require('a');") is None
    assert parse_import_line("import a from 'b\";") is None


def test_find_import_block_skips_leading_lines_and_tolerates_comments():
    lines = [
        "'use client';",
        "",
        "import a from 'a';",
        "// services",
        "",
        "import b from 'b';",
        "",
        "const x = a + b;",
        "import c from 'c';",
    ]
    block = find_import_block(lines)
    assert block.start_line == 2
    assert block.end_line == 5
    assert [r.specifier for r in block.records] == ["a", "b"]


def test_find_import_block_stops_at_unparseable_import():
    lines = [
        "import a from 'a';",
        "import {} from 'x';",
        "import b from 'b';",
    ]
    block = find_import_block(lines)
    assert block.start_line == 0
    assert block.end_line == 0
    assert len(block.records) == 1


def test_find_import_block_without_imports():
    assert find_import_block(["const a = 1;", "export default a;"]) is None
    assert find_import_block([]) is None


def test_find_import_block_ends_at_code_after_inline_comment():
    lines = [
        "import b from 'b';",
        "/* setup */ const x = b();",
        "import a from 'a';",
    ]
    block = find_import_block(lines)
    assert block.end_line == 0
    assert len(block.records) == 1


def test_find_import_block_treats_star_line_as_code_outside_comment():
    lines = [
        "import b from 'b';",
        "*gen() {}",
        "import a from 'a';",
    ]
    assert find_import_block(lines).end_line == 0


def test_find_import_block_tolerates_block_comments():
    lines = [
        "import b from 'b';",
        "/* one line */",
        "/**",
        " * Docs.",
        " import hidden from 'hidden';",
        " */",
        "import a from 'a';",
        "",
        "export { a, b };",
    ]
    block = find_import_block(lines)
    assert block.end_line == 6
    assert [r.specifier for r in block.records] == ["b", "a"]


def test_find_import_block_ends_at_code_after_closing_comment():
    lines = [
        "import b from 'b';",
        "/* start",
        "   end */ run();",
        "import a from 'a';",
    ]
    assert find_import_block(lines).end_line == 0

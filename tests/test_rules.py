from order_import.models import ALIAS
from order_import.models import EXTERNAL
from order_import.models import RELATIVE
from order_import.parser import parse_import_line
from order_import.rules import classify_imports
from order_import.rules import classify_source
from order_import.rules import optimize_barrel_imports
from order_import.rules import remove_unused_imports

MUI = {"@mui/material", "@mui/x-data-grid"}


def _records(*lines):
    return [parse_import_line(line, "fix-ts-path") for line in lines]


def test_barrel_import_is_split_per_component():
    records = _records("import { Button, TextField, } from '@mui/material';")
    result = optimize_barrel_imports(records, MUI)
    assert [r.raw_text for r in result] == [
        "import Button from '@mui/material/Button';",
        "import TextField from '@mui/material/TextField';",
    ]
    assert all(not r.is_named for r in result)
    assert [r.specifier for r in result] == ["Button", "TextField"]


def test_barrel_split_keeps_quote_style_and_appends_after_kept():
    records = _records(
        'import { Box } from "@mui/material";',
        "import React from 'react';",
    )
    result = optimize_barrel_imports(records, MUI)
    assert result[0].specifier == "React"
    assert result[1].module_path == '"@mui/material/Box"'


def test_aliased_barrel_import_is_left_alone():
    records = _records("import { DataGrid as Grid } from '@mui/x-data-grid';")
    result = optimize_barrel_imports(records, MUI)
    assert result == records


def test_non_target_and_non_named_imports_are_left_alone():
    records = _records(
        "import { useState } from 'react';",
        "import Button from '@mui/material/Button';",
        "import * as Mui from '@mui/material';",
    )
    assert optimize_barrel_imports(records, MUI) == records


def test_remove_unused_imports_checks_body_only():
    lines = [
        "import { Header } from './h';",
        "import Box from './b';",
        "import { a as renamed, Used } from './c';",
        "import * as utils from './utils';",
        "import './styles.css';",
        "",
        "export const App = () => <Box><Used /></Box>;",
    ]
    records = _records(*lines[:5])
    kept = remove_unused_imports(records, lines, 4)
    assert [r.module_path for r in kept] == ["'./b'", "'./c'", "'./utils'", "'./styles.css'"]


def test_remove_unused_imports_matches_whole_words():
    lines = [
        "import Button from './button';",
        "import $store from './store';",
        "render(ButtonGroup, $store.state);",
    ]
    kept = remove_unused_imports(_records(*lines[:2]), lines, 1)
    assert [r.specifier for r in kept] == ["$store"]


def test_remove_unused_uses_pre_alias_identifier():
    lines = ["import { foo as bar } from './foo';", "foo();"]
    assert len(remove_unused_imports(_records(lines[0]), lines, 0)) == 1
    lines = ["import { foo as bar } from './foo';", "bar();"]
    assert remove_unused_imports(_records(lines[0]), lines, 0) == []


def test_mixed_import_usage_follows_default_identifier():
    lines = ["import Popup, { bindMenu } from 'popup';", "Popup();"]
    assert len(remove_unused_imports(_records(lines[0]), lines, 0)) == 1
    lines = ["import Popup, { bindMenu } from 'popup';", "bindMenu();"]
    assert remove_unused_imports(_records(lines[0]), lines, 0) == []


def test_classify_source():
    aliases = ["@/", "~/", "@components/"]
    assert classify_source("./Header", aliases) == RELATIVE
    assert classify_source("../utils", aliases) == RELATIVE
    assert classify_source("@/services/api", aliases) == ALIAS
    assert classify_source("~/hooks", aliases) == ALIAS
    assert classify_source("@mui/material", aliases) == EXTERNAL
    assert classify_source("react", aliases) == EXTERNAL
    assert classify_source(".hidden", aliases) == EXTERNAL


def test_classify_imports_skips_pinned():
    records = _records("import './fix-ts-path';", "import React from 'react';")
    classified = classify_imports(records, ["@/"])
    assert classified[0].source_class is None
    assert classified[1].source_class == EXTERNAL
    assert records[1].source_class is None

# tests/test_main.py
"""
Tests for the command-line entry point.
"""

import json

import pytest

from jsbastard import __version__
from jsbastard.main import EXIT_INFRA, EXIT_OK, main


@pytest.fixture
def script(tmp_path):
    def write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write


class TestMain:

    def test_clean_file(self, script, capsys):
        path = script("ok.js", "(function () { var x = 1; }());\n")
        assert main([path]) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_complaints_do_not_change_exit_status(self, script, capsys):
        path = script("bad.js", "var x = 1;\n;\n")
        assert main([path]) == EXIT_OK
        assert capsys.readouterr().out.splitlines() == [
            f"{path}:1:0: The script must be inside a closure",
            f"{path}:2:0: Empty statement",
        ]

    def test_unreadable_file(self, script, tmp_path, capsys):
        good = script("bad.js", "var x = 1;\n")
        missing = str(tmp_path / "missing.js")
        assert main([missing, good]) == EXIT_INFRA
        captured = capsys.readouterr()
        assert captured.out == f"{good}:1:0: The script must be inside a closure\n"
        assert "Could not read" in captured.err

    def test_unparsable_file(self, script, capsys):
        path = script("broken.js", "(function () {\n")
        assert main([path]) == EXIT_INFRA
        assert "Could not parse" in capsys.readouterr().err

    def test_deeply_nested_file_does_not_stop_batch(self, script, capsys):
        deep = script("deep.js", "(function () { x = " + "[" * 5000 + "]" * 5000 + "; }());\n")
        good = script("bad.js", "var x = 1;\n")
        assert main([deep, good]) == EXIT_INFRA
        captured = capsys.readouterr()
        assert captured.out == f"{good}:1:0: The script must be inside a closure\n"
        assert f"Could not parse {deep}" in captured.err

    def test_json_format(self, script, capsys):
        path = script("fn.js", "(function () {\n    function f() {}\n}());\n")
        assert main(["--format", "json", path]) == EXIT_OK
        records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert records == [{
            "file": path,
            "line": 2,
            "column": 4,
            "rule": "namedFunction",
            "message": "Do not declare named functions",
        }]

    def test_parallel_jobs(self, script, capsys):
        paths = [script(f"s{i}.js", "var x = 1;\n") for i in range(5)]
        assert main(["-j", "3", *paths]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert sorted(lines) == sorted(
            f"{p}:1:0: The script must be inside a closure" for p in paths
        )

    def test_verbose_logs_summary(self, script, capsys):
        path = script("ok.js", "(function () { var x = 1; }());\n")
        main(["-v", path])
        assert "1 file(s) checked" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--version"])
        assert info.value.code == 0
        assert __version__ in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [
        [],
        ["--jobs", "0", "a.js"],
        ["--encoding", "no-such-codec", "a.js"],
        ["--format", "xml", "a.js"],
    ])
    def test_bad_arguments(self, argv, capsys):
        with pytest.raises(SystemExit) as info:
            main(argv)
        assert info.value.code == 2

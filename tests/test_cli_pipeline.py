"""
Command-line pipeline tests

Runs the pipeline stages against temporary directories, checking the
written document and that failures leave the output file alone.
"""

import tempfile
from argparse import Namespace
from pathlib import Path

import pytest

from gorillamd.config import AppSettings, appsettings
from gorillamd.__main__ import (
    parser,
    env_check,
    source_read,
    notebook_segment,
    markdown_render,
    markdown_write,
    results_report,
)
from gorillamd.models import ProgramState, pipeline


NOTEBOOK = "\n".join([
    ";; gorilla-repl.fileformat = 1",
    "",
    ";; **",
    ";;; # Title",
    ";; **",
    "",
    ";; @@",
    "(+ 1 2)",
    ";; @@",
    ";; =>",
    ';;; {"type":"html","content":"3"}',
    ";; <=",
    "",
])

STAGES = (env_check, source_read, notebook_segment, markdown_render, markdown_write, results_report)


def state_make(inputdir, outputdir):
    return ProgramState(
        inputdir=Path(inputdir),
        outputdir=Path(outputdir),
        verbosity=0,
        inputFile="nb.clj",
        outputFile="nb.md",
    )


class TestPipeline:
    """Test a full conversion run"""

    def test_converts_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "nb.clj").write_text(NOTEBOOK, encoding="utf-8")
            outdir = Path(tmpdir) / "out"

            final = pipeline(state_make(tmpdir, outdir), *STAGES)

            assert final.writeOK is True
            assert len(final.parsedCells) == 3
            assert (outdir / "nb.md").read_text(encoding="utf-8") == (
                "# Title\n\n```clojure\n(+ 1 2)\n```\n\n3\n"
            )

    def test_overwrites_existing_output(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "nb.clj").write_text(NOTEBOOK, encoding="utf-8")
            (Path(tmpdir) / "nb.md").write_text("stale", encoding="utf-8")

            pipeline(state_make(tmpdir, tmpdir), *STAGES)

            assert (Path(tmpdir) / "nb.md").read_text(encoding="utf-8").startswith("# Title")

    def test_stages_do_not_mutate_input_state(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "nb.clj").write_text(NOTEBOOK, encoding="utf-8")
            initial = state_make(tmpdir, tmpdir)

            checked = env_check(initial)

            assert checked.envOK is True
            assert initial.envOK is False


class TestPipelineFailures:
    """Test exit behaviour on bad input"""

    def test_missing_input(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(SystemExit) as excinfo:
                pipeline(state_make(tmpdir, tmpdir), *STAGES)

            assert excinfo.value.code == 1

    def test_malformed_notebook_keeps_previous_output(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            bad = "\n".join([";; gorilla-repl.fileformat = 1", ";; @@", ";; **", ";;; x", ";; **"])
            (Path(tmpdir) / "nb.clj").write_text(bad, encoding="utf-8")
            (Path(tmpdir) / "nb.md").write_text("previous", encoding="utf-8")

            with pytest.raises(SystemExit) as excinfo:
                pipeline(state_make(tmpdir, tmpdir), *STAGES)

            assert excinfo.value.code == 1
            assert (Path(tmpdir) / "nb.md").read_text(encoding="utf-8") == "previous"
            assert "Malformed notebook" in capsys.readouterr().err

    def test_malformed_output_writes_nothing(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            bad = "\n".join([";; gorilla-repl.fileformat = 1", ";; =>", ";;; [1", ";; <="])
            (Path(tmpdir) / "nb.clj").write_text(bad, encoding="utf-8")

            with pytest.raises(SystemExit) as excinfo:
                pipeline(state_make(tmpdir, tmpdir), *STAGES)

            assert excinfo.value.code == 1
            assert not (Path(tmpdir) / "nb.md").exists()
            assert "cell 0 (output)" in capsys.readouterr().err


class TestStateFromNamespace:
    """Test building the initial state from CLI options"""

    def test_unknown_options_dropped(self):
        options = Namespace(inputFile="a.clj", outputFile="a.md", verbosity=2, json=False)
        state = ProgramState.state_createFromNamespace(options, Path("in"), Path("out"))

        assert state.inputFile == "a.clj"
        assert state.outputFile == "a.md"
        assert state.verbosity == 2
        assert state.inputdir == Path("in")
        assert state.outputdir == Path("out")
        assert not hasattr(state, "json")


class TestArguments:
    """Test CLI argument defaults"""

    def test_file_defaults_from_settings(self):
        """Input and output names fall back to the configured defaults"""
        assert parser.get_default("inputFile") == appsettings.default_input_file
        assert parser.get_default("outputFile") == appsettings.default_output_file
        assert parser.get_default("verbosity") == 1

    def test_default_names(self):
        fields = AppSettings.model_fields
        assert fields["default_input_file"].default == "violence-in-religious-text-nb.clj"
        assert fields["default_output_file"].default == "violence-in-religious-text.md"

    def test_options_parse(self):
        options, _ = parser.parse_known_args(
            ["in", "out", "--inputFile", "a.clj", "--outputFile", "a.md", "-vv"]
        )

        assert options.inputFile == "a.clj"
        assert options.outputFile == "a.md"
        assert options.verbosity == 3

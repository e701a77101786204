"""CLI behavior tests for filter mode, picker hand-off, and exit codes.

Config lookups are pointed at a temporary path so user preferences never
leak into results.
"""

from __future__ import annotations

import io
import logging
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fuzzyscope import cli, config
from fuzzyscope.engine import FuzzyEngine
from fuzzyscope.picker import PickerCancelled
from fuzzyscope.scoring import substring_scorer
from fuzzyscope.styles import PLAIN_STYLE


class _CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        patcher = mock.patch("fuzzyscope.config.CONFIG_PATH", self.tmp / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _write_input(self, text: str) -> Path:
        path = self.tmp / "candidates.txt"
        path.write_text(text, encoding="utf-8")
        return path

    def _main(self, argv: list[str]) -> str:
        stdout = io.StringIO()
        with mock.patch.object(sys, "stdout", stdout):
            cli.main(argv)
        return stdout.getvalue()


class RunFilterTests(unittest.TestCase):
    def test_ranks_stream_lines(self) -> None:
        engine = FuzzyEngine()
        lines = cli.run_filter(
            io.StringIO("docs/readme.md\nsrc/app.py\nREADME\n"),
            "readme",
            engine,
            limit=None,
            style=PLAIN_STYLE,
        )
        self.assertEqual(lines, ["README", "docs/readme.md"])

    def test_exact_scorer_rejects_scattered_matches(self) -> None:
        engine = FuzzyEngine(scorer=substring_scorer)
        lines = cli.run_filter(io.StringIO("a_b_c\nabc\n"), "abc", engine, limit=None, style=PLAIN_STYLE)
        self.assertEqual(lines, ["abc"])


class FilterModeTests(_CliTestCase):
    def test_prints_matches_from_input_file(self) -> None:
        path = self._write_input("alpha\nbeta\ngamma\n")
        output = self._main(["--filter", "a", "--input", str(path), "--limit", "2"])
        self.assertEqual(output, "alpha\ngamma\n")

    def test_reads_candidates_from_stdin(self) -> None:
        with mock.patch.object(sys, "stdin", io.StringIO("one\ntwo\n")):
            output = self._main(["--filter", "tw"])
        self.assertEqual(output, "two\n")

    def test_no_match_exits_with_status_one(self) -> None:
        path = self._write_input("alpha\n")
        with self.assertRaises(SystemExit) as ctx:
            self._main(["--filter", "zzz", "--input", str(path)])
        self.assertEqual(ctx.exception.code, cli.EXIT_NO_MATCH)

    def test_missing_input_file_is_reported(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._main(["--filter", "a", "--input", str(self.tmp / "missing.txt")])
        self.assertIn("Cannot read candidates", str(ctx.exception.code))

    def test_save_theme_persists_normalized_name(self) -> None:
        path = self._write_input("alpha\n")
        self._main(["--filter", "a", "--input", str(path), "--theme", "OCEAN", "--save-theme"])
        self.assertEqual(config.load_theme_name(), "ocean")

    def test_invalid_limit_is_rejected(self) -> None:
        with mock.patch.object(sys, "stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.build_parser().parse_args(["--limit", "0"])
        self.assertEqual(ctx.exception.code, 2)


class InteractiveModeTests(_CliTestCase):
    def test_prints_accepted_selection(self) -> None:
        path = self._write_input("alpha\n")
        with mock.patch("fuzzyscope.cli.run_picker", return_value="alpha") as run_picker:
            output = self._main(["--input", str(path)])
        self.assertEqual(output, "alpha\n")
        run_picker.assert_called_once()

    def test_cancel_exits_with_interrupt_status(self) -> None:
        path = self._write_input("alpha\n")

        def cancelled(stream, engine, style, **kwargs):
            engine.insert("alpha")
            raise PickerCancelled

        with mock.patch("fuzzyscope.cli.run_picker", side_effect=cancelled):
            with self.assertRaises(SystemExit) as ctx:
                self._main(["--input", str(path)])
        self.assertEqual(ctx.exception.code, cli.EXIT_CANCELLED)

    def test_cancel_with_no_matches_exits_with_interrupt_status(self) -> None:
        path = self._write_input("alpha\n")

        def cancelled(stream, engine, style, **kwargs):
            engine.insert("alpha")
            engine.set_filter("zzz")
            raise PickerCancelled

        with mock.patch("fuzzyscope.cli.run_picker", side_effect=cancelled):
            with self.assertRaises(SystemExit) as ctx:
                self._main(["--input", str(path)])
        self.assertEqual(ctx.exception.code, cli.EXIT_CANCELLED)

    def test_query_and_title_reach_the_picker(self) -> None:
        path = self._write_input("alpha\n")
        with mock.patch("fuzzyscope.cli.run_picker", return_value="alpha") as run_picker:
            self._main(["--input", str(path), "--query", "al", "--title", "Branches"])
        _stream, _engine, style = run_picker.call_args.args
        self.assertEqual(run_picker.call_args.kwargs["query"], "al")
        self.assertEqual(style.title, "Branches")

    def test_no_selection_without_matches_exits_with_status_one(self) -> None:
        path = self._write_input("")
        with mock.patch("fuzzyscope.cli.run_picker", return_value=None):
            with self.assertRaises(SystemExit) as ctx:
                self._main(["--input", str(path)])
        self.assertEqual(ctx.exception.code, cli.EXIT_NO_MATCH)

    def test_terminal_errors_become_exit_messages(self) -> None:
        path = self._write_input("alpha\n")
        with mock.patch("fuzzyscope.cli.run_picker", side_effect=OSError(6, "No such device")):
            with self.assertRaises(SystemExit) as ctx:
                self._main(["--input", str(path)])
        self.assertIn("Cannot open terminal", str(ctx.exception.code))

    def test_interactive_tty_stdin_without_input_is_refused(self) -> None:
        fake_stdin = mock.Mock()
        fake_stdin.isatty.return_value = True
        with mock.patch.object(sys, "stdin", fake_stdin):
            with self.assertRaises(SystemExit) as ctx:
                self._main([])
        self.assertIn("No candidates", str(ctx.exception.code))


class SelectOneTests(_CliTestCase):
    def test_single_match_is_printed_without_picker(self) -> None:
        path = self._write_input("alpha\nbeta\ngamma\n")
        with mock.patch("fuzzyscope.cli.run_picker") as run_picker:
            output = self._main(["--input", str(path), "--select-1", "--query", "bet"])
        self.assertEqual(output, "beta\n")
        run_picker.assert_not_called()

    def test_no_match_exits_with_status_one(self) -> None:
        path = self._write_input("alpha\n")
        with mock.patch("fuzzyscope.cli.run_picker") as run_picker:
            with self.assertRaises(SystemExit) as ctx:
                self._main(["--input", str(path), "--select-1", "--query", "zzz"])
        self.assertEqual(ctx.exception.code, cli.EXIT_NO_MATCH)
        run_picker.assert_not_called()

    def test_several_matches_open_picker_on_loaded_candidates(self) -> None:
        path = self._write_input("alpha\nalps\nbeta\n")
        seen: list[int] = []

        def pick(stream, engine, style, **kwargs):
            seen.append(engine.matched_count)
            return engine.current_selection().text

        with mock.patch("fuzzyscope.cli.run_picker", side_effect=pick):
            output = self._main(["--input", str(path), "--select-1", "--query", "alp"])
        self.assertEqual(seen, [2])
        self.assertEqual(output, "alps\n")


class ConfigureLoggingTests(_CliTestCase):
    def test_log_file_receives_package_records(self) -> None:
        log_path = self.tmp / "fuzzyscope.log"
        package_logger = logging.getLogger("fuzzyscope")
        before = list(package_logger.handlers)
        previous_level = package_logger.level
        try:
            cli.configure_logging(log_path, verbose=True)
            logging.getLogger("fuzzyscope.store").debug("scoring pass marker")
            for handler in package_logger.handlers:
                handler.flush()
        finally:
            for handler in list(package_logger.handlers):
                if handler not in before:
                    handler.close()
                    package_logger.removeHandler(handler)
            package_logger.setLevel(previous_level)
        self.assertIn("scoring pass marker", log_path.read_text(encoding="utf-8"))

    def test_unwritable_log_file_exits(self) -> None:
        with self.assertRaises(SystemExit):
            cli.configure_logging(self.tmp / "missing-dir" / "x.log")


if __name__ == "__main__":
    unittest.main()

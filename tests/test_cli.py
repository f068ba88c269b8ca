import logging

import pytest

from vcfsparse.__main__ import build_parser, main
from vcfsparse.core.logging import ROOT_LOGGER, level_for_debug, setup_logging


class TestCli:
    def test_merge_to_file(self, tmp_path, vcf_text):
        a = tmp_path / "a.vcf"
        b = tmp_path / "b.vcf"
        a.write_text(vcf_text(["s1", "s2"], [("1", 100, "0/1", "1/1")]))
        b.write_text(vcf_text(["s0"], [("1", 100, "0/0")]))
        out = tmp_path / "out.txt"
        samples = tmp_path / "samples.txt"

        rc = main([str(a), str(b), "-o", str(out), "--sample-info-output", str(samples)])

        assert rc == 0
        assert out.read_text() == "2 1 3 2\n"
        assert samples.read_text() == "s0\ns1\ns2\n"

    def test_unicode_digit_chromosome_sorts_as_text(self, tmp_path, vcf_text):
        a = tmp_path / "a.vcf"
        b = tmp_path / "b.vcf"
        a.write_text(vcf_text(["s1"], [("\u00b2", 5, "1/1")]), encoding="utf-8")
        b.write_text(vcf_text(["s2"], [("1", 9, "0/1")]), encoding="utf-8")
        out = tmp_path / "out.txt"

        assert main([str(a), str(b), "-o", str(out)]) == 0
        assert out.read_text() == "2 1\n1 2\n"

    def test_invalid_format_exits_nonzero(self, tmp_path, vcf_text, capsys):
        a = tmp_path / "a.vcf"
        a.write_text(vcf_text(["s1"], []))

        assert main([str(a), "--format", "tsv"]) == 1
        assert "format" in capsys.readouterr().err

    def test_missing_input_exits_nonzero(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.vcf")]) == 1
        assert "error" in capsys.readouterr().err

    def test_requires_an_input(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args([])
        assert exc.value.code == 2

    def test_debug_is_counted(self):
        args = build_parser().parse_args(["-dd", "x.vcf"])
        assert args.debug == 2


class TestLoggingSetup:
    @pytest.mark.parametrize("debug, level", [(0, logging.WARNING), (1, logging.INFO), (3, logging.DEBUG)])
    def test_levels(self, debug, level):
        assert level_for_debug(debug) == level

    def test_single_handler(self):
        setup_logging(1)
        logger = setup_logging(2)
        assert logger.name == ROOT_LOGGER
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

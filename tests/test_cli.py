"""Tests for the command-line tool."""

import json
import os

import pytest

from pixelforge.main import build_parser, main


def _table(out):
    """Tab-separated output lines, skipping any interleaved log lines."""
    return [line for line in out.splitlines() if "\t" in line]


class TestFiltersCommand:

    def test_lists_catalog(self, capsys):
        assert main(["filters"]) == 0
        lines = _table(capsys.readouterr().out)
        assert len(lines) == 91
        assert lines[0] == "none\tOriginal\tPopular"

    def test_category(self, capsys):
        assert main(["filters", "--category", "Popular"]) == 0
        assert len(_table(capsys.readouterr().out)) == 6

    def test_search(self, capsys):
        assert main(["filters", "--search", "sepia"]) == 0
        assert [line.split("\t")[0] for line in _table(capsys.readouterr().out)] == ["sepia"]


class TestMatrixCommand:

    def test_identity(self, capsys):
        assert main(["matrix"]) == 0
        rows = [[float(v) for v in line.split()] for line in capsys.readouterr().out.splitlines()]
        assert rows == [
            [1, 0, 0, 0, 0],
            [0, 1, 0, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 0, 1, 0],
        ]

    def test_with_values(self, capsys):
        assert main(["matrix", "--brightness", "0.2", "--contrast", "1.3", "--saturation", "0.5"]) == 0
        first = [float(v) for v in capsys.readouterr().out.splitlines()[0].split()]
        assert first == pytest.approx([0.78845, 0.46475, 0.0468, 0.0, 0.05], abs=1e-6)

    def test_unknown_filter(self, capsys):
        assert main(["matrix", "--filter", "nope"]) == 1
        assert "Unknown filter 'nope'" in capsys.readouterr().err


class TestRenderCommand:

    def test_render_to_directory(self, tmp_path, sample_image_uint8, png_bytes, capsys):
        source = tmp_path / "in.png"
        source.write_bytes(png_bytes(sample_image_uint8))
        out_dir = tmp_path / "out"

        code = main(["render", str(source), "--filter", "vivid", "--format", "png", "--output-dir", str(out_dir)])

        assert code == 0
        written = capsys.readouterr().out.splitlines()[-1]
        assert os.path.dirname(written) == str(out_dir)
        assert written.endswith(".png")
        assert os.path.isfile(written)

    def test_render_reports_failures(self, tmp_path, capsys):
        code = main(["render", str(tmp_path / "missing.jpg"), "--output-dir", str(tmp_path)])
        assert code == 1
        assert "missing.jpg" in capsys.readouterr().err

    def test_render_bad_format(self, tmp_path, sample_image_uint8, png_bytes, capsys):
        source = tmp_path / "in.png"
        source.write_bytes(png_bytes(sample_image_uint8))
        assert main(["render", str(source), "--format", "bmp", "--output-dir", str(tmp_path)]) == 1


class TestPresetsCommand:

    def test_save_list_export_import(self, tmp_path, capsys):
        store = str(tmp_path / "store.json")

        assert main(["presets", "--store", store, "save", "Crunchy", "--contrast", "1.4", "--filter", "noir"]) == 0
        assert "Crunchy" in capsys.readouterr().out

        assert main(["presets", "--store", store, "list"]) == 0
        assert _table(capsys.readouterr().out) == ["Crunchy\tNoir"]

        assert main(["presets", "--store", store, "export", "Crunchy"]) == 0
        payload = capsys.readouterr().out.splitlines()[-1]
        assert json.loads(payload)["adjustments"]["contrast"] == 1.4

        other = str(tmp_path / "other.json")
        assert main(["presets", "--store", other, "import", payload]) == 0
        assert "Imported preset 'Crunchy'" in capsys.readouterr().out

    def test_export_unknown(self, tmp_path, capsys):
        assert main(["presets", "--store", str(tmp_path / "s.json"), "export", "Ghost"]) == 1
        assert "Ghost" in capsys.readouterr().err

    def test_import_invalid(self, tmp_path, capsys):
        assert main(["presets", "--store", str(tmp_path / "s.json"), "import", "{}"]) == 1


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])

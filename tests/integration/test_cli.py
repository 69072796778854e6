"""Tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from retrofont import __version__
from retrofont.cli.app import app
from retrofont.domain import FontType
from retrofont.io import parse_bundle, serialize_bundle

runner = CliRunner()


@pytest.fixture
def tdf_file(tmp_path, block_record, outline_record):
    """Bundle with a block font and an outline font."""
    path = tmp_path / "fonts.tdf"
    path.write_bytes(serialize_bundle([block_record, outline_record]))
    return path


@pytest.fixture
def flf_file(tmp_path, figlet_text):
    """FIGlet font with printable characters only."""
    path = tmp_path / "small.flf"
    path.write_text(figlet_text, encoding="utf-8")
    return path


@pytest.fixture
def umlaut_flf_file(tmp_path, figlet_text_with_umlaut):
    """FIGlet font with an extra 'Ä'."""
    path = tmp_path / "umlaut.flf"
    path.write_text(figlet_text_with_umlaut, encoding="utf-8")
    return path


class TestGlobalOptions:
    """Tests for options shared by all commands."""

    def test_version(self):
        """Test --version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_log_level(self, tdf_file):
        """Test an unknown log level is rejected."""
        result = runner.invoke(
            app, ["--log-level", "LOUD", "inspect", "--font", str(tdf_file)]
        )
        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_log_file(self, tmp_path, tdf_file):
        """Test --log-file receives structured log lines."""
        log_path = tmp_path / "retrofont.log"
        result = runner.invoke(
            app, ["--log-file", str(log_path), "inspect", "--font", str(tdf_file)]
        )
        assert result.exit_code == 0
        assert "Parsed TDF bundle" in log_path.read_text(encoding="utf-8")

    def test_lenient_accepts_unterminated_glyph(
        self, tmp_path, record_builder, bundle_builder
    ):
        """Test --lenient keeps a glyph whose stream lacks its terminator."""
        path = tmp_path / "open.tdf"
        record = record_builder(b"OPEN", 1, 1, bytes((1, 1)) + b"x", {"A": 0})
        path.write_bytes(bundle_builder(record))

        result = runner.invoke(app, ["render", "--font", str(path), "--text", "A"])
        assert result.exit_code == 1
        assert "no terminator" in result.output

        result = runner.invoke(app, ["--lenient", "render", "--font", str(path), "--text", "A"])
        assert result.exit_code == 0
        assert "x" in result.output


class TestRenderCommand:
    """Tests for the render command."""

    def test_render_block(self, tdf_file):
        """Test rendering text with the first font."""
        result = runner.invoke(app, ["render", "--font", str(tdf_file), "--text", "AB"])
        assert result.exit_code == 0
        assert "█▀B B" in result.output
        assert "█▄" in result.output

    def test_render_second_font_with_style(self, tdf_file):
        """Test --num selects the font and --outline the style."""
        result = runner.invoke(
            app,
            ["render", "--font", str(tdf_file), "--text", "O", "--num", "2", "--outline", "5"],
        )
        assert result.exit_code == 0
        assert "╔═╕" in result.output

    def test_render_edit_mode(self, tdf_file):
        """Test --edit shows hard blanks."""
        result = runner.invoke(
            app, ["render", "--font", str(tdf_file), "--text", "B", "--edit"]
        )
        assert result.exit_code == 0
        assert "B·B" in result.output

    def test_render_figlet(self, flf_file):
        """Test FIGlet fonts render too."""
        result = runner.invoke(app, ["render", "--font", str(flf_file), "--text", "Hi"])
        assert result.exit_code == 0
        assert "H|i|" in result.output

    def test_font_number_out_of_range(self, tdf_file):
        """Test a font number past the bundle fails."""
        result = runner.invoke(
            app, ["render", "--font", str(tdf_file), "--text", "A", "--num", "3"]
        )
        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_outline_style_out_of_range(self, tdf_file):
        """Test style 19 is rejected by option validation."""
        result = runner.invoke(
            app, ["render", "--font", str(tdf_file), "--text", "A", "--outline", "19"]
        )
        assert result.exit_code != 0

    def test_strict_missing_glyph(self, tdf_file):
        """Test --strict fails on undefined characters."""
        result = runner.invoke(
            app, ["render", "--font", str(tdf_file), "--text", "A?", "--strict"]
        )
        assert result.exit_code == 1
        assert "not defined" in result.output

    def test_missing_file(self, tmp_path):
        """Test a nonexistent font path fails."""
        result = runner.invoke(
            app, ["render", "--font", str(tmp_path / "none.tdf"), "--text", "A"]
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_malformed_font(self, tmp_path):
        """Test a broken bundle reports the parse error."""
        path = tmp_path / "broken.tdf"
        path.write_bytes(b"\x13TheDraw FONTS file\x1a\x01\x02\x03\x04")
        result = runner.invoke(app, ["render", "--font", str(path), "--text", "A"])
        assert result.exit_code == 1
        assert "indicator mismatch" in result.output

    def test_damaged_header(self, tmp_path):
        """Test a bundle with a wrong id length byte reports that byte."""
        path = tmp_path / "damaged.tdf"
        path.write_bytes(b"\x14TheDraw FONTS file\x1a\x00")
        result = runner.invoke(app, ["render", "--font", str(path), "--text", "A"])
        assert result.exit_code == 1
        assert "id length mismatch" in result.output


class TestConvertCommand:
    """Tests for the convert command."""

    def test_default_output_path(self, flf_file):
        """Test conversion writes <stem>.tdf next to the input."""
        result = runner.invoke(app, ["convert", "--input", str(flf_file)])
        assert result.exit_code == 0

        output = flf_file.with_suffix(".tdf")
        (record,) = parse_bundle(output.read_bytes())
        assert record.font_type is FontType.COLOR
        assert record.name == "small"
        assert record.glyph_count == 94

    def test_block_with_spacing(self, tmp_path, flf_file):
        """Test --type and --spacing."""
        output = tmp_path / "out.tdf"
        result = runner.invoke(
            app,
            [
                "convert",
                "--input",
                str(flf_file),
                "--output",
                str(output),
                "--type",
                "block",
                "--spacing",
                "4",
            ],
        )
        assert result.exit_code == 0
        (record,) = parse_bundle(output.read_bytes())
        assert record.font_type is FontType.BLOCK
        assert record.spacing == 4

    def test_outline_refused(self, flf_file):
        """Test outline targets fail with a conversion error."""
        result = runner.invoke(app, ["convert", "--input", str(flf_file), "--type", "outline"])
        assert result.exit_code == 1
        assert "Outline" in result.output
        assert not flf_file.with_suffix(".tdf").exists()

    def test_unknown_type(self, flf_file):
        """Test an unknown type name fails."""
        result = runner.invoke(app, ["convert", "--input", str(flf_file), "--type", "neon"])
        assert result.exit_code == 1
        assert "Invalid font type" in result.output

    def test_incompatible_characters(self, umlaut_flf_file):
        """Test characters outside '!'..'~' fail unless dropped explicitly."""
        result = runner.invoke(app, ["convert", "--input", str(umlaut_flf_file)])
        assert result.exit_code == 1
        assert "cannot be converted" in result.output

        result = runner.invoke(
            app, ["convert", "--input", str(umlaut_flf_file), "--printable-only"]
        )
        assert result.exit_code == 0
        assert umlaut_flf_file.with_suffix(".tdf").exists()

    def test_tdf_input_refused(self, tdf_file, tmp_path):
        """Test TDF input is not accepted for conversion."""
        result = runner.invoke(
            app,
            ["convert", "--input", str(tdf_file), "--output", str(tmp_path / "x.tdf")],
        )
        assert result.exit_code == 1
        assert "only accepts FIGlet" in result.output

    def test_tag_character_in_art(self, tmp_path, figlet_text):
        """Test art using the '&' tag byte fails and writes nothing."""
        path = tmp_path / "amp.flf"
        path.write_text(figlet_text.replace("+|@", "&|@"), encoding="utf-8")
        result = runner.invoke(app, ["convert", "--input", str(path)])
        assert result.exit_code == 1
        assert "tag byte" in result.output
        assert not path.with_suffix(".tdf").exists()


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_inspect_bundle(self, tdf_file):
        """Test every font of a bundle is listed."""
        result = runner.invoke(app, ["inspect", "--font", str(tdf_file)])
        assert result.exit_code == 0
        assert "BLOCKY" in result.output
        assert "OUTLINE" in result.output
        assert "Block" in result.output
        assert "2 fonts" in result.output

    def test_inspect_figlet(self, flf_file):
        """Test FIGlet fonts are listed with their format."""
        result = runner.invoke(app, ["inspect", "--font", str(flf_file)])
        assert result.exit_code == 0
        assert "FIGlet" in result.output
        assert "small" in result.output
